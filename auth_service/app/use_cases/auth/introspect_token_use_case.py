"""
Introspect Token Use Case

Reports whether a token is currently usable. Never fails: every problem is
folded into an inactive response with a short reason.
"""

import logging
from uuid import UUID

from auth_service.app.services import token_codec
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.app.settings import AuthSettings
from auth_service.domain.account_state import AccountState
from auth_service.domain.entities import TokenType
from auth_service.domain.errors import ErrorCode
from auth_service.domain.signing_keys import SigningKeyMissingError, SigningKeys
from auth_service.libs.result import Result, Return
from .dtos import TokenIntrospectionResponse

logger = logging.getLogger(__name__)

REASON_MALFORMED = "malformed"
REASON_EXPIRED = "expired"
REASON_USER_NOT_FOUND = "user not found"
REASON_SIGNATURE_INVALID = "signature invalid"
REASON_ISSUER_MISMATCH = "issuer mismatch"
REASON_AUDIENCE_MISMATCH = "audience mismatch"
REASON_ACCOUNT_INACTIVE = "account inactive"

_VERIFY_REASONS = {
    ErrorCode.MALFORMED_TOKEN: REASON_MALFORMED,
    ErrorCode.TOKEN_EXPIRED: REASON_EXPIRED,
    ErrorCode.INVALID_SIGNATURE: REASON_SIGNATURE_INVALID,
    ErrorCode.ISSUER_MISMATCH: REASON_ISSUER_MISMATCH,
    ErrorCode.AUDIENCE_MISMATCH: REASON_AUDIENCE_MISMATCH,
}


def _inactive(reason: str) -> Result[TokenIntrospectionResponse]:
    return Return.ok(TokenIntrospectionResponse(active=False, error=reason))


class IntrospectTokenUseCase:
    """
    Use case for token introspection.

    Business Rules:
    - Access and refresh tokens are both accepted; the type claim selects
      which of the user's keys to check against
    - Signature, expiry, issuer and audience are all checked
    - A valid token of an account that cannot authenticate is inactive
    """

    def __init__(self, uow: UnitOfWork, settings: AuthSettings):
        self.uow = uow
        self.settings = settings

    async def execute(self, token: str) -> Result[TokenIntrospectionResponse]:
        unverified = token_codec.decode_unverified(token)
        if unverified.is_err():
            return _inactive(REASON_MALFORMED)

        claims = unverified.value
        try:
            user_id = UUID(str(claims.get("sub")))
            token_type = TokenType(claims.get("type"))
        except ValueError:
            return _inactive(REASON_MALFORMED)

        if token_type not in (TokenType.access, TokenType.refresh):
            return _inactive(REASON_MALFORMED)

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return _inactive(REASON_USER_NOT_FOUND)

            try:
                key = SigningKeys.of(user).key_for(token_type)
            except SigningKeyMissingError:
                logger.error(f"Signing key missing for user {user.id}")
                return _inactive(REASON_SIGNATURE_INVALID)

            verified = token_codec.verify_token(
                token,
                key,
                issuer=self.settings.issuer,
                audience=self.settings.audience,
                algorithms=self.settings.allowed_algorithms,
                leeway_seconds=self.settings.leeway_seconds,
            )
            if verified.is_err():
                return _inactive(
                    _VERIFY_REASONS.get(verified.error.code, REASON_MALFORMED)
                )

            if not AccountState.of(user).can_authenticate():
                return _inactive(REASON_ACCOUNT_INACTIVE)

        claims = verified.value
        return Return.ok(
            TokenIntrospectionResponse(
                active=True,
                sub=str(claims.get("sub")),
                email=claims.get("email"),
                iss=claims.get("iss"),
                aud=claims.get("aud"),
                exp=claims.get("exp"),
                iat=claims.get("iat"),
                token_type=token_type.value,
            )
        )
