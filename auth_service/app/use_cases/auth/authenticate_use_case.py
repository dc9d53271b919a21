"""
Authenticate Use Case

Turns a bearer access token into the identity seen by authorization layers.
"""

from auth_service.app.services.token_service import TokenService
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.app.settings import AuthSettings
from auth_service.domain.account_state import AccountState
from auth_service.domain.entities import AuthToken, TokenType
from auth_service.domain.errors import ErrorCode
from auth_service.libs.result import Error, Result, Return
from .dtos import AuthenticatedIdentity


class AuthenticateUseCase:
    """
    Use case for access token authentication.

    Business Rules:
    - Token must verify against the user's current access key, so logout
      and credential renewal cut access immediately
    - The account is re-gated on every request
    """

    def __init__(self, uow: UnitOfWork, settings: AuthSettings):
        self.uow = uow
        self.tokens = TokenService(settings)

    async def execute(self, access_token: str) -> Result[AuthenticatedIdentity]:
        subject = self.tokens.subject_of(access_token)
        if subject.is_err():
            return Return.err(subject.error)

        async with self.uow:
            user = await self.uow.users.get_by_id(subject.value)
            if user is None:
                return Return.err(Error(ErrorCode.INVALID_TOKEN, "Invalid access token"))

            payload = self.tokens.verify(access_token, user, TokenType.access)
            if payload.is_err():
                return Return.err(payload.error)

            state = AccountState.of(user)
            if state.is_locked():
                return Return.err(
                    Error(ErrorCode.ACCOUNT_LOCKED, "Account is temporarily locked")
                )
            if not state.can_authenticate():
                return Return.err(
                    Error(ErrorCode.ACCOUNT_DEACTIVATED, "Account is deactivated")
                )

            token = AuthToken.from_payload(access_token, payload.value)
            return Return.ok(
                AuthenticatedIdentity(
                    user_id=str(token.user_id),
                    email=user.email,
                    token_type=token.type.value,
                    issued_at=token.issued_at,
                    expires_at=token.expires_at,
                    expires_in=token.remaining_seconds(),
                    expires_soon=token.will_expire_soon(),
                    email_verified=user.email_verified,
                )
            )
