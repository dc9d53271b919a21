"""
Token issuance and verification against a user's current signing keys.

Every verification takes the User just loaded from storage, so the key used
is always the current one; keys are never cached here.
"""

import logging
import secrets
from datetime import datetime
from typing import Optional, Union
from uuid import UUID

from pydantic import BaseModel, ValidationError

from auth_service.app.settings import AuthSettings
from auth_service.domain.entities import (
    AccessTokenPayload,
    RefreshTokenPayload,
    TokenType,
    User,
    parse_token_payload,
)
from auth_service.domain.errors import ErrorCode
from auth_service.domain.signing_keys import SigningKeyMissingError, SigningKeys
from auth_service.libs.result import Error, Result, Return

from . import token_codec

logger = logging.getLogger(__name__)


class TokenPair(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "Bearer"
    expires_in: int
    refresh_expires_in: int


class TokenService:
    def __init__(self, settings: AuthSettings):
        self.settings = settings

    def _issue(
        self, claims: dict, key: str, token_type: TokenType, now: Optional[datetime]
    ) -> str:
        return token_codec.issue_token(
            claims,
            key,
            ttl=self.settings.token_policy.ttl_for(token_type),
            algorithm=self.settings.algorithm,
            issuer=self.settings.issuer,
            audience=self.settings.audience,
            now=now,
        )

    def issue_pair(self, user: User, now: Optional[datetime] = None) -> Result[TokenPair]:
        """Sign a fresh access/refresh pair with the user's current keys"""
        try:
            keys = SigningKeys.of(user)
        except SigningKeyMissingError:
            logger.error(f"Signing key missing for user {user.id}")
            return Return.err(
                Error(ErrorCode.SIGNING_KEY_MISSING, "User signing keys are missing")
            )

        access_token = self._issue(
            {
                "sub": str(user.id),
                "email": user.email,
                "type": TokenType.access.value,
                "jti": secrets.token_urlsafe(16),
                "is_active": user.is_active,
                "email_verified": user.email_verified,
            },
            keys.access_signing_key,
            TokenType.access,
            now,
        )
        refresh_token = self._issue(
            {
                "sub": str(user.id),
                "email": user.email,
                "type": TokenType.refresh.value,
                "tokenId": secrets.token_urlsafe(16),
            },
            keys.refresh_signing_key,
            TokenType.refresh,
            now,
        )

        policy = self.settings.token_policy
        return Return.ok(
            TokenPair(
                access_token=access_token,
                refresh_token=refresh_token,
                expires_in=int(policy.access_ttl.total_seconds()),
                refresh_expires_in=int(policy.refresh_ttl.total_seconds()),
            )
        )

    @staticmethod
    def subject_of(token: str) -> Result[UUID]:
        """
        Extract the claimed subject without verifying anything.

        Any failure is reported as INVALID_TOKEN so callers cannot tell a
        malformed token from one naming an unknown user.
        """
        claims = token_codec.decode_unverified(token)
        if claims.is_err():
            return Return.err(Error(ErrorCode.INVALID_TOKEN, "Invalid token"))

        try:
            return Return.ok(UUID(str(claims.value.get("sub"))))
        except ValueError:
            return Return.err(Error(ErrorCode.INVALID_TOKEN, "Invalid token"))

    def verify(
        self, token: str, user: User, token_type: TokenType
    ) -> Result[Union[AccessTokenPayload, RefreshTokenPayload]]:
        """
        Verify a token against the user's current key for token_type.

        Returns:
            Result with the typed payload, or Error INVALID_TOKEN /
            TOKEN_EXPIRED / SIGNING_KEY_MISSING
        """
        try:
            key = SigningKeys.of(user).key_for(token_type)
        except SigningKeyMissingError:
            logger.error(f"Signing key missing for user {user.id}")
            return Return.err(
                Error(ErrorCode.SIGNING_KEY_MISSING, "User signing keys are missing")
            )

        verified = token_codec.verify_token(
            token,
            key,
            issuer=self.settings.issuer,
            audience=self.settings.audience,
            algorithms=self.settings.allowed_algorithms,
            leeway_seconds=self.settings.leeway_seconds,
        )
        if verified.is_err():
            if verified.error.code == ErrorCode.TOKEN_EXPIRED:
                return Return.err(Error(ErrorCode.TOKEN_EXPIRED, "Token has expired"))
            logger.info(
                f"{token_type.value} token rejected for user {user.id}: "
                f"{verified.error.code}"
            )
            return Return.err(Error(ErrorCode.INVALID_TOKEN, f"Invalid {token_type.value} token"))

        try:
            payload = parse_token_payload(verified.value)
        except ValidationError:
            return Return.err(Error(ErrorCode.INVALID_TOKEN, f"Invalid {token_type.value} token"))

        if payload.type != token_type.value or payload.user_id != user.id:
            return Return.err(Error(ErrorCode.INVALID_TOKEN, f"Invalid {token_type.value} token"))

        return Return.ok(payload)
