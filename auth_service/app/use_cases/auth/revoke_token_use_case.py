"""
Revoke Token and Logout Use Cases

Both verify that the caller owns the presented refresh token, then rotate
signing keys. Rotation is the revocation: no token list is kept.
"""

import logging

from auth_service.app.services.token_service import TokenService
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.app.settings import AuthSettings
from auth_service.domain.signing_keys import SigningKeys
from auth_service.libs.result import Result, Return
from .dtos import MessageResponse
from .token_owner import load_refresh_token_owner

logger = logging.getLogger(__name__)


class RevokeTokenUseCase:
    """
    Use case for revoking refresh tokens.

    Business Rules:
    - Rotates only the refresh key: every outstanding refresh token of the
      user dies, access tokens live until their own expiry
    """

    def __init__(self, uow: UnitOfWork, settings: AuthSettings):
        self.uow = uow
        self.tokens = TokenService(settings)

    async def execute(self, refresh_token: str) -> Result[MessageResponse]:
        async with self.uow:
            owner = await load_refresh_token_owner(self.uow, self.tokens, refresh_token)
            if owner.is_err():
                return Return.err(owner.error)

            user, _ = owner.value
            keys = SigningKeys.of(user).rotate_refresh()
            await self.uow.users.update(
                user.id, {"refresh_signing_key": keys.refresh_signing_key}
            )
            await self.uow.commit()

            logger.info(f"Refresh tokens revoked for user: {user.id}")
            return Return.ok(MessageResponse(message="Refresh token revoked"))


class LogoutUseCase:
    """
    Use case for logging out everywhere.

    Business Rules:
    - Rotates both keys: every outstanding access and refresh token of the
      user dies immediately
    """

    def __init__(self, uow: UnitOfWork, settings: AuthSettings):
        self.uow = uow
        self.tokens = TokenService(settings)

    async def execute(self, refresh_token: str) -> Result[MessageResponse]:
        async with self.uow:
            owner = await load_refresh_token_owner(self.uow, self.tokens, refresh_token)
            if owner.is_err():
                return Return.err(owner.error)

            user, _ = owner.value
            keys = SigningKeys.of(user).rotate_all()
            await self.uow.users.update(user.id, keys.changes())
            await self.uow.commit()

            logger.info(f"User logged out, all tokens revoked: {user.id}")
            return Return.ok(MessageResponse(message="Logged out successfully"))
