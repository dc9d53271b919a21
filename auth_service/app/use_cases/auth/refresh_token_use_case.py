"""
Refresh Token Use Case

Exchanges a valid refresh token for a fresh access/refresh pair.
"""

import logging

from auth_service.app.services.token_service import TokenService
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.app.settings import AuthSettings
from auth_service.domain.account_state import AccountState
from auth_service.domain.errors import ErrorCode
from auth_service.libs.result import Error, Result, Return
from .dtos import RefreshTokenResponse
from .token_owner import load_refresh_token_owner

logger = logging.getLogger(__name__)


class RefreshTokenUseCase:
    """
    Use case for refreshing tokens.

    Business Rules:
    - Token must verify against the user's *current* refresh key; a token
      signed with a rotated key is rejected even before it expires
    - Account must pass the authentication gate (active, not locked)
    - The refresh key is not rotated here, so an unexpired refresh token
      can be used again until it expires or is revoked
    """

    def __init__(self, uow: UnitOfWork, settings: AuthSettings):
        self.uow = uow
        self.tokens = TokenService(settings)

    async def execute(self, refresh_token: str) -> Result[RefreshTokenResponse]:
        """
        Execute refresh token use case.

        Args:
            refresh_token: Refresh token presented by the client

        Returns:
            Result with RefreshTokenResponse containing new tokens, or Error
        """
        async with self.uow:
            owner = await load_refresh_token_owner(self.uow, self.tokens, refresh_token)
            if owner.is_err():
                return Return.err(owner.error)

            user, _ = owner.value
            state = AccountState.of(user)

            if state.is_locked():
                return Return.err(
                    Error(ErrorCode.ACCOUNT_LOCKED, "Account is temporarily locked")
                )

            if not state.can_authenticate():
                return Return.err(
                    Error(ErrorCode.ACCOUNT_DEACTIVATED, "Account is deactivated")
                )

            tokens = self.tokens.issue_pair(user)
            if tokens.is_err():
                return Return.err(tokens.error)

            logger.info(f"Token refreshed for user: {user.id}")

            pair = tokens.value
            return Return.ok(
                RefreshTokenResponse(
                    access_token=pair.access_token,
                    refresh_token=pair.refresh_token,
                    token_type=pair.token_type,
                    expires_in=pair.expires_in,
                )
            )
