"""
Use Case: Revoke All Tokens of a User

Administrative kill switch. Rotates both signing keys so every access and
refresh token the user holds stops verifying at once.
"""

import logging
from uuid import UUID

from pydantic import BaseModel

from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.domain.errors import ErrorCode
from auth_service.domain.signing_keys import SigningKeys
from auth_service.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)


class RevokeUserTokensResponse(BaseModel):
    """Response DTO for RevokeUserTokensUseCase"""

    user_id: str
    status: str


class RevokeUserTokensUseCase:
    """
    Revoke every token of a user.

    Business Logic:
    1. Validate user exists
    2. Replace both signing keys in one update

    Idempotent: revoking again just rotates to yet another pair of keys
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[RevokeUserTokensResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if not user:
                return Return.err(Error(ErrorCode.USER_NOT_FOUND, "User not found"))

            await self.uow.users.update(user.id, SigningKeys.generate().changes())
            await self.uow.commit()

            logger.info(f"All tokens revoked by administrator for user: {user.id}")

            return Return.ok(
                RevokeUserTokensResponse(user_id=str(user.id), status="revoked")
            )
