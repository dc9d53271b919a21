"""
Use Case: Delete User

Permanent removal of an account. Tokens die with it: their subject no
longer resolves, which every token operation reports as INVALID_TOKEN.
"""

import logging
from uuid import UUID

from pydantic import BaseModel

from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.domain.errors import ErrorCode
from auth_service.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)


class DeleteUserResponse(BaseModel):
    """Response DTO for DeleteUserUseCase"""

    user_id: str
    deleted: bool


class DeleteUserUseCase:
    """
    Hard delete a user.

    Business Logic:
    1. Validate user exists (USER_NOT_FOUND)
    2. Delete the row and commit

    Cannot be undone. Use the deactivate action for a reversible shutdown.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[DeleteUserResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if not user:
                return Return.err(Error(ErrorCode.USER_NOT_FOUND, "User not found"))

            deleted = await self.uow.users.delete(user_id)
            await self.uow.commit()

            logger.info(f"User permanently deleted: {user_id}")

            return Return.ok(DeleteUserResponse(user_id=str(user_id), deleted=deleted))
