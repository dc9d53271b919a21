"""Use Cases: Look Up a User by ID or Email"""

from uuid import UUID

from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.app.use_cases.auth.dtos import UserInfo
from auth_service.domain.errors import ErrorCode
from auth_service.libs.result import Error, Result, Return

USER_NOT_FOUND = Error(ErrorCode.USER_NOT_FOUND, "User not found")


class GetUserUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[UserInfo]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if not user:
                return Return.err(USER_NOT_FOUND)

            return Return.ok(UserInfo.of(user))


class GetUserByEmailUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, email: str) -> Result[UserInfo]:
        async with self.uow:
            user = await self.uow.users.get_by_email(email)
            if not user:
                return Return.err(USER_NOT_FOUND)

            return Return.ok(UserInfo.of(user))
