"""Use Case: Get Account Status"""

from uuid import UUID

from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.domain.account_state import AccountState, AccountStatusSummary
from auth_service.domain.errors import ErrorCode
from auth_service.libs.result import Error, Result, Return


class GetAccountStatusUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[AccountStatusSummary]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if not user:
                return Return.err(Error(ErrorCode.USER_NOT_FOUND, "User not found"))

            return Return.ok(AccountState.of(user).status_summary())
