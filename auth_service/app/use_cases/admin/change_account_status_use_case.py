"""
Use Case: Change Account Status

Administrative status changes driven through the account state machine.
"""

import logging
from enum import Enum
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.domain.account_state import AccountState, AccountStatusSummary
from auth_service.domain.entities import AccountLockReason
from auth_service.domain.errors import ErrorCode
from auth_service.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)


class AccountAction(str, Enum):
    activate = "activate"
    deactivate = "deactivate"
    restore = "restore"
    suspend = "suspend"
    block = "block"
    unlock = "unlock"


class ChangeAccountStatusResponse(BaseModel):
    """Response DTO for ChangeAccountStatusUseCase"""

    user_id: str
    action: AccountAction
    account: AccountStatusSummary


class ChangeAccountStatusUseCase:
    """
    Apply an administrative action to an account.

    Business Logic:
    1. Validate user exists
    2. Run the transition on AccountState (INVALID_STATE_TRANSITION when the
       table forbids it; blocked is terminal)
    3. Persist only the changed fields

    restore only undoes a deactivation (inactive -> active).
    unlock clears lockout and the failed-attempt counter without touching
    the status, so it is always allowed.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @staticmethod
    def _apply(
        state: AccountState, action: AccountAction, reason: Optional[AccountLockReason]
    ) -> Result[AccountState]:
        if action == AccountAction.activate:
            return state.activate()
        if action == AccountAction.deactivate:
            return state.deactivate()
        if action == AccountAction.restore:
            return state.restore()
        if action == AccountAction.suspend:
            return state.suspend(reason or AccountLockReason.administrative_action)
        if action == AccountAction.block:
            return state.block(reason or AccountLockReason.administrative_action)
        return Return.ok(state.unlock())

    async def execute(
        self,
        user_id: UUID,
        action: AccountAction,
        reason: Optional[AccountLockReason] = None,
    ) -> Result[ChangeAccountStatusResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if not user:
                return Return.err(Error(ErrorCode.USER_NOT_FOUND, "User not found"))

            state = AccountState.of(user)
            changed = self._apply(state, action, reason)
            if changed.is_err():
                return Return.err(changed.error)

            new_state = changed.value
            changes = new_state.changes(since=state)
            if changes:
                await self.uow.users.update(user.id, changes)
                await self.uow.commit()

            logger.info(
                f"Account {user.id} {action.value}: "
                f"{state.auth_status.value} -> {new_state.auth_status.value}"
            )

            return Return.ok(
                ChangeAccountStatusResponse(
                    user_id=str(user.id),
                    action=action,
                    account=new_state.status_summary(),
                )
            )
