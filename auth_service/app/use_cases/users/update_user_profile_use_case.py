"""
Update User Profile Use Case

Administrative edit of profile fields. Credentials are not editable here;
they change only through signature renewal, which also rotates the keys.
"""

import logging
import secrets
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from auth_service.app.services.notification_service import INotificationService
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.app.settings import AuthSettings
from auth_service.app.use_cases.auth.dtos import UserInfo
from auth_service.domain.account_state import AccountState
from auth_service.domain.errors import ErrorCode
from auth_service.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)


class UpdateUserProfileCommand(BaseModel):
    """Fields left as None are not changed"""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None


class UpdateUserProfileUseCase:
    """
    Use case for updating a user's profile.

    Business Rules:
    - User must exist (USER_NOT_FOUND)
    - A new email must not belong to another account (EMAIL_ALREADY_EXISTS)
    - A new email is unverified: a fresh verification token is issued and
      sent to the new address
    - Only changed fields are written
    """

    def __init__(
        self,
        uow: UnitOfWork,
        settings: AuthSettings,
        notifier: INotificationService,
    ):
        self.uow = uow
        self.settings = settings
        self.notifier = notifier

    async def execute(
        self, user_id: UUID, command: UpdateUserProfileCommand
    ) -> Result[UserInfo]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if not user:
                return Return.err(Error(ErrorCode.USER_NOT_FOUND, "User not found"))

            changes = {}
            if command.first_name is not None and command.first_name != user.first_name:
                changes["first_name"] = command.first_name
            if command.last_name is not None and command.last_name != user.last_name:
                changes["last_name"] = command.last_name

            new_state = None
            if command.email is not None and command.email != user.email:
                owner = await self.uow.users.get_by_email(command.email)
                if owner is not None and owner.id != user.id:
                    return Return.err(
                        Error(ErrorCode.EMAIL_ALREADY_EXISTS, "Email already registered")
                    )

                state = AccountState.of(user)
                new_state = state.require_email_verification(
                    secrets.token_urlsafe(32),
                    self.settings.token_policy.email_verification_ttl,
                )
                changes["email"] = command.email
                changes.update(new_state.changes(since=state))

            if not changes:
                return Return.ok(UserInfo.of(user))

            user = await self.uow.users.update(user.id, changes)
            await self.uow.commit()

            logger.info(f"Profile updated for user {user.id}: {sorted(changes)}")

            if new_state is not None:
                try:
                    await self.notifier.send_verification_code(
                        user.email, new_state.verification_token
                    )
                except Exception:
                    logger.exception(
                        f"Failed to deliver verification token to user {user.id}"
                    )

            return Return.ok(UserInfo.of(user))
