"""
Resend Verification Email Use Case

Handles resending email verification tokens to users.
"""

import logging
import secrets

from auth_service.app.services.notification_service import INotificationService
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.app.settings import AuthSettings
from auth_service.domain.account_state import AccountState
from auth_service.domain.errors import ErrorCode
from auth_service.libs.result import Error, Result, Return
from .dtos import ResendVerificationResponse

logger = logging.getLogger(__name__)

SENT = ResendVerificationResponse(
    status="sent",
    message="If the email exists, a verification link has been sent",
)


class ResendVerificationUseCase:
    """
    Use case for resending email verification.

    Business Rules:
    - Unknown email returns the same success as a real send (no enumeration)
    - Already verified accounts get ALREADY_VERIFIED
    - New token replaces old token (invalidates previous)
    - Token expiry reset to 24 hours from now
    """

    def __init__(
        self, uow: UnitOfWork, settings: AuthSettings, notifier: INotificationService
    ):
        self.uow = uow
        self.settings = settings
        self.notifier = notifier

    async def execute(self, email: str) -> Result[ResendVerificationResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None:
                return Return.ok(SENT)

            state = AccountState.of(user)
            if state.email_verified:
                return Return.err(
                    Error(ErrorCode.ALREADY_VERIFIED, "Email is already verified")
                )

            reissued = state.issue_verification_token(
                secrets.token_urlsafe(32),
                self.settings.token_policy.email_verification_ttl,
            )
            await self.uow.users.update(user.id, reissued.changes(since=state))
            await self.uow.commit()

            try:
                await self.notifier.send_verification_code(
                    user.email, reissued.verification_token
                )
            except Exception:
                logger.exception(
                    f"Failed to deliver verification token to user {user.id}"
                )

            return Return.ok(SENT)
