"""
Verify Email Use Case

Handles email verification via secure token.
"""

import logging

from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.domain.account_state import AccountState
from auth_service.domain.errors import ErrorCode
from auth_service.libs.result import Error, Result, Return
from .dtos import VerifyEmailResponse

logger = logging.getLogger(__name__)


class VerifyEmailUseCase:
    """
    Use case for email verification.

    Business Rules:
    - Token must match the user's verification_token
    - Token must not be expired (24 hours from issue)
    - Sets email_verified and promotes pending accounts to active
    - Clears the token, so a replay fails with INVALID_TOKEN
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, token: str) -> Result[VerifyEmailResponse]:
        """
        Execute email verification use case.

        Args:
            token: Verification token from email link

        Returns:
            Result with verification status, or Error

        Errors:
            - INVALID_TOKEN: Token not found
            - TOKEN_EXPIRED: Token has expired
        """
        async with self.uow:
            user = await self.uow.users.get_by_verification_token(token)

            if user is None:
                return Return.err(
                    Error(
                        ErrorCode.INVALID_TOKEN,
                        "Invalid or non-existent verification token",
                    )
                )

            state = AccountState.of(user)
            verified = state.verify_email(token)
            if verified.is_err():
                return Return.err(verified.error)

            await self.uow.users.update(user.id, verified.value.changes(since=state))
            await self.uow.commit()

            logger.info(f"Email verified for user: {user.id}")

            return Return.ok(
                VerifyEmailResponse(
                    status="verified", message="Email successfully verified"
                )
            )
