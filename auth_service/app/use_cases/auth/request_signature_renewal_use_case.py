"""
Request Signature Renewal Use Case

First step of the credential reset: store a short-lived numeric code and
deliver it out of band.
"""

import logging

from auth_service.app.services.notification_service import INotificationService
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.app.settings import AuthSettings
from auth_service.domain.signature_renewal import generate_renewal_code, issue_renewal_code
from auth_service.libs.result import Result, Return
from .dtos import RequestSignatureRenewalResponse

logger = logging.getLogger(__name__)

REQUESTED = RequestSignatureRenewalResponse(
    status="requested",
    message="If the account exists, a verification code has been sent",
)


class RequestSignatureRenewalUseCase:
    """
    Use case for requesting a signature renewal.

    Business Rules:
    - Unknown or deactivated accounts get the same success response and
      nothing is stored (no enumeration)
    - A new 6-digit code replaces any earlier one and expires in 1 hour
    - Delivery failures are logged, the request still succeeds
    """

    def __init__(
        self, uow: UnitOfWork, settings: AuthSettings, notifier: INotificationService
    ):
        self.uow = uow
        self.settings = settings
        self.notifier = notifier

    async def execute(self, email: str) -> Result[RequestSignatureRenewalResponse]:
        """
        Execute request signature renewal use case.

        Args:
            email: User's email address

        Returns:
            Result with the generic request status; never an Error
        """
        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None or not user.is_active:
                return Return.ok(REQUESTED)

            code = generate_renewal_code()
            await self.uow.users.update(
                user.id, issue_renewal_code(code, self.settings.renewal_code_ttl)
            )
            await self.uow.commit()

            logger.info(f"Signature renewal requested for user: {user.id}")

            try:
                await self.notifier.send_verification_code(user.email, code)
            except Exception:
                logger.exception(f"Failed to deliver renewal code to user {user.id}")

            return Return.ok(REQUESTED)
