import logging

from auth_service.app.services.notification_service import INotificationService

logger = logging.getLogger(__name__)


class LoggingNotificationService(INotificationService):
    """
    Development notifier: records that a delivery happened instead of
    sending an email. The code itself is never written to the log.
    """

    async def send_verification_code(self, email: str, code: str) -> None:
        logger.info(f"Verification code issued for {email} ({len(code)} characters)")
