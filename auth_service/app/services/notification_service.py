from abc import ABC, abstractmethod


class INotificationService(ABC):
    """Out-of-band delivery of verification codes (email, SMS, ...)"""

    @abstractmethod
    async def send_verification_code(self, email: str, code: str) -> None:
        """Deliver a code to the user; failures are the caller's to log"""
        pass
