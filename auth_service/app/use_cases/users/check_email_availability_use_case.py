"""Use Case: Check Email Availability"""

from pydantic import BaseModel

from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.libs.result import Result, Return


class EmailAvailabilityResponse(BaseModel):
    email: str
    available: bool


class CheckEmailAvailabilityUseCase:
    """Tells whether an email address is still free for registration"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, email: str) -> Result[EmailAvailabilityResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_email(email)
            return Return.ok(EmailAvailabilityResponse(email=email, available=user is None))
