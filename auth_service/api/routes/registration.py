from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from auth_service.api.error import ClientError, ServerError
from auth_service.app.services.notification_service import INotificationService
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.app.settings import AuthSettings
from auth_service.app.use_cases.auth import (
    RegisterUserCommand,
    RegisterUserResponse,
    RegisterUserUseCase,
    ResendVerificationResponse,
    ResendVerificationUseCase,
    VerifyEmailResponse,
    VerifyEmailUseCase,
)
from auth_service.depends import get_auth_settings, get_notification_service, get_unit_of_work
from auth_service.domain.errors import ErrorCode

router = APIRouter(prefix="/registration", tags=["Registration"])


class RegisterRequest(BaseModel):
    """
    Register HTTP request payload

    Validates incoming HTTP request before converting to RegisterUserCommand.
    Password rules are enforced by the use case.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password (min 8 chars)")
    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)


@router.post(
    "/register", status_code=status.HTTP_201_CREATED, response_model=RegisterUserResponse
)
async def register(
    request: RegisterRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    settings: AuthSettings = Depends(get_auth_settings),
    notifier: INotificationService = Depends(get_notification_service),
):
    """
    User Registration

    Creates a pending account and sends an email verification token.

    Raises:
        - 400 Bad Request: Password too short or too long
        - 409 Conflict: Email already exists
        - 422 Unprocessable Entity: Invalid input (handled by FastAPI)
        - 500 Internal Server Error: Server error
    """
    command = RegisterUserCommand(
        email=request.email,
        password=request.password,
        first_name=request.first_name,
        last_name=request.last_name,
    )

    use_case = RegisterUserUseCase(uow, settings, notifier)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code == ErrorCode.EMAIL_ALREADY_EXISTS:
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        elif error.code == ErrorCode.INVALID_PASSWORD:
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value


class VerifyEmailRequest(BaseModel):
    token: str = Field(..., description="Email verification token")


@router.post("/verify-email", status_code=status.HTTP_200_OK, response_model=VerifyEmailResponse)
async def verify_email(request: VerifyEmailRequest, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Email Verification

    Sets email_verified, clears the token and activates pending accounts.

    Raises:
        - 400 Bad Request: Invalid or already consumed token
        - 409 Conflict: Email already verified
        - 410 Gone: Expired token
        - 500 Internal Server Error: Server error
    """
    use_case = VerifyEmailUseCase(uow)
    result = await use_case.execute(request.token)

    if result.is_err():
        error = result.error
        if error.code == ErrorCode.INVALID_TOKEN:
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == ErrorCode.ALREADY_VERIFIED:
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        elif error.code == ErrorCode.TOKEN_EXPIRED:
            raise ClientError(error, status_code=status.HTTP_410_GONE)
        raise ServerError(error)

    return result.value


class ResendVerificationRequest(BaseModel):
    email: EmailStr = Field(..., description="User email address")


@router.post(
    "/resend-verification",
    status_code=status.HTTP_200_OK,
    response_model=ResendVerificationResponse,
)
async def resend_verification(
    request: ResendVerificationRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    settings: AuthSettings = Depends(get_auth_settings),
    notifier: INotificationService = Depends(get_notification_service),
):
    """
    Resend Verification Email

    Invalidates the old token and issues a new one valid for 24 hours.

    Security:
        - No email enumeration (same response for unknown emails)

    Raises:
        - 409 Conflict: Email already verified
        - 500 Internal Server Error: Server error
    """
    use_case = ResendVerificationUseCase(uow, settings, notifier)
    result = await use_case.execute(request.email)

    if result.is_err():
        error = result.error
        if error.code == ErrorCode.ALREADY_VERIFIED:
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value
