"""
User Management Routes

Lookups and edits of user records for internal support tooling.
Authentication is via Admin API Key, not user tokens.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from auth_service.api.error import ClientError, ServerError
from auth_service.api.utils.admin_auth import verify_admin_api_key
from auth_service.app.services.notification_service import INotificationService
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.app.settings import AuthSettings
from auth_service.app.use_cases.auth import UserInfo
from auth_service.app.use_cases.users import (
    CheckEmailAvailabilityUseCase,
    DeleteUserResponse,
    DeleteUserUseCase,
    EmailAvailabilityResponse,
    GetUserByEmailUseCase,
    GetUserUseCase,
    UpdateUserProfileCommand,
    UpdateUserProfileUseCase,
)
from auth_service.depends import get_auth_settings, get_notification_service, get_unit_of_work
from auth_service.domain.errors import ErrorCode

router = APIRouter(
    prefix="/admin/users",
    tags=["User Management"],
    dependencies=[Depends(verify_admin_api_key)],
)


def raise_user_error(error):
    if error.code == ErrorCode.USER_NOT_FOUND:
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    elif error.code == ErrorCode.EMAIL_ALREADY_EXISTS:
        raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
    raise ServerError(error)


@router.get(
    "/check-email/{email}",
    status_code=status.HTTP_200_OK,
    response_model=EmailAvailabilityResponse,
)
async def check_email(email: str, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Check Email Availability

    Kept behind the admin key: a public lookup would undo the
    anti-enumeration behaviour of login, resend and renewal.
    """
    use_case = CheckEmailAvailabilityUseCase(uow)
    result = await use_case.execute(email)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.get("/by-email/{email}", status_code=status.HTTP_200_OK, response_model=UserInfo)
async def get_user_by_email(email: str, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Get User by Email

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 404 Not Found: USER_NOT_FOUND
    """
    use_case = GetUserByEmailUseCase(uow)
    result = await use_case.execute(email)

    if result.is_err():
        raise_user_error(result.error)

    return result.value


@router.get("/{user_id}", status_code=status.HTTP_200_OK, response_model=UserInfo)
async def get_user(user_id: UUID, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Get User by ID

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 404 Not Found: USER_NOT_FOUND
    """
    use_case = GetUserUseCase(uow)
    result = await use_case.execute(user_id)

    if result.is_err():
        raise_user_error(result.error)

    return result.value


class UpdateUserRequest(BaseModel):
    """Profile fields to change; omitted fields stay as they are"""

    email: Optional[EmailStr] = None
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=100)


@router.put("/{user_id}", status_code=status.HTTP_200_OK, response_model=UserInfo)
async def update_user(
    user_id: UUID,
    request: UpdateUserRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    settings: AuthSettings = Depends(get_auth_settings),
    notifier: INotificationService = Depends(get_notification_service),
):
    """
    Update User Profile

    Changing the email marks it unverified and sends a new verification
    token to the new address. Passwords change only through signature
    renewal.

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 404 Not Found: USER_NOT_FOUND
        - 409 Conflict: EMAIL_ALREADY_EXISTS
        - 422 Unprocessable Entity: Invalid input (handled by FastAPI)
    """
    command = UpdateUserProfileCommand(
        email=request.email,
        first_name=request.first_name,
        last_name=request.last_name,
    )

    use_case = UpdateUserProfileUseCase(uow, settings, notifier)
    result = await use_case.execute(user_id, command)

    if result.is_err():
        raise_user_error(result.error)

    return result.value


@router.delete("/{user_id}", status_code=status.HTTP_200_OK, response_model=DeleteUserResponse)
async def delete_user(user_id: UUID, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Permanently Delete User

    Cannot be undone. Every token of the user stops working because its
    subject no longer resolves.

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 404 Not Found: USER_NOT_FOUND
    """
    use_case = DeleteUserUseCase(uow)
    result = await use_case.execute(user_id)

    if result.is_err():
        raise_user_error(result.error)

    return result.value
