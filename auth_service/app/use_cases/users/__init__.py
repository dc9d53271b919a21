"""
User Management Use Cases

Administrative lookups and edits of user records.
"""

from .get_user_use_case import GetUserUseCase, GetUserByEmailUseCase
from .update_user_profile_use_case import (
    UpdateUserProfileCommand,
    UpdateUserProfileUseCase,
)
from .delete_user_use_case import DeleteUserUseCase, DeleteUserResponse
from .check_email_availability_use_case import (
    CheckEmailAvailabilityUseCase,
    EmailAvailabilityResponse,
)

__all__ = [
    "GetUserUseCase",
    "GetUserByEmailUseCase",
    "UpdateUserProfileCommand",
    "UpdateUserProfileUseCase",
    "DeleteUserUseCase",
    "DeleteUserResponse",
    "CheckEmailAvailabilityUseCase",
    "EmailAvailabilityResponse",
]
