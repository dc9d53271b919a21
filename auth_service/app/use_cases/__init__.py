"""
Use Cases

Organized into domain folders:
- auth/: Token lifecycle, registration and credential renewal
- admin/: Account administration behind the admin API key
- users/: User record lookups and edits, also admin-only
"""

from .auth import (
    AuthenticateUseCase,
    ConfirmSignatureRenewalUseCase,
    IntrospectTokenUseCase,
    LoginUseCase,
    LogoutUseCase,
    RefreshTokenUseCase,
    RegisterUserUseCase,
    RequestSignatureRenewalUseCase,
    ResendVerificationUseCase,
    RevokeTokenUseCase,
    VerifyEmailUseCase,
)
from .admin import (
    ChangeAccountStatusUseCase,
    GetAccountStatusUseCase,
    RevokeUserTokensUseCase,
)
from .users import (
    CheckEmailAvailabilityUseCase,
    DeleteUserUseCase,
    GetUserByEmailUseCase,
    GetUserUseCase,
    UpdateUserProfileUseCase,
)

__all__ = [
    # Auth
    "LoginUseCase",
    "RefreshTokenUseCase",
    "RevokeTokenUseCase",
    "LogoutUseCase",
    "IntrospectTokenUseCase",
    "AuthenticateUseCase",
    "RegisterUserUseCase",
    "VerifyEmailUseCase",
    "ResendVerificationUseCase",
    "RequestSignatureRenewalUseCase",
    "ConfirmSignatureRenewalUseCase",
    # Admin
    "RevokeUserTokensUseCase",
    "ChangeAccountStatusUseCase",
    "GetAccountStatusUseCase",
    # Users
    "GetUserUseCase",
    "GetUserByEmailUseCase",
    "UpdateUserProfileUseCase",
    "DeleteUserUseCase",
    "CheckEmailAvailabilityUseCase",
]
