"""
Authentication Use Cases

Token lifecycle, registration and credential renewal.
"""

from .login_use_case import LoginUseCase
from .refresh_token_use_case import RefreshTokenUseCase
from .revoke_token_use_case import LogoutUseCase, RevokeTokenUseCase
from .introspect_token_use_case import IntrospectTokenUseCase
from .authenticate_use_case import AuthenticateUseCase
from .register_user_use_case import RegisterUserUseCase
from .verify_email_use_case import VerifyEmailUseCase
from .resend_verification_use_case import ResendVerificationUseCase
from .request_signature_renewal_use_case import RequestSignatureRenewalUseCase
from .confirm_signature_renewal_use_case import ConfirmSignatureRenewalUseCase
from .dtos import (
    AuthenticatedIdentity,
    ConfirmSignatureRenewalCommand,
    ConfirmSignatureRenewalResponse,
    LoginResponse,
    MessageResponse,
    RefreshTokenResponse,
    RegisterUserCommand,
    RegisterUserResponse,
    RequestSignatureRenewalResponse,
    ResendVerificationResponse,
    TokenIntrospectionResponse,
    UserInfo,
    VerifyEmailResponse,
)

__all__ = [
    # Use Cases
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
    # DTOs - Commands
    "RegisterUserCommand",
    "ConfirmSignatureRenewalCommand",
    # DTOs - Responses
    "LoginResponse",
    "RefreshTokenResponse",
    "TokenIntrospectionResponse",
    "AuthenticatedIdentity",
    "RegisterUserResponse",
    "VerifyEmailResponse",
    "ResendVerificationResponse",
    "RequestSignatureRenewalResponse",
    "ConfirmSignatureRenewalResponse",
    "MessageResponse",
    # DTOs - Nested Models
    "UserInfo",
]
