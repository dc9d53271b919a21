"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from auth_service.domain.entities import AuthStatus, User


# ============================================================================
# Command DTOs
# ============================================================================


class RegisterUserCommand(BaseModel):
    """Validated registration intent"""

    email: str
    password: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class ConfirmSignatureRenewalCommand(BaseModel):
    email: str
    verification_code: str
    new_password: str


# ============================================================================
# Response DTOs
# ============================================================================


class UserInfo(BaseModel):
    """Public user information - never carries hashes or signing keys"""

    id: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    is_active: bool
    email_verified: bool
    auth_status: AuthStatus
    created_at: datetime

    @classmethod
    def of(cls, user: User) -> "UserInfo":
        return cls(
            id=str(user.id),
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            is_active=user.is_active,
            email_verified=user.email_verified,
            auth_status=user.auth_status,
            created_at=user.created_at,
        )


class LoginResponse(BaseModel):
    """Response for user login use case"""

    access_token: str
    refresh_token: str
    token_type: str
    expires_in: int
    user: UserInfo


class RefreshTokenResponse(BaseModel):
    """Response for refresh token use case"""

    access_token: str
    refresh_token: str
    token_type: str
    expires_in: int


class TokenIntrospectionResponse(BaseModel):
    """Fail-soft token status; ``error`` explains an inactive result"""

    active: bool
    sub: Optional[str] = None
    email: Optional[str] = None
    iss: Optional[str] = None
    aud: Optional[str] = None
    exp: Optional[int] = None
    iat: Optional[int] = None
    token_type: Optional[str] = None
    error: Optional[str] = None


class AuthenticatedIdentity(BaseModel):
    """Identity handed to authorization layers once an access token checks out"""

    user_id: str
    email: str
    token_type: str
    issued_at: datetime
    expires_at: datetime
    expires_in: int
    expires_soon: bool
    email_verified: bool


class RegisterUserResponse(BaseModel):
    user: UserInfo
    message: str


class VerifyEmailResponse(BaseModel):
    """Response for email verification use case"""

    status: str
    message: str


class ResendVerificationResponse(BaseModel):
    """Response for resend verification email use case"""

    status: str
    message: str


class RequestSignatureRenewalResponse(BaseModel):
    status: str
    message: str


class ConfirmSignatureRenewalResponse(BaseModel):
    status: str
    message: str


class MessageResponse(BaseModel):
    message: str
