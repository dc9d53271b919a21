"""
User Entity

Represents an account held in the identity store, together with the
per-user signing keys used to sign its tokens.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utc_now
from .enums import AccountLockReason, AuthStatus


class User(SQLModel, table=True):
    """
    User entity - an account that can authenticate against this service.

    Business Rules:
    - Email must be unique across all users
    - Password stored as bcrypt hash, never returned to callers
    - access_signing_key / refresh_signing_key are always present and unique;
      rotating one invalidates every outstanding token of that type
    - locked_until in the past means "not locked" (interpreted lazily)
    - Verification and renewal codes are single-use and cleared on consumption
    - State changes go through AccountState, never by assigning fields directly
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)

    # Per-user HMAC secrets
    access_signing_key: str = Field(unique=True, nullable=False, max_length=64)
    refresh_signing_key: str = Field(unique=True, nullable=False, max_length=64)

    # Lifecycle
    is_active: bool = Field(default=True)
    email_verified: bool = Field(default=False)
    auth_status: AuthStatus = Field(default=AuthStatus.pending)

    # Lockout
    failed_login_attempts: int = Field(default=0)
    locked_until: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    lock_reason: Optional[AccountLockReason] = Field(default=None)

    last_login_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    last_login_ip: Optional[str] = Field(default=None, max_length=45)

    # Email verification
    verification_token: Optional[str] = Field(
        default=None, unique=True, index=True, max_length=64
    )
    verification_token_expires_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )

    # Signature renewal
    renewal_verification_token: Optional[str] = Field(default=None, max_length=16)
    renewal_verification_token_expires_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )
    renewal_failed_attempts: int = Field(default=0)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_user_auth_status", "auth_status"),
        Index("idx_user_email_verified", "email_verified"),
    )
