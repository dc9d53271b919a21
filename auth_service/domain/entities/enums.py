"""
Authentication Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class AuthStatus(str, Enum):
    """Authentication status of a user account"""

    pending = "pending"  # email not verified yet
    active = "active"
    inactive = "inactive"  # disabled by the user or an admin
    suspended = "suspended"  # temporarily blocked
    blocked = "blocked"  # permanently denied, terminal


class TokenType(str, Enum):
    """Kinds of signed tokens the service understands"""

    access = "access"
    refresh = "refresh"
    reset_password = "reset_password"
    email_verification = "email_verification"


class AccountLockReason(str, Enum):
    """Why an account was locked, suspended or blocked"""

    multiple_failed_attempts = "multiple_failed_attempts"
    suspicious_activity = "suspicious_activity"
    security_violation = "security_violation"
    administrative_action = "administrative_action"
    policy_violation = "policy_violation"


class SigningAlgorithm(str, Enum):
    """Symmetric HMAC algorithms accepted for per-user keys"""

    HS256 = "HS256"
    HS384 = "HS384"
    HS512 = "HS512"
