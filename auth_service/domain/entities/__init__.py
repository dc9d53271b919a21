"""
Authentication Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    AuthStatus,
    TokenType,
    AccountLockReason,
    SigningAlgorithm,
)

# Export all entities
from .user import User
from .auth_token import (
    AccessTokenPayload,
    AuthToken,
    RefreshTokenPayload,
    TokenClaims,
    parse_token_payload,
)

__all__ = [
    # Enums
    "AuthStatus",
    "TokenType",
    "AccountLockReason",
    "SigningAlgorithm",
    # Entities
    "User",
    "AuthToken",
    # Token payloads
    "TokenClaims",
    "AccessTokenPayload",
    "RefreshTokenPayload",
    "parse_token_payload",
]
