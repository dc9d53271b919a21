"""Admin use cases for account administration operations."""

from .revoke_user_tokens_use_case import (
    RevokeUserTokensUseCase,
    RevokeUserTokensResponse,
)
from .change_account_status_use_case import (
    AccountAction,
    ChangeAccountStatusUseCase,
    ChangeAccountStatusResponse,
)
from .get_account_status_use_case import GetAccountStatusUseCase

__all__ = [
    "RevokeUserTokensUseCase",
    "RevokeUserTokensResponse",
    "AccountAction",
    "ChangeAccountStatusUseCase",
    "ChangeAccountStatusResponse",
    "GetAccountStatusUseCase",
]
