"""
Admin API Routes - Account Administration Endpoints

These endpoints are for internal support tooling.
Authentication is via Admin API Key, not user tokens.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Body, Depends, status
from pydantic import BaseModel

from auth_service.api.error import ClientError, ServerError
from auth_service.api.utils.admin_auth import verify_admin_api_key
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.app.use_cases.admin import (
    AccountAction,
    ChangeAccountStatusResponse,
    ChangeAccountStatusUseCase,
    GetAccountStatusUseCase,
    RevokeUserTokensResponse,
    RevokeUserTokensUseCase,
)
from auth_service.depends import get_unit_of_work
from auth_service.domain.account_state import AccountStatusSummary
from auth_service.domain.entities import AccountLockReason
from auth_service.domain.errors import ErrorCode

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.post(
    "/users/{user_id}/revoke-tokens",
    status_code=status.HTTP_200_OK,
    response_model=RevokeUserTokensResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def revoke_user_tokens(
    user_id: UUID,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Revoke All Tokens

    Rotates both signing keys of the user. Every access and refresh token
    the user holds stops working immediately.

    Requires: X-Admin-API-Key header

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 404 Not Found: USER_NOT_FOUND
        - 500 Internal Server Error: Server error
    """
    use_case = RevokeUserTokensUseCase(uow)
    result = await use_case.execute(user_id)

    if result.is_err():
        error = result.error
        if error.code == ErrorCode.USER_NOT_FOUND:
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


class ChangeAccountStatusRequest(BaseModel):
    reason: Optional[AccountLockReason] = None


@router.post(
    "/users/{user_id}/{action}",
    status_code=status.HTTP_200_OK,
    response_model=ChangeAccountStatusResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def change_account_status(
    user_id: UUID,
    action: AccountAction,
    request: Optional[ChangeAccountStatusRequest] = Body(default=None),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Change Account Status

    activate, deactivate, restore, suspend, block or unlock an account.
    restore only reactivates a deactivated account. suspend and
    block accept an optional reason.

    Requires: X-Admin-API-Key header

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 404 Not Found: USER_NOT_FOUND
        - 409 Conflict: INVALID_STATE_TRANSITION
        - 500 Internal Server Error: Server error
    """
    reason = request.reason if request else None

    use_case = ChangeAccountStatusUseCase(uow)
    result = await use_case.execute(user_id, action, reason)

    if result.is_err():
        error = result.error
        if error.code == ErrorCode.USER_NOT_FOUND:
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == ErrorCode.INVALID_STATE_TRANSITION:
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


@router.get(
    "/users/{user_id}/status",
    status_code=status.HTTP_200_OK,
    response_model=AccountStatusSummary,
    dependencies=[Depends(verify_admin_api_key)],
)
async def get_account_status(
    user_id: UUID,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Account Status

    Requires: X-Admin-API-Key header

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 404 Not Found: USER_NOT_FOUND
    """
    use_case = GetAccountStatusUseCase(uow)
    result = await use_case.execute(user_id)

    if result.is_err():
        error = result.error
        if error.code == ErrorCode.USER_NOT_FOUND:
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
