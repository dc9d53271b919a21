from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel, EmailStr, Field

from auth_service.api.error import ClientError, ServerError
from auth_service.app.services.notification_service import INotificationService
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.app.settings import AuthSettings
from auth_service.app.use_cases.auth import (
    AuthenticatedIdentity,
    ConfirmSignatureRenewalCommand,
    ConfirmSignatureRenewalResponse,
    ConfirmSignatureRenewalUseCase,
    IntrospectTokenUseCase,
    LoginResponse,
    LoginUseCase,
    LogoutUseCase,
    MessageResponse,
    RefreshTokenResponse,
    RefreshTokenUseCase,
    RequestSignatureRenewalResponse,
    RequestSignatureRenewalUseCase,
    RevokeTokenUseCase,
    TokenIntrospectionResponse,
)
from auth_service.depends import (
    get_auth_settings,
    get_current_identity,
    get_notification_service,
    get_unit_of_work,
)
from auth_service.domain.errors import ErrorCode

router = APIRouter(prefix="/auth", tags=["Authentication"])

TOKEN_ERRORS = (ErrorCode.INVALID_TOKEN, ErrorCode.TOKEN_EXPIRED)


def raise_token_error(error):
    """Map errors shared by every refresh-token endpoint"""
    if error.code in TOKEN_ERRORS:
        raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
    raise ServerError(error)


class LoginRequest(BaseModel):
    """
    Login HTTP request payload

    Validates incoming login request.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(
    request: LoginRequest,
    http_request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
    settings: AuthSettings = Depends(get_auth_settings),
):
    """
    User Login

    Authenticates user and returns tokens signed with the user's keys.

    Raises:
        - 401 Unauthorized: Invalid credentials (unknown email or wrong password)
        - 403 Forbidden: Account deactivated, pending, suspended or blocked
        - 423 Locked: Too many failed attempts
        - 500 Internal Server Error: Server error
    """
    ip_address = http_request.client.host if http_request.client else None

    use_case = LoginUseCase(uow, settings)
    result = await use_case.execute(request.email, request.password, ip_address)

    if result.is_err():
        error = result.error
        if error.code == ErrorCode.INVALID_CREDENTIALS:
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code == ErrorCode.ACCOUNT_DEACTIVATED:
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == ErrorCode.ACCOUNT_LOCKED:
            raise ClientError(error, status_code=status.HTTP_423_LOCKED)
        raise ServerError(error)

    return result.value


class RefreshRequest(BaseModel):
    refresh_token: str = Field(..., description="Refresh token")


@router.post("/refresh", status_code=status.HTTP_200_OK, response_model=RefreshTokenResponse)
async def refresh(
    request: RefreshRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    settings: AuthSettings = Depends(get_auth_settings),
):
    """
    Refresh Tokens

    Issues a new pair for a refresh token signed with the current refresh key.

    Raises:
        - 401 Unauthorized: Invalid, expired or revoked token
        - 403 Forbidden: Account deactivated
        - 423 Locked: Account locked
        - 500 Internal Server Error: Server error
    """
    use_case = RefreshTokenUseCase(uow, settings)
    result = await use_case.execute(request.refresh_token)

    if result.is_err():
        error = result.error
        if error.code == ErrorCode.ACCOUNT_DEACTIVATED:
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == ErrorCode.ACCOUNT_LOCKED:
            raise ClientError(error, status_code=status.HTTP_423_LOCKED)
        raise_token_error(error)

    return result.value


@router.post("/revoke", status_code=status.HTTP_200_OK, response_model=MessageResponse)
async def revoke(
    request: RefreshRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    settings: AuthSettings = Depends(get_auth_settings),
):
    """
    Revoke Refresh Tokens

    Rotates the refresh key: every refresh token of the caller stops working,
    access tokens keep working until they expire.
    """
    use_case = RevokeTokenUseCase(uow, settings)
    result = await use_case.execute(request.refresh_token)

    if result.is_err():
        raise_token_error(result.error)

    return result.value


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=MessageResponse)
async def logout(
    request: RefreshRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    settings: AuthSettings = Depends(get_auth_settings),
):
    """
    Logout Everywhere

    Rotates both keys: every access and refresh token of the caller stops
    working immediately.
    """
    use_case = LogoutUseCase(uow, settings)
    result = await use_case.execute(request.refresh_token)

    if result.is_err():
        raise_token_error(result.error)

    return result.value


class IntrospectRequest(BaseModel):
    token: str = Field(..., description="Access or refresh token")


@router.post(
    "/introspect", status_code=status.HTTP_200_OK, response_model=TokenIntrospectionResponse
)
async def introspect(
    request: IntrospectRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    settings: AuthSettings = Depends(get_auth_settings),
):
    """
    Token Introspection

    Always 200; inactive tokens carry a short reason in ``error``.
    """
    use_case = IntrospectTokenUseCase(uow, settings)
    result = await use_case.execute(request.token)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.get("/me", status_code=status.HTTP_200_OK, response_model=AuthenticatedIdentity)
async def me(identity: AuthenticatedIdentity = Depends(get_current_identity)):
    """Identity behind the bearer access token"""
    return identity


class RenewSignaturesRequest(BaseModel):
    email: EmailStr = Field(..., description="User email address")


@router.post(
    "/renew-signatures",
    status_code=status.HTTP_200_OK,
    response_model=RequestSignatureRenewalResponse,
)
async def renew_signatures(
    request: RenewSignaturesRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    settings: AuthSettings = Depends(get_auth_settings),
    notifier: INotificationService = Depends(get_notification_service),
):
    """
    Request Signature Renewal

    Sends a 6-digit verification code. Same response whether or not the
    account exists.
    """
    use_case = RequestSignatureRenewalUseCase(uow, settings, notifier)
    result = await use_case.execute(request.email)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


class ConfirmRenewSignaturesRequest(BaseModel):
    email: EmailStr = Field(..., description="User email address")
    verification_code: str = Field(
        ..., pattern=r"^[0-9]{6}$", description="6-digit verification code"
    )
    new_password: str = Field(..., description="New password")


@router.post(
    "/confirm-renew-signatures",
    status_code=status.HTTP_200_OK,
    response_model=ConfirmSignatureRenewalResponse,
)
async def confirm_renew_signatures(
    request: ConfirmRenewSignaturesRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    settings: AuthSettings = Depends(get_auth_settings),
):
    """
    Confirm Signature Renewal

    Replaces the password and rotates both keys; all earlier tokens die.

    Raises:
        - 400 Bad Request: Invalid password, invalid code or no renewal requested
        - 403 Forbidden: Account deactivated
        - 404 Not Found: No account for the email
        - 410 Gone: Code expired
        - 500 Internal Server Error: Server error
    """
    command = ConfirmSignatureRenewalCommand(
        email=request.email,
        verification_code=request.verification_code,
        new_password=request.new_password,
    )

    use_case = ConfirmSignatureRenewalUseCase(uow, settings)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code in (
            ErrorCode.INVALID_PASSWORD,
            ErrorCode.INVALID_CODE,
            ErrorCode.NO_RENEWAL_REQUESTED,
        ):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == ErrorCode.USER_NOT_FOUND:
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == ErrorCode.ACCOUNT_DEACTIVATED:
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == ErrorCode.CODE_EXPIRED:
            raise ClientError(error, status_code=status.HTTP_410_GONE)
        raise ServerError(error)

    return result.value
