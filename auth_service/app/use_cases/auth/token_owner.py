from typing import Tuple

from auth_service.app.services.token_service import TokenService
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.domain.entities import RefreshTokenPayload, TokenType, User
from auth_service.domain.errors import ErrorCode
from auth_service.libs.result import Error, Result, Return


async def load_refresh_token_owner(
    uow: UnitOfWork, tokens: TokenService, refresh_token: str
) -> Result[Tuple[User, RefreshTokenPayload]]:
    """
    Resolve the user a refresh token belongs to and verify the token against
    that user's current refresh key.

    The subject read before verification is untrusted; it only selects the
    key. An unknown subject is reported as INVALID_TOKEN.
    """
    subject = tokens.subject_of(refresh_token)
    if subject.is_err():
        return Return.err(subject.error)

    user = await uow.users.get_by_id(subject.value)
    if user is None:
        return Return.err(Error(ErrorCode.INVALID_TOKEN, "Invalid refresh token"))

    payload = tokens.verify(refresh_token, user, TokenType.refresh)
    if payload.is_err():
        return Return.err(payload.error)

    return Return.ok((user, payload.value))
