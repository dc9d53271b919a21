"""
Login Use Case

Handles user authentication and issues tokens signed with the user's keys.
"""

import logging
from typing import Optional

from auth_service.app.services.credential_hasher import CredentialHasher
from auth_service.app.services.token_service import TokenService
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.app.settings import AuthSettings
from auth_service.domain.account_state import AccountState
from auth_service.domain.entities import AuthStatus
from auth_service.domain.errors import ErrorCode
from auth_service.libs.result import Error, Result, Return
from .dtos import LoginResponse, UserInfo

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = Error(ErrorCode.INVALID_CREDENTIALS, "Invalid email or password")


class LoginUseCase:
    """
    Use case for user login and token issuance.

    Business Rules:
    - Unknown email and wrong password return the same error; a dummy hash
      check keeps the timing flat
    - Wrong passwords count towards lockout (5 attempts, 30 minutes)
    - A locked account is refused whatever the password
    - Deactivated, pending, suspended and blocked accounts are refused only
      after the password matched
    - Success resets the failed-attempt counter and records time/ip
    """

    def __init__(
        self,
        uow: UnitOfWork,
        settings: AuthSettings,
        hasher: Optional[CredentialHasher] = None,
    ):
        self.uow = uow
        self.settings = settings
        self.hasher = hasher or CredentialHasher(settings.bcrypt_rounds)
        self.tokens = TokenService(settings)

    async def execute(
        self, email: str, password: str, ip_address: Optional[str] = None
    ) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            email: User email
            password: Plain text password
            ip_address: Client address, recorded on success

        Returns:
            Result with LoginResponse containing tokens and user info, or Error
        """
        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None:
                await self.hasher.verify_dummy(password)
                logger.info(f"Login failed for unknown email: {email}")
                return Return.err(INVALID_CREDENTIALS)

            password_valid = await self.hasher.verify(password, user.password_hash)
            state = AccountState.of(user)

            if state.is_locked():
                logger.warning(f"Login refused for locked account: {user.id}")
                return Return.err(
                    Error(
                        ErrorCode.ACCOUNT_LOCKED,
                        "Account is temporarily locked. Try again later.",
                    )
                )

            if not password_valid:
                failed = state.record_failed_login(
                    self.settings.max_failed_login_attempts,
                    self.settings.lockout_duration,
                )
                await self.uow.users.update(user.id, failed.changes(since=state))
                await self.uow.commit()

                if failed.is_locked():
                    logger.warning(
                        f"Account {user.id} locked after "
                        f"{failed.failed_login_attempts} failed login attempts"
                    )
                return Return.err(INVALID_CREDENTIALS)

            if not state.is_active:
                return Return.err(
                    Error(ErrorCode.ACCOUNT_DEACTIVATED, "Account is deactivated")
                )

            if state.auth_status != AuthStatus.active:
                return Return.err(
                    Error(
                        ErrorCode.ACCOUNT_DEACTIVATED,
                        f"Account is not active (status: {state.auth_status.value})",
                    )
                )

            tokens = self.tokens.issue_pair(user)
            if tokens.is_err():
                return Return.err(tokens.error)

            logged_in = state.record_successful_login(ip_address)
            user = await self.uow.users.update(user.id, logged_in.changes(since=state))
            await self.uow.commit()

            logger.info(f"Successful login for user: {user.id}")

            pair = tokens.value
            return Return.ok(
                LoginResponse(
                    access_token=pair.access_token,
                    refresh_token=pair.refresh_token,
                    token_type=pair.token_type,
                    expires_in=pair.expires_in,
                    user=UserInfo.of(user),
                )
            )
