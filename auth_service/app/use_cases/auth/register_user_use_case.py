"""
Register User Use Case

Creates a pending account with fresh signing keys and an email
verification token.
"""

import logging
import secrets
from typing import Optional

from auth_service.app.services.credential_hasher import (
    CredentialHasher,
    check_password_policy,
)
from auth_service.app.services.notification_service import INotificationService
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.app.settings import AuthSettings
from auth_service.domain.account_state import AccountState
from auth_service.domain.entities import AuthStatus, User
from auth_service.domain.errors import ErrorCode
from auth_service.domain.signing_keys import SigningKeys
from auth_service.libs.result import Error, Result, Return
from .dtos import RegisterUserCommand, RegisterUserResponse, UserInfo

logger = logging.getLogger(__name__)


class RegisterUserUseCase:
    """
    Register User Use Case

    Business Logic:
    1. Reject weak passwords (INVALID_PASSWORD)
    2. Reject duplicate emails (EMAIL_ALREADY_EXISTS)
    3. Hash password with bcrypt
    4. Generate both signing keys
    5. Create User with auth_status=pending, email_verified=False
    6. Issue a 24h email verification token and hand it to the notifier
    """

    def __init__(
        self,
        uow: UnitOfWork,
        settings: AuthSettings,
        notifier: INotificationService,
        hasher: Optional[CredentialHasher] = None,
    ):
        self.uow = uow
        self.settings = settings
        self.notifier = notifier
        self.hasher = hasher or CredentialHasher(settings.bcrypt_rounds)

    async def execute(self, command: RegisterUserCommand) -> Result[RegisterUserResponse]:
        """
        Execute register use case

        Args:
            command: RegisterUserCommand with email, password and optional names

        Returns:
            Result[RegisterUserResponse] with the created user
            or Error(INVALID_PASSWORD / EMAIL_ALREADY_EXISTS)
        """
        password_error = check_password_policy(
            command.password, self.settings.min_password_length
        )
        if password_error is not None:
            return Return.err(password_error)

        async with self.uow:
            existing_user = await self.uow.users.get_by_email(command.email)
            if existing_user:
                return Return.err(
                    Error(ErrorCode.EMAIL_ALREADY_EXISTS, "Email already registered")
                )

            password_hash = await self.hasher.hash(command.password)
            keys = SigningKeys.generate()

            state = AccountState(
                auth_status=AuthStatus.pending,
                is_active=True,
                email_verified=False,
            ).issue_verification_token(
                secrets.token_urlsafe(32),
                self.settings.token_policy.email_verification_ttl,
            )

            user = User(
                email=command.email,
                password_hash=password_hash,
                first_name=command.first_name,
                last_name=command.last_name,
                **keys.changes(),
                **state.changes(),
            )
            user = await self.uow.users.create(user)
            await self.uow.commit()

            logger.info(f"User registered: {user.id}")

            try:
                await self.notifier.send_verification_code(
                    user.email, state.verification_token
                )
            except Exception:
                logger.exception(
                    f"Failed to deliver verification token to user {user.id}"
                )

            return Return.ok(
                RegisterUserResponse(
                    user=UserInfo.of(user),
                    message="Registration successful. Please verify your email.",
                )
            )
