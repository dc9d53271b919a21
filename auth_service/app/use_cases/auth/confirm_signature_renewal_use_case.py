"""
Confirm Signature Renewal Use Case

Second step of the credential reset: check the code, replace the password
and rotate both signing keys so every earlier token dies.
"""

import logging
from typing import Optional

from auth_service.app.services.credential_hasher import (
    CredentialHasher,
    check_password_policy,
)
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.app.settings import AuthSettings
from auth_service.domain.account_state import AccountState
from auth_service.domain.errors import ErrorCode
from auth_service.domain.signature_renewal import (
    check_renewal_code,
    clear_renewal_code,
    record_renewal_miss,
)
from auth_service.domain.signing_keys import SigningKeys
from auth_service.libs.result import Error, Result, Return
from .dtos import ConfirmSignatureRenewalCommand, ConfirmSignatureRenewalResponse

logger = logging.getLogger(__name__)


class ConfirmSignatureRenewalUseCase:
    """
    Use case for confirming a signature renewal.

    Business Rules:
    - New password must meet the length rules
    - Code must exist, match (constant-time) and be unexpired
    - Every wrong code is counted; after max_renewal_code_attempts misses the
      code is burned and a new one must be requested
    - Password hash, both signing keys, the cleared code and the cleared
      lockout are written in a single update
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

    async def execute(
        self, command: ConfirmSignatureRenewalCommand
    ) -> Result[ConfirmSignatureRenewalResponse]:
        """
        Execute confirm signature renewal use case.

        Errors:
            - INVALID_PASSWORD: New password breaks the length rules
            - USER_NOT_FOUND: No account for the email
            - ACCOUNT_DEACTIVATED: Account is deactivated
            - NO_RENEWAL_REQUESTED: No code outstanding
            - INVALID_CODE: Code does not match
            - CODE_EXPIRED: Code is older than its TTL
        """
        password_error = check_password_policy(
            command.new_password, self.settings.min_password_length
        )
        if password_error is not None:
            return Return.err(password_error)

        async with self.uow:
            user = await self.uow.users.get_by_email(command.email)
            if user is None:
                return Return.err(Error(ErrorCode.USER_NOT_FOUND, "User not found"))

            if not user.is_active:
                return Return.err(
                    Error(ErrorCode.ACCOUNT_DEACTIVATED, "Account is deactivated")
                )

            code_check = check_renewal_code(user, command.verification_code)
            if code_check.is_err():
                if code_check.error.code == ErrorCode.INVALID_CODE:
                    await self.uow.users.update(
                        user.id,
                        record_renewal_miss(user, self.settings.max_renewal_code_attempts),
                    )
                    await self.uow.commit()
                logger.info(
                    f"Signature renewal rejected for user {user.id}: "
                    f"{code_check.error.code}"
                )
                return Return.err(code_check.error)

            password_hash = await self.hasher.hash(command.new_password)
            state = AccountState.of(user)

            changes = {
                "password_hash": password_hash,
                **SigningKeys.generate().changes(),
                **clear_renewal_code(),
                **state.unlock().changes(since=state),
            }
            await self.uow.users.update(user.id, changes)
            await self.uow.commit()

            logger.info(f"Signatures renewed, all tokens revoked: {user.id}")

            return Return.ok(
                ConfirmSignatureRenewalResponse(
                    status="renewed",
                    message="Password updated. All existing sessions have been signed out.",
                )
            )
