"""
Account State Machine

Pure logic over the authentication-related fields of a User. Every
operation returns a new AccountState (or a Result carrying one); nothing is
mutated in place. Callers persist ``state.changes()`` through
``IUserRepository.update`` as a single write.
"""

import secrets
from datetime import datetime, timedelta
from typing import Dict, FrozenSet, Optional

from pydantic import BaseModel, ConfigDict

from auth_service.libs.result import Error, Result, Return

from .base import utc_now
from .entities import AccountLockReason, AuthStatus, User
from .errors import ErrorCode

MAX_FAILED_LOGIN_ATTEMPTS = 5
LOCKOUT_DURATION = timedelta(minutes=30)

AUTH_STATUS_TRANSITIONS: Dict[AuthStatus, FrozenSet[AuthStatus]] = {
    AuthStatus.pending: frozenset({AuthStatus.active, AuthStatus.blocked}),
    AuthStatus.active: frozenset(
        {AuthStatus.inactive, AuthStatus.suspended, AuthStatus.blocked}
    ),
    AuthStatus.inactive: frozenset({AuthStatus.active, AuthStatus.blocked}),
    AuthStatus.suspended: frozenset({AuthStatus.active, AuthStatus.blocked}),
    AuthStatus.blocked: frozenset(),  # terminal
}


class AccountStatusSummary(BaseModel):
    status: AuthStatus
    can_login: bool
    is_locked: bool
    lock_reason: Optional[AccountLockReason] = None
    locked_until: Optional[datetime] = None
    failed_login_attempts: int
    email_verified: bool


class AccountState(BaseModel):
    """
    Snapshot of a user's authentication state.

    Business Rules:
    - can_authenticate() is the single gate before any token is issued
    - 5 consecutive failed logins lock the account for 30 minutes
    - A successful login, activate(), unlock() or credential reset clears
      the failed-attempt counter
    - blocked is terminal
    """

    model_config = ConfigDict(frozen=True)

    auth_status: AuthStatus
    is_active: bool
    email_verified: bool
    failed_login_attempts: int = 0
    locked_until: Optional[datetime] = None
    lock_reason: Optional[AccountLockReason] = None
    last_login_at: Optional[datetime] = None
    last_login_ip: Optional[str] = None
    verification_token: Optional[str] = None
    verification_token_expires_at: Optional[datetime] = None

    @classmethod
    def of(cls, user: User) -> "AccountState":
        return cls(
            auth_status=user.auth_status,
            is_active=user.is_active,
            email_verified=user.email_verified,
            failed_login_attempts=user.failed_login_attempts or 0,
            locked_until=user.locked_until,
            lock_reason=user.lock_reason,
            last_login_at=user.last_login_at,
            last_login_ip=user.last_login_ip,
            verification_token=user.verification_token,
            verification_token_expires_at=user.verification_token_expires_at,
        )

    def changes(self, since: Optional["AccountState"] = None) -> dict:
        """
        Fields to write back to the user record.

        With ``since``, only the fields that differ from that earlier
        snapshot are returned, keeping the write as narrow as possible.
        """
        fields = self.model_dump()
        if since is None:
            return fields
        previous = since.model_dump()
        return {name: value for name, value in fields.items() if previous[name] != value}

    def _with(self, **fields) -> "AccountState":
        return self.model_copy(update=fields)

    # === Predicates ===

    def is_locked(self, now: Optional[datetime] = None) -> bool:
        if self.locked_until is None:
            return False
        return (now or utc_now()) < self.locked_until

    def can_authenticate(self, now: Optional[datetime] = None) -> bool:
        return (
            self.is_active
            and self.auth_status == AuthStatus.active
            and not self.is_locked(now)
        )

    def can_transition_to(self, target: AuthStatus) -> bool:
        return target in AUTH_STATUS_TRANSITIONS[self.auth_status]

    def status_summary(self, now: Optional[datetime] = None) -> AccountStatusSummary:
        return AccountStatusSummary(
            status=self.auth_status,
            can_login=self.can_authenticate(now),
            is_locked=self.is_locked(now),
            lock_reason=self.lock_reason,
            locked_until=self.locked_until,
            failed_login_attempts=self.failed_login_attempts,
            email_verified=self.email_verified,
        )

    # === Status transitions ===

    def _transition(self, target: AuthStatus, **fields) -> Result["AccountState"]:
        if not self.can_transition_to(target):
            return Return.err(
                Error(
                    ErrorCode.INVALID_STATE_TRANSITION,
                    f"Cannot transition account from {self.auth_status.value} "
                    f"to {target.value}",
                )
            )
        return Return.ok(self._with(auth_status=target, **fields))

    def activate(self) -> Result["AccountState"]:
        return self._transition(
            AuthStatus.active,
            is_active=True,
            failed_login_attempts=0,
            locked_until=None,
            lock_reason=None,
        )

    def deactivate(self) -> Result["AccountState"]:
        return self._transition(AuthStatus.inactive, is_active=False)

    def restore(self) -> Result["AccountState"]:
        """Undo deactivate(); only an inactive account can be restored"""
        if self.auth_status != AuthStatus.inactive:
            return Return.err(
                Error(
                    ErrorCode.INVALID_STATE_TRANSITION,
                    f"Only inactive accounts can be restored (status: {self.auth_status.value})",
                )
            )
        return self.activate()

    def suspend(
        self, reason: AccountLockReason = AccountLockReason.administrative_action
    ) -> Result["AccountState"]:
        return self._transition(AuthStatus.suspended, lock_reason=reason)

    def block(
        self, reason: AccountLockReason = AccountLockReason.administrative_action
    ) -> Result["AccountState"]:
        return self._transition(AuthStatus.blocked, is_active=False, lock_reason=reason)

    # === Lockout ===

    def lock(
        self,
        reason: AccountLockReason,
        duration: timedelta = LOCKOUT_DURATION,
        now: Optional[datetime] = None,
    ) -> "AccountState":
        return self._with(locked_until=(now or utc_now()) + duration, lock_reason=reason)

    def unlock(self) -> "AccountState":
        return self._with(failed_login_attempts=0, locked_until=None, lock_reason=None)

    def record_failed_login(
        self,
        max_attempts: int = MAX_FAILED_LOGIN_ATTEMPTS,
        lockout_duration: timedelta = LOCKOUT_DURATION,
        now: Optional[datetime] = None,
    ) -> "AccountState":
        state = self._with(failed_login_attempts=self.failed_login_attempts + 1)
        if state.failed_login_attempts >= max_attempts:
            state = state.lock(
                AccountLockReason.multiple_failed_attempts, lockout_duration, now
            )
        return state

    def record_successful_login(
        self, ip_address: Optional[str] = None, now: Optional[datetime] = None
    ) -> "AccountState":
        return self._with(
            last_login_at=now or utc_now(),
            last_login_ip=ip_address,
            failed_login_attempts=0,
        )

    # === Email verification ===

    def issue_verification_token(
        self, token: str, ttl: timedelta, now: Optional[datetime] = None
    ) -> "AccountState":
        return self._with(
            verification_token=token,
            verification_token_expires_at=(now or utc_now()) + ttl,
        )

    def require_email_verification(
        self, token: str, ttl: timedelta, now: Optional[datetime] = None
    ) -> "AccountState":
        """The email address changed: it counts as unverified until the new token is used"""
        return self.issue_verification_token(token, ttl, now)._with(email_verified=False)

    def verify_email(
        self, token: str, now: Optional[datetime] = None
    ) -> Result["AccountState"]:
        """Consume the verification token; promotes pending accounts to active"""
        if self.email_verified:
            return Return.err(
                Error(ErrorCode.ALREADY_VERIFIED, "Email is already verified")
            )

        if self.verification_token is None or not secrets.compare_digest(
            self.verification_token, token
        ):
            return Return.err(
                Error(ErrorCode.INVALID_TOKEN, "Invalid or non-existent verification token")
            )

        if (
            self.verification_token_expires_at is None
            or (now or utc_now()) > self.verification_token_expires_at
        ):
            return Return.err(
                Error(
                    ErrorCode.TOKEN_EXPIRED,
                    "Verification token has expired. Please request a new verification email.",
                )
            )

        status = self.auth_status
        if status == AuthStatus.pending:
            status = AuthStatus.active

        return Return.ok(
            self._with(
                email_verified=True,
                verification_token=None,
                verification_token_expires_at=None,
                auth_status=status,
            )
        )
