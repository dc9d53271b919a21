"""
Signature renewal codes.

A renewal code is a short numeric code delivered out of band. Confirming
it replaces the password and rotates both signing keys; it is kept apart
from the email verification token on purpose.
"""

import secrets
from datetime import datetime, timedelta
from typing import Optional

from auth_service.libs.result import Error, Result, Return

from .base import utc_now
from .entities import User
from .errors import ErrorCode

RENEWAL_CODE_TTL = timedelta(hours=1)
MAX_RENEWAL_CODE_ATTEMPTS = 5


def generate_renewal_code() -> str:
    """Random 6-digit numeric code"""
    return str(100000 + secrets.randbelow(900000))


def issue_renewal_code(
    code: str, ttl: timedelta = RENEWAL_CODE_TTL, now: Optional[datetime] = None
) -> dict:
    return {
        "renewal_verification_token": code,
        "renewal_verification_token_expires_at": (now or utc_now()) + ttl,
        "renewal_failed_attempts": 0,
    }


def clear_renewal_code() -> dict:
    return {
        "renewal_verification_token": None,
        "renewal_verification_token_expires_at": None,
        "renewal_failed_attempts": 0,
    }


def record_renewal_miss(user: User, max_attempts: int = MAX_RENEWAL_CODE_ATTEMPTS) -> dict:
    """
    Count a wrong code. The code is burned once ``max_attempts`` misses
    have been made, so a new one has to be requested.
    """
    attempts = (user.renewal_failed_attempts or 0) + 1
    if attempts >= max_attempts:
        return clear_renewal_code()
    return {"renewal_failed_attempts": attempts}


def check_renewal_code(
    user: User, code: str, now: Optional[datetime] = None
) -> Result[None]:
    if not user.renewal_verification_token or not user.renewal_verification_token_expires_at:
        return Return.err(
            Error(
                ErrorCode.NO_RENEWAL_REQUESTED,
                "No renewal verification code requested",
            )
        )

    # compare_digest only accepts ASCII str, bytes take any input
    if not secrets.compare_digest(
        user.renewal_verification_token.encode(), code.encode()
    ):
        return Return.err(Error(ErrorCode.INVALID_CODE, "Invalid verification code"))

    if (now or utc_now()) > user.renewal_verification_token_expires_at:
        return Return.err(Error(ErrorCode.CODE_EXPIRED, "Verification code has expired"))

    return Return.ok(None)
