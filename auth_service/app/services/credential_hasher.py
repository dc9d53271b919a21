import asyncio
from functools import cached_property
from typing import Optional

import bcrypt

from auth_service.domain.errors import ErrorCode
from auth_service.libs.result import Error

# bcrypt only looks at the first 72 bytes; longer inputs are rejected
BCRYPT_MAX_PASSWORD_BYTES = 72


def check_password_policy(password: str, min_length: int = 8) -> Optional[Error]:
    """Return an INVALID_PASSWORD error when password breaks the length rules"""
    if len(password) < min_length:
        return Error(
            ErrorCode.INVALID_PASSWORD,
            f"Password must be at least {min_length} characters",
        )
    if len(password.encode()) > BCRYPT_MAX_PASSWORD_BYTES:
        return Error(
            ErrorCode.INVALID_PASSWORD,
            f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes",
        )
    return None


class CredentialHasher:
    """One-way bcrypt hashing; hashing runs off the event loop"""

    def __init__(self, rounds: int = 12):
        self.rounds = rounds

    @cached_property
    def _dummy_hash(self) -> bytes:
        return bcrypt.hashpw(b"dummy_password", bcrypt.gensalt(self.rounds))

    def _hash(self, password: str) -> str:
        return bcrypt.hashpw(password.encode(), bcrypt.gensalt(self.rounds)).decode()

    @staticmethod
    def _check(password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode(), password_hash.encode())
        except ValueError:
            # Over-long password or corrupt hash: treat as mismatch
            return False

    async def hash(self, password: str) -> str:
        return await asyncio.to_thread(self._hash, password)

    async def verify(self, password: str, password_hash: str) -> bool:
        return await asyncio.to_thread(self._check, password, password_hash)

    async def verify_dummy(self, password: str) -> None:
        """Spend the same time as a real check when the user does not exist"""
        await asyncio.to_thread(self._check, password, self._dummy_hash.decode())
