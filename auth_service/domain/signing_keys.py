"""
Per-user signing keys.

Each user owns two independent HMAC secrets. Tokens are verified only
against the current value of the key matching their type, so replacing a
key revokes every token it ever signed without keeping a revocation list.
"""

import secrets

from pydantic import BaseModel, ConfigDict

from .entities import TokenType, User

# 32 random bytes, well above the 128-bit floor
SIGNING_KEY_BYTES = 32


class SigningKeyMissingError(Exception):
    """A stored user lacks one of its signing keys (data integrity failure)"""


def generate_signing_key() -> str:
    return secrets.token_urlsafe(SIGNING_KEY_BYTES)


class SigningKeys(BaseModel):
    model_config = ConfigDict(frozen=True)

    access_signing_key: str
    refresh_signing_key: str

    @classmethod
    def generate(cls) -> "SigningKeys":
        return cls(
            access_signing_key=generate_signing_key(),
            refresh_signing_key=generate_signing_key(),
        )

    @classmethod
    def of(cls, user: User) -> "SigningKeys":
        if not user.access_signing_key or not user.refresh_signing_key:
            raise SigningKeyMissingError(f"User {user.id} is missing a signing key")
        return cls(
            access_signing_key=user.access_signing_key,
            refresh_signing_key=user.refresh_signing_key,
        )

    def key_for(self, token_type: TokenType) -> str:
        if token_type == TokenType.access:
            return self.access_signing_key
        if token_type == TokenType.refresh:
            return self.refresh_signing_key
        raise ValueError(f"No per-user signing key for token type: {token_type}")

    def rotate_refresh(self) -> "SigningKeys":
        """Invalidate every refresh token, keep access tokens valid"""
        return self.model_copy(update={"refresh_signing_key": generate_signing_key()})

    def rotate_all(self) -> "SigningKeys":
        return SigningKeys.generate()

    def changes(self) -> dict:
        return self.model_dump()
