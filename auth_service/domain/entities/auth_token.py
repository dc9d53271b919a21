"""
AuthToken Entity

Transient view of a presented token. Tokens are never persisted: an
AuthToken is rebuilt from the token string and its verified payload.
"""

from datetime import UTC, datetime, timedelta
from typing import Annotated, Literal, Optional, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from .enums import TokenType


class TokenClaims(BaseModel):
    """Registered claims shared by every token type"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    sub: str
    email: str
    iat: int
    exp: int
    iss: str
    aud: str

    @field_validator("sub")
    @classmethod
    def _sub_is_uuid(cls, value: str) -> str:
        UUID(value)
        return value

    @property
    def user_id(self) -> UUID:
        return UUID(self.sub)


class AccessTokenPayload(TokenClaims):
    type: Literal["access"] = "access"
    jti: str
    is_active: bool = True
    email_verified: bool = False


class RefreshTokenPayload(TokenClaims):
    type: Literal["refresh"] = "refresh"
    token_id: str = Field(alias="tokenId")


TokenPayload = Annotated[
    Union[AccessTokenPayload, RefreshTokenPayload], Field(discriminator="type")
]

token_payload_adapter = TypeAdapter(TokenPayload)


def parse_token_payload(claims: dict) -> Union[AccessTokenPayload, RefreshTokenPayload]:
    """
    Validate raw claims into the payload model for their declared type.

    Raises:
        pydantic.ValidationError: claims are missing, mistyped, or the type
            is not access/refresh
    """
    return token_payload_adapter.validate_python(claims)


class AuthToken(BaseModel):
    """
    AuthToken - a presented token together with its verified payload.

    Business Rules:
    - Revocation is not stored: a token is revoked when the signing key
      that produced it is no longer the user's current key
    - Expiry is compared against wall-clock UTC time
    """

    model_config = ConfigDict(frozen=True)

    id: str
    user_id: UUID
    type: TokenType
    token: str
    payload: Union[AccessTokenPayload, RefreshTokenPayload]
    issued_at: datetime
    expires_at: datetime
    is_revoked: bool = False

    @classmethod
    def from_payload(
        cls,
        token: str,
        payload: Union[AccessTokenPayload, RefreshTokenPayload],
        is_revoked: bool = False,
    ) -> "AuthToken":
        token_id = (
            payload.token_id
            if isinstance(payload, RefreshTokenPayload)
            else payload.jti
        )
        return cls(
            id=token_id,
            user_id=payload.user_id,
            type=payload.type,
            token=token,
            payload=payload,
            issued_at=datetime.fromtimestamp(payload.iat, UTC),
            expires_at=datetime.fromtimestamp(payload.exp, UTC),
            is_revoked=is_revoked,
        )

    def remaining_seconds(self, now: Optional[datetime] = None) -> int:
        now = now or datetime.now(UTC)
        return max(0, int((self.expires_at - now).total_seconds()))

    def will_expire_soon(
        self, within: timedelta = timedelta(minutes=15), now: Optional[datetime] = None
    ) -> bool:
        remaining = self.remaining_seconds(now)
        return 0 < remaining <= within.total_seconds()
