"""
Authentication settings value object.

Built once from ApplicationConfig at bootstrap and handed to use cases at
construction, so the core never reads process-wide configuration.
"""

from datetime import timedelta
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field

from auth_service.domain.entities import SigningAlgorithm, TokenType


class TokenPolicy(BaseModel):
    """Lifetime of each token type"""

    model_config = ConfigDict(frozen=True)

    access_ttl: timedelta = timedelta(hours=1)
    refresh_ttl: timedelta = timedelta(days=7)
    reset_password_ttl: timedelta = timedelta(minutes=15)
    email_verification_ttl: timedelta = timedelta(hours=24)

    def ttl_for(self, token_type: TokenType) -> timedelta:
        return {
            TokenType.access: self.access_ttl,
            TokenType.refresh: self.refresh_ttl,
            TokenType.reset_password: self.reset_password_ttl,
            TokenType.email_verification: self.email_verification_ttl,
        }[token_type]


class AuthSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    issuer: str = "auth-service"
    audience: str = "auth-service-clients"
    algorithm: SigningAlgorithm = SigningAlgorithm.HS256
    allowed_algorithms: Tuple[SigningAlgorithm, ...] = (SigningAlgorithm.HS256,)
    leeway_seconds: int = Field(default=0, ge=0)
    token_policy: TokenPolicy = TokenPolicy()

    max_failed_login_attempts: int = Field(default=5, ge=1)
    lockout_duration: timedelta = timedelta(minutes=30)
    renewal_code_ttl: timedelta = timedelta(hours=1)
    max_renewal_code_attempts: int = Field(default=5, ge=1)

    bcrypt_rounds: int = Field(default=12, ge=4, le=31)
    min_password_length: int = 8

    @classmethod
    def from_config(cls, config) -> "AuthSettings":
        """Build settings from an ApplicationConfig-like class"""
        return cls(
            issuer=config.JWT_ISSUER,
            audience=config.JWT_AUDIENCE,
            algorithm=SigningAlgorithm(config.JWT_ALGORITHM),
            allowed_algorithms=tuple(
                SigningAlgorithm(alg) for alg in config.JWT_ALLOWED_ALGORITHMS
            ),
            leeway_seconds=config.JWT_LEEWAY_SECONDS,
            token_policy=TokenPolicy(
                access_ttl=timedelta(seconds=config.ACCESS_TOKEN_TTL_SECONDS),
                refresh_ttl=timedelta(seconds=config.REFRESH_TOKEN_TTL_SECONDS),
                reset_password_ttl=timedelta(
                    seconds=config.RESET_PASSWORD_TOKEN_TTL_SECONDS
                ),
                email_verification_ttl=timedelta(
                    seconds=config.EMAIL_VERIFICATION_TOKEN_TTL_SECONDS
                ),
            ),
            max_failed_login_attempts=config.MAX_FAILED_LOGIN_ATTEMPTS,
            lockout_duration=timedelta(minutes=config.LOCKOUT_DURATION_MINUTES),
            renewal_code_ttl=timedelta(minutes=config.RENEWAL_CODE_TTL_MINUTES),
            max_renewal_code_attempts=config.MAX_RENEWAL_CODE_ATTEMPTS,
            bcrypt_rounds=config.BCRYPT_ROUNDS,
        )
