"""
Token Codec

Encodes, decodes and verifies signed, expiring tokens against a caller
supplied symmetric key. Knows nothing about users: key selection is the
caller's job.
"""

from datetime import UTC, datetime, timedelta
from typing import Iterable, Optional

from jose import ExpiredSignatureError, JWTError, jwt

from auth_service.domain.entities import SigningAlgorithm
from auth_service.domain.errors import ErrorCode
from auth_service.libs.result import Error, Result, Return

HMAC_ALGORITHMS = frozenset(alg.value for alg in SigningAlgorithm)


def issue_token(
    claims: dict,
    key: str,
    ttl: timedelta,
    algorithm: str,
    issuer: str,
    audience: str,
    now: Optional[datetime] = None,
) -> str:
    """
    Sign claims into a token string.

    Args:
        claims: Token-specific claims (sub, email, type, ...)
        key: Symmetric signing key
        ttl: Lifetime; exp - iat equals ttl in whole seconds
        algorithm: HMAC algorithm name (HS256, HS384, HS512)
        issuer: Value for the iss claim
        audience: Value for the aud claim
        now: Issue time, defaults to current UTC time

    Returns:
        Signed token string

    Raises:
        ValueError: algorithm is not an HMAC algorithm
    """
    algorithm = getattr(algorithm, "value", algorithm)
    if algorithm not in HMAC_ALGORITHMS:
        raise ValueError(f"Unsupported signing algorithm: {algorithm}")

    issued_at = int((now or datetime.now(UTC)).timestamp())
    payload = {
        **claims,
        "iat": issued_at,
        "exp": issued_at + int(ttl.total_seconds()),
        "iss": issuer,
        "aud": audience,
    }
    return jwt.encode(payload, key, algorithm=algorithm)


def decode_unverified(token: str) -> Result[dict]:
    """
    Read claims without checking signature or expiry.

    Only for extracting the subject before key lookup; never trust the
    result for an authorization decision.
    """
    try:
        claims = jwt.get_unverified_claims(token)
    except JWTError:
        return Return.err(Error(ErrorCode.MALFORMED_TOKEN, "Malformed token"))

    if not isinstance(claims, dict):
        return Return.err(Error(ErrorCode.MALFORMED_TOKEN, "Malformed token"))

    return Return.ok(claims)


def verify_token(
    token: str,
    key: str,
    issuer: str,
    audience: str,
    algorithms: Iterable[str],
    leeway_seconds: int = 0,
) -> Result[dict]:
    """
    Verify signature, expiry, issuer and audience.

    Returns:
        Result with the verified claims, or Error with one of
        MALFORMED_TOKEN, INVALID_SIGNATURE, TOKEN_EXPIRED, ISSUER_MISMATCH,
        AUDIENCE_MISMATCH
    """
    unverified = decode_unverified(token)
    if unverified.is_err():
        return unverified

    allowed = [getattr(alg, "value", alg) for alg in algorithms]
    try:
        claims = jwt.decode(
            token,
            key,
            algorithms=allowed,
            options={
                "verify_aud": False,
                "verify_iss": False,
                "leeway": leeway_seconds,
            },
        )
    except ExpiredSignatureError:
        return Return.err(Error(ErrorCode.TOKEN_EXPIRED, "Token has expired"))
    except JWTError:
        return Return.err(
            Error(ErrorCode.INVALID_SIGNATURE, "Token signature invalid")
        )

    if claims.get("iss") != issuer:
        return Return.err(Error(ErrorCode.ISSUER_MISMATCH, "Token issuer mismatch"))

    if claims.get("aud") != audience:
        return Return.err(
            Error(ErrorCode.AUDIENCE_MISMATCH, "Token audience mismatch")
        )

    return Return.ok(claims)
