from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest
from pydantic import ValidationError

from auth_service.domain.entities import (
    AccessTokenPayload,
    AuthToken,
    RefreshTokenPayload,
    TokenType,
    parse_token_payload,
)

NOW = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


def claims(token_type="access", ttl=timedelta(hours=1), **extra):
    iat = int(NOW.timestamp())
    fields = dict(
        sub=str(uuid4()),
        email="user@acme.com",
        iat=iat,
        exp=iat + int(ttl.total_seconds()),
        iss="auth-service",
        aud="auth-service-clients",
        type=token_type,
    )
    fields.update(extra)
    return fields


def test_parse_picks_payload_by_type():
    access = parse_token_payload(claims(jti="abc"))
    refresh = parse_token_payload(claims("refresh", tokenId="def"))

    assert isinstance(access, AccessTokenPayload)
    assert isinstance(refresh, RefreshTokenPayload)
    assert refresh.token_id == "def"


@pytest.mark.parametrize(
    "raw",
    [
        claims("reset_password", jti="abc"),
        claims(sub="not-a-uuid", jti="abc"),
        {"sub": str(uuid4()), "type": "access"},
    ],
)
def test_parse_rejects_bad_claims(raw):
    with pytest.raises(ValidationError):
        parse_token_payload(raw)


def test_from_payload():
    payload = parse_token_payload(claims("refresh", tokenId="tid"))

    token = AuthToken.from_payload("raw-token", payload)

    assert token.id == "tid"
    assert token.user_id == payload.user_id
    assert token.type == TokenType.refresh
    assert token.issued_at == NOW
    assert token.expires_at == NOW + timedelta(hours=1)
    assert not token.is_revoked


def test_expiry_helpers():
    token = AuthToken.from_payload("raw-token", parse_token_payload(claims(jti="abc")))

    assert token.remaining_seconds(now=NOW) == 3600
    assert not token.will_expire_soon(now=NOW)
    assert token.will_expire_soon(now=NOW + timedelta(minutes=50))

    later = NOW + timedelta(hours=1)
    assert token.remaining_seconds(now=later) == 0
    assert not token.will_expire_soon(now=later)
