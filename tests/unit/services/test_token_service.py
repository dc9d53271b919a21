from datetime import UTC, datetime, timedelta

from config import ApplicationConfig
from auth_service.app.services.token_service import TokenService
from auth_service.app.settings import AuthSettings, TokenPolicy
from auth_service.domain.entities import AccessTokenPayload, RefreshTokenPayload, TokenType
from auth_service.domain.errors import ErrorCode
from auth_service.domain.signing_keys import SigningKeys


def test_issue_pair_signs_with_user_keys(settings, make_user):
    user = make_user()
    tokens = TokenService(settings)

    pair = tokens.issue_pair(user).value

    assert pair.token_type == "Bearer"
    assert pair.expires_in == 3600
    assert pair.refresh_expires_in == 7 * 24 * 3600

    access = tokens.verify(pair.access_token, user, TokenType.access).value
    refresh = tokens.verify(pair.refresh_token, user, TokenType.refresh).value
    assert isinstance(access, AccessTokenPayload)
    assert isinstance(refresh, RefreshTokenPayload)
    assert access.user_id == user.id
    assert access.email == user.email
    assert access.exp - access.iat == 3600
    assert refresh.exp - refresh.iat == 7 * 24 * 3600
    assert refresh.token_id


def test_access_token_is_not_a_refresh_token(settings, make_user):
    user = make_user()
    tokens = TokenService(settings)
    pair = tokens.issue_pair(user).value

    result = tokens.verify(pair.access_token, user, TokenType.refresh)

    assert result.error.code == ErrorCode.INVALID_TOKEN


def test_rotated_key_invalidates_token(settings, make_user):
    user = make_user()
    tokens = TokenService(settings)
    pair = tokens.issue_pair(user).value

    user.refresh_signing_key = SigningKeys.of(user).rotate_refresh().refresh_signing_key

    assert tokens.verify(pair.refresh_token, user, TokenType.refresh).is_err()
    assert tokens.verify(pair.access_token, user, TokenType.access).is_ok()


def test_token_of_another_user_is_rejected(settings, make_user):
    user = make_user()
    other = make_user(email="other@acme.com", **SigningKeys.of(user).changes())
    tokens = TokenService(settings)
    pair = tokens.issue_pair(user).value

    result = tokens.verify(pair.access_token, other, TokenType.access)

    assert result.error.code == ErrorCode.INVALID_TOKEN


def test_expired_token(make_user):
    settings = AuthSettings(
        bcrypt_rounds=4, token_policy=TokenPolicy(access_ttl=timedelta(minutes=5))
    )
    user = make_user()
    tokens = TokenService(settings)
    pair = tokens.issue_pair(user, now=datetime.now(UTC) - timedelta(minutes=10)).value

    result = tokens.verify(pair.access_token, user, TokenType.access)

    assert result.error.code == ErrorCode.TOKEN_EXPIRED


def test_missing_signing_key(settings, make_user):
    user = make_user(access_signing_key="")

    result = TokenService(settings).issue_pair(user)

    assert result.error.code == ErrorCode.SIGNING_KEY_MISSING


def test_subject_of(settings, make_user):
    user = make_user()
    pair = TokenService(settings).issue_pair(user).value

    assert TokenService.subject_of(pair.refresh_token).value == user.id
    assert TokenService.subject_of("garbage").error.code == ErrorCode.INVALID_TOKEN


def test_default_token_policy():
    policy = TokenPolicy()

    assert policy.ttl_for(TokenType.access) == timedelta(hours=1)
    assert policy.ttl_for(TokenType.refresh) == timedelta(days=7)
    assert policy.ttl_for(TokenType.reset_password) == timedelta(minutes=15)
    assert policy.ttl_for(TokenType.email_verification) == timedelta(hours=24)


def test_settings_from_config():
    settings = AuthSettings.from_config(ApplicationConfig)

    assert settings.token_policy == TokenPolicy()
    assert settings.max_failed_login_attempts == 5
    assert settings.max_renewal_code_attempts == 5
    assert settings.renewal_code_ttl == timedelta(hours=1)
