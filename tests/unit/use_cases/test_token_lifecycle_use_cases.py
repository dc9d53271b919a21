from datetime import UTC, datetime, timedelta

import pytest

from auth_service.app.services.token_service import TokenService
from auth_service.app.use_cases.auth import (
    AuthenticateUseCase,
    IntrospectTokenUseCase,
    LogoutUseCase,
    RefreshTokenUseCase,
    RevokeTokenUseCase,
)
from auth_service.domain.base import utc_now
from auth_service.domain.entities import AuthStatus, TokenType
from auth_service.domain.errors import ErrorCode


@pytest.fixture
def user(make_user, apply_update, mock_uow):
    user = apply_update(make_user())
    mock_uow.users.get_by_id.return_value = user
    return user


@pytest.fixture
def pair(settings, user):
    return TokenService(settings).issue_pair(user).value


class TestRefresh:
    @pytest.mark.asyncio
    async def test_refresh_issues_new_pair_without_rotating(
        self, mock_uow, settings, user, pair
    ):
        keys_before = (user.access_signing_key, user.refresh_signing_key)

        use_case = RefreshTokenUseCase(mock_uow, settings)
        result = await use_case.execute(pair.refresh_token)

        assert result.is_ok()
        assert result.value.access_token
        assert result.value.refresh_token
        mock_uow.users.get_by_id.assert_called_once_with(user.id)
        mock_uow.users.update.assert_not_called()
        assert (user.access_signing_key, user.refresh_signing_key) == keys_before

        # The old refresh token is still usable
        again = await use_case.execute(pair.refresh_token)
        assert again.is_ok()

    @pytest.mark.asyncio
    async def test_unknown_subject_is_invalid_token(self, mock_uow, settings, pair):
        mock_uow.users.get_by_id.return_value = None

        use_case = RefreshTokenUseCase(mock_uow, settings)
        result = await use_case.execute(pair.refresh_token)

        assert result.error.code == ErrorCode.INVALID_TOKEN

    @pytest.mark.asyncio
    async def test_garbage_token(self, mock_uow, settings):
        use_case = RefreshTokenUseCase(mock_uow, settings)
        result = await use_case.execute("garbage")

        assert result.error.code == ErrorCode.INVALID_TOKEN
        mock_uow.users.get_by_id.assert_not_called()

    @pytest.mark.asyncio
    async def test_access_token_cannot_refresh(self, mock_uow, settings, pair):
        use_case = RefreshTokenUseCase(mock_uow, settings)
        result = await use_case.execute(pair.access_token)

        assert result.error.code == ErrorCode.INVALID_TOKEN

    @pytest.mark.asyncio
    async def test_deactivated_account(self, mock_uow, settings, user, pair):
        user.auth_status = AuthStatus.inactive

        use_case = RefreshTokenUseCase(mock_uow, settings)
        result = await use_case.execute(pair.refresh_token)

        assert result.error.code == ErrorCode.ACCOUNT_DEACTIVATED

    @pytest.mark.asyncio
    async def test_locked_account(self, mock_uow, settings, user, pair):
        user.locked_until = utc_now() + timedelta(minutes=5)

        use_case = RefreshTokenUseCase(mock_uow, settings)
        result = await use_case.execute(pair.refresh_token)

        assert result.error.code == ErrorCode.ACCOUNT_LOCKED


class TestRevokeAndLogout:
    @pytest.mark.asyncio
    async def test_revoke_rotates_refresh_key_only(self, mock_uow, settings, user, pair):
        access_key, refresh_key = user.access_signing_key, user.refresh_signing_key

        use_case = RevokeTokenUseCase(mock_uow, settings)
        result = await use_case.execute(pair.refresh_token)

        assert result.is_ok()
        assert user.access_signing_key == access_key
        assert user.refresh_signing_key != refresh_key
        mock_uow.commit.assert_called_once()

        tokens = TokenService(settings)
        assert (await RefreshTokenUseCase(mock_uow, settings).execute(pair.refresh_token)).is_err()
        assert tokens.verify(pair.access_token, user, TokenType.access).is_ok()

    @pytest.mark.asyncio
    async def test_logout_rotates_both_keys(self, mock_uow, settings, user, pair):
        access_key, refresh_key = user.access_signing_key, user.refresh_signing_key

        use_case = LogoutUseCase(mock_uow, settings)
        result = await use_case.execute(pair.refresh_token)

        assert result.is_ok()
        assert user.access_signing_key != access_key
        assert user.refresh_signing_key != refresh_key

        authenticate = AuthenticateUseCase(mock_uow, settings)
        assert (await authenticate.execute(pair.access_token)).is_err()

    @pytest.mark.asyncio
    async def test_logout_with_invalid_token_changes_nothing(self, mock_uow, settings, user):
        use_case = LogoutUseCase(mock_uow, settings)
        result = await use_case.execute("garbage")

        assert result.error.code == ErrorCode.INVALID_TOKEN
        mock_uow.users.update.assert_not_called()
        mock_uow.commit.assert_not_called()


class TestAuthenticate:
    @pytest.mark.asyncio
    async def test_identity_from_access_token(self, mock_uow, settings, user, pair):
        use_case = AuthenticateUseCase(mock_uow, settings)
        result = await use_case.execute(pair.access_token)

        assert result.is_ok()
        identity = result.value
        assert identity.user_id == str(user.id)
        assert identity.email == user.email
        assert identity.token_type == "access"
        assert identity.expires_at - identity.issued_at == timedelta(hours=1)
        assert 3500 < identity.expires_in <= 3600
        assert not identity.expires_soon

    @pytest.mark.asyncio
    async def test_identity_flags_token_close_to_expiry(self, mock_uow, settings, user):
        issued = TokenService(settings).issue_pair(
            user, now=datetime.now(UTC) - timedelta(minutes=50)
        )

        result = await AuthenticateUseCase(mock_uow, settings).execute(
            issued.value.access_token
        )

        assert result.value.expires_soon
        assert result.value.expires_in <= 600

    @pytest.mark.asyncio
    async def test_refresh_token_is_not_accepted(self, mock_uow, settings, pair):
        use_case = AuthenticateUseCase(mock_uow, settings)
        result = await use_case.execute(pair.refresh_token)

        assert result.error.code == ErrorCode.INVALID_TOKEN

    @pytest.mark.asyncio
    async def test_blocked_account(self, mock_uow, settings, user, pair):
        user.auth_status = AuthStatus.blocked
        user.is_active = False

        use_case = AuthenticateUseCase(mock_uow, settings)
        result = await use_case.execute(pair.access_token)

        assert result.error.code == ErrorCode.ACCOUNT_DEACTIVATED


class TestIntrospect:
    @pytest.mark.asyncio
    async def test_active_token(self, mock_uow, settings, user, pair):
        use_case = IntrospectTokenUseCase(mock_uow, settings)
        result = await use_case.execute(pair.access_token)

        data = result.value
        assert data.active
        assert data.sub == str(user.id)
        assert data.email == user.email
        assert data.iss == settings.issuer
        assert data.aud == settings.audience
        assert data.token_type == "access"
        assert data.exp - data.iat == 3600
        assert data.error is None

    @pytest.mark.asyncio
    async def test_refresh_token_is_introspected_against_refresh_key(
        self, mock_uow, settings, pair
    ):
        use_case = IntrospectTokenUseCase(mock_uow, settings)
        result = await use_case.execute(pair.refresh_token)

        assert result.value.active
        assert result.value.token_type == "refresh"

    @pytest.mark.asyncio
    async def test_malformed(self, mock_uow, settings):
        result = await IntrospectTokenUseCase(mock_uow, settings).execute("garbage")

        assert not result.value.active
        assert result.value.error == "malformed"

    @pytest.mark.asyncio
    async def test_user_not_found(self, mock_uow, settings, pair):
        mock_uow.users.get_by_id.return_value = None

        result = await IntrospectTokenUseCase(mock_uow, settings).execute(pair.access_token)

        assert result.value.error == "user not found"

    @pytest.mark.asyncio
    async def test_signature_invalid_after_rotation(self, mock_uow, settings, user, pair):
        user.access_signing_key = "rotated-" + user.access_signing_key[:40]

        result = await IntrospectTokenUseCase(mock_uow, settings).execute(pair.access_token)

        assert result.value.error == "signature invalid"

    @pytest.mark.asyncio
    async def test_expired(self, mock_uow, settings, user):
        issued = TokenService(settings).issue_pair(
            user, now=datetime.now(UTC) - timedelta(hours=2)
        )

        result = await IntrospectTokenUseCase(mock_uow, settings).execute(
            issued.value.access_token
        )

        assert result.value.error == "expired"

    @pytest.mark.asyncio
    async def test_account_inactive(self, mock_uow, settings, user, pair):
        user.auth_status = AuthStatus.suspended

        result = await IntrospectTokenUseCase(mock_uow, settings).execute(pair.access_token)

        assert result.value.error == "account inactive"

