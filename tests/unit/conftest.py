from unittest.mock import AsyncMock, MagicMock

import bcrypt
import pytest

from auth_service.app.services.credential_hasher import CredentialHasher
from auth_service.app.settings import AuthSettings
from auth_service.domain.entities import AuthStatus, User
from auth_service.domain.signing_keys import SigningKeys

PASSWORD = "SecurePass123!"


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.get_by_verification_token = AsyncMock(return_value=None)
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.update = AsyncMock()
    uow.users.delete = AsyncMock(return_value=True)
    return uow


@pytest.fixture
def settings():
    """Fast bcrypt for tests"""
    return AuthSettings(bcrypt_rounds=4)


@pytest.fixture
def hasher(settings):
    return CredentialHasher(settings.bcrypt_rounds)


@pytest.fixture
def make_user():
    def _make_user(**overrides) -> User:
        fields = dict(
            email="user@acme.com",
            password_hash=bcrypt.hashpw(PASSWORD.encode(), bcrypt.gensalt(4)).decode(),
            auth_status=AuthStatus.active,
            is_active=True,
            email_verified=True,
            failed_login_attempts=0,
            **SigningKeys.generate().changes(),
        )
        fields.update(overrides)
        return User(**fields)

    return _make_user


@pytest.fixture
def apply_update(mock_uow):
    """Make users.update apply the changes to the user it was given and return it"""

    def _apply_update(user: User):
        async def _update(user_id, changes):
            for name, value in changes.items():
                setattr(user, name, value)
            return user

        mock_uow.users.update.side_effect = _update
        return user

    return _apply_update
