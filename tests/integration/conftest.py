import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from auth_service.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from auth_service.api.app import create_app
from auth_service.app.services.notification_service import INotificationService
from auth_service.app.settings import AuthSettings
from auth_service.depends import get_auth_settings, get_notification_service, get_unit_of_work
from auth_service.domain.entities import User  # noqa: F401

PASSWORD = "SecurePass123!"


class RecordingNotificationService(INotificationService):
    """Keeps every delivered code so tests can read them back"""

    def __init__(self):
        self.sent = []

    async def send_verification_code(self, email: str, code: str) -> None:
        self.sent.append((email, code))

    def last_code(self, email: str) -> str:
        return [code for to, code in self.sent if to == email][-1]


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )


@pytest_asyncio.fixture
def notifier():
    return RecordingNotificationService()


@pytest_asyncio.fixture
async def client(session_factory, notifier):
    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        async with session_factory() as session:
            yield SqlAlchemyUnitOfWork(session)

    settings = AuthSettings(bcrypt_rounds=4)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_auth_settings] = lambda: settings
    app.dependency_overrides[get_notification_service] = lambda: notifier

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def registered_user(client, notifier):
    """A registered, still unverified user"""
    response = await client.post(
        "/registration/register",
        json={"email": "user@acme.com", "password": PASSWORD, "first_name": "Ada"},
    )
    assert response.status_code == 201
    return response.json()["user"]


@pytest_asyncio.fixture
async def active_user(client, notifier, registered_user):
    """A registered user whose email has been verified"""
    token = notifier.last_code(registered_user["email"])
    response = await client.post("/registration/verify-email", json={"token": token})
    assert response.status_code == 200
    return registered_user


@pytest_asyncio.fixture
async def tokens(client, active_user):
    response = await client.post(
        "/auth/login", json={"email": active_user["email"], "password": PASSWORD}
    )
    assert response.status_code == 200
    return response.json()
