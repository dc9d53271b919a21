from fastapi import Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from auth_service.adapter.services.notification_service import LoggingNotificationService
from auth_service.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from auth_service.api.error import ClientError
from auth_service.app.services.notification_service import INotificationService
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.app.settings import AuthSettings
from auth_service.app.use_cases.auth import AuthenticateUseCase, AuthenticatedIdentity
from auth_service.domain.entities import User  # noqa: F401  registers the table
from auth_service.domain.errors import ErrorCode

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer()

auth_settings = AuthSettings.from_config(ApplicationConfig)
notification_service = LoggingNotificationService()


async def init_db():
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_auth_settings() -> AuthSettings:
    return auth_settings


def get_notification_service() -> INotificationService:
    return notification_service


async def get_current_identity(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    uow: UnitOfWork = Depends(get_unit_of_work),
    settings: AuthSettings = Depends(get_auth_settings),
) -> AuthenticatedIdentity:
    """
    Dependency to verify the bearer access token against the user's
    current access key.

    Raises:
        ClientError: 401 if token is invalid, expired or revoked;
            403 if the account can no longer authenticate
    """
    use_case = AuthenticateUseCase(uow, settings)
    result = await use_case.execute(credentials.credentials)

    if result.is_err():
        error = result.error
        if error.code in (ErrorCode.ACCOUNT_DEACTIVATED, ErrorCode.ACCOUNT_LOCKED):
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)

    return result.value
