from typing import Optional
from uuid import UUID

from sqlmodel import delete, select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from auth_service.app.repositories.user_repository import IUserRepository
from auth_service.domain.base import utc_now
from auth_service.domain.entities import User


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        stmt = (
            select(User)
            .where(User.email == email)
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        stmt = (
            select(User)
            .where(User.id == user_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, user: User) -> User:
        """Create a new user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def update(self, user_id: UUID, changes: dict) -> Optional[User]:
        """
        Apply a partial update as a single UPDATE statement.

        The row-level write is the only atomicity relied upon; concurrent
        writers to the same fields are last-write-wins.
        """
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(**changes, updated_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        await self.session.exec(stmt)
        return await self.get_by_id(user_id)

    async def get_by_verification_token(self, token: str) -> Optional[User]:
        """Get user by email verification token"""
        stmt = (
            select(User)
            .where(User.verification_token == token)
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def delete(self, user_id: UUID) -> bool:
        """Hard delete; True when a row was removed"""
        stmt = delete(User).where(User.id == user_id)
        result = await self.session.exec(stmt)
        return result.rowcount > 0
