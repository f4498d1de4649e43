from typing import Dict, Iterable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.user_repository import IUserRepository
from src.domain.entities import User
from src.domain.errors import StorageUnavailable


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Get user by ID"""
        stmt = select(User).where(User.id == user_id)
        try:
            result = await self.session.exec(stmt)
            return result.one_or_none()
        except SQLAlchemyError as exc:
            raise StorageUnavailable(f"Could not load user {user_id}") from exc

    async def get_by_ids(self, user_ids: Iterable[int]) -> Dict[int, User]:
        """Get users by IDs in a single query"""
        ids = sorted(set(user_ids))
        if not ids:
            return {}

        stmt = select(User).where(User.id.in_(ids))
        try:
            result = await self.session.exec(stmt)
            return {user.id: user for user in result.all()}
        except SQLAlchemyError as exc:
            raise StorageUnavailable("Could not resolve user names") from exc

    async def create(self, user: User) -> User:
        """Create a new user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user
