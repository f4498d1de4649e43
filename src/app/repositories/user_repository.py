from abc import ABC, abstractmethod
from typing import Dict, Iterable, Optional

from src.domain.entities import User


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def get_by_ids(self, user_ids: Iterable[int]) -> Dict[int, User]:
        """Get users by IDs, keyed by ID; unknown IDs are absent"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user"""
        pass
