from abc import ABC, abstractmethod
from typing import Optional

from src.domain.entities import Profile


class IProfileRepository(ABC):
    """Profile repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, profile_id: int) -> Optional[Profile]:
        """Get profile by ID"""
        pass

    @abstractmethod
    async def create(self, profile: Profile) -> Profile:
        """Create a new profile"""
        pass
