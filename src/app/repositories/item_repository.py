from abc import ABC, abstractmethod
from typing import Any, Optional

from src.domain.trackables import TrackableType


class IItemRepository(ABC):
    """Trackable item repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, trackable: TrackableType, items_id: int) -> Optional[Any]:
        """Load one item of a trackable type, None when it does not exist"""
        pass

    @abstractmethod
    async def create(self, item: Any) -> Any:
        """Create a new item of any trackable type"""
        pass
