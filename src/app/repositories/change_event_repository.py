from abc import ABC, abstractmethod
from typing import List

from src.app.queries.filter_compiler import Predicate
from src.app.queries.sorting import SortSpec
from src.domain.entities import ChangeEvent


class IChangeEventRepository(ABC):
    """ChangeEvent repository interface - application layer"""

    @abstractmethod
    async def create(self, change_event: ChangeEvent) -> ChangeEvent:
        """Append a new change event (immutable)"""
        pass

    @abstractmethod
    async def count(self, itemtype: str, items_id: int, predicate: Predicate) -> int:
        """
        Count events of one item matching the predicate, ignoring pagination.

        Raises:
            StorageUnavailable: the store could not be queried
        """
        pass

    @abstractmethod
    async def fetch(
        self,
        itemtype: str,
        items_id: int,
        predicate: Predicate,
        sort: SortSpec,
        offset: int,
        limit: int,
    ) -> List[ChangeEvent]:
        """
        Get one page of events of one item.

        Returns:
            At most `limit` events after skipping `offset`, ordered by `sort`
            with id as tie-breaker so pages never overlap.

        Raises:
            StorageUnavailable: the store could not be queried
        """
        pass
