from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.item_repository import IItemRepository
from src.domain.errors import StorageUnavailable
from src.domain.trackables import TrackableType


class ItemRepository(IItemRepository):
    """Trackable item repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, trackable: TrackableType, items_id: int) -> Optional[Any]:
        """Load an item through the model registered for its type"""
        model = trackable.model
        stmt = select(model).where(model.id == items_id)
        try:
            result = await self.session.exec(stmt)
            return result.one_or_none()
        except SQLAlchemyError as exc:
            raise StorageUnavailable(
                f"Could not load {trackable.name} {items_id}",
                itemtype=trackable.name,
                items_id=items_id,
            ) from exc

    async def create(self, item: Any) -> Any:
        """Create a new item"""
        self.session.add(item)
        await self.session.flush()
        await self.session.refresh(item)
        return item
