from typing import List

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.queries.filter_compiler import Predicate, user_display_name
from src.app.queries.sorting import SortSpec
from src.app.repositories.change_event_repository import IChangeEventRepository
from src.domain.entities import ChangeEvent, User
from src.domain.errors import StorageUnavailable


def _user_display_name():
    """Correlated sub-select giving the display name of an event's user"""
    return (
        select(user_display_name())
        .where(User.id == ChangeEvent.users_id)
        .scalar_subquery()
    )


SORT_COLUMNS = {
    "id": lambda: ChangeEvent.id,
    "date_mod": lambda: ChangeEvent.date_mod,
    "users_id": lambda: ChangeEvent.users_id,
    "user_name": _user_display_name,
    "field": lambda: ChangeEvent.field,
    "linked_action": lambda: ChangeEvent.linked_action,
}


class ChangeEventRepository(IChangeEventRepository):
    """ChangeEvent repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, change_event: ChangeEvent) -> ChangeEvent:
        """Append a new change event (immutable)"""
        self.session.add(change_event)
        try:
            await self.session.flush()
            await self.session.refresh(change_event)
        except SQLAlchemyError as exc:
            raise StorageUnavailable(
                f"Could not record change event: {exc.__class__.__name__}",
                itemtype=change_event.itemtype,
                items_id=change_event.items_id,
            ) from exc
        return change_event

    async def count(self, itemtype: str, items_id: int, predicate: Predicate) -> int:
        """Count events of one item matching the predicate"""
        stmt = select(func.count(ChangeEvent.id)).where(
            ChangeEvent.itemtype == itemtype, ChangeEvent.items_id == items_id
        )
        stmt = predicate.apply(stmt)

        try:
            result = await self.session.exec(stmt)
            return int(result.one())
        except SQLAlchemyError as exc:
            raise StorageUnavailable(
                f"Could not count change events: {exc.__class__.__name__}",
                itemtype=itemtype,
                items_id=items_id,
                filter_summary=predicate.summary,
            ) from exc

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

        Ordering is the requested column then id, in the same direction,
        so that equal sort values still give disjoint pages.
        """
        stmt = select(ChangeEvent).where(
            ChangeEvent.itemtype == itemtype, ChangeEvent.items_id == items_id
        )
        stmt = predicate.apply(stmt)

        column = SORT_COLUMNS.get(sort.key, SORT_COLUMNS["id"])()
        tie_breaker = ChangeEvent.id
        if sort.descending:
            stmt = stmt.order_by(column.desc(), tie_breaker.desc())
        else:
            stmt = stmt.order_by(column.asc(), tie_breaker.asc())
        stmt = stmt.offset(offset).limit(limit)

        try:
            result = await self.session.exec(stmt)
            return list(result.all())
        except SQLAlchemyError as exc:
            raise StorageUnavailable(
                f"Could not fetch change events: {exc.__class__.__name__}",
                itemtype=itemtype,
                items_id=items_id,
                filter_summary=predicate.summary,
            ) from exc
