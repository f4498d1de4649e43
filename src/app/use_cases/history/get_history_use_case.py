"""
Get History Use Case

Retrieves one page of the change history of a trackable item.
"""

import logging
from typing import Any, Dict, Optional

from src.app.queries.filter_compiler import FilterCompiler
from src.app.queries.sorting import SortSpec
from src.app.services.access_control import Actor
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import ChangeEvent, Right, User
from src.domain.trackables import TrackableRegistry, TrackableType, default_registry

from .dtos import HistoryPage, HistoryRow

logger = logging.getLogger(__name__)

LOG_RIGHTNAME = "logs"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class GetHistoryUseCase:
    """
    Use case for reading the change history of an item.

    Business Rules:
    - Caller needs READ on "logs" and READ on the item itself
    - Unknown itemtype, non-positive id, missing item and missing rights
      all give the same empty page
    - Invalid filters are dropped, never fail the request
    - total counts every matching event; rows only hold displayable ones,
      so a page may be shorter than total suggests
    - StorageUnavailable is the only error raised
    """

    def __init__(
        self,
        uow: UnitOfWork,
        registry: TrackableRegistry = default_registry,
        compiler: Optional[FilterCompiler] = None,
    ):
        self.uow = uow
        self.registry = registry
        self.compiler = compiler or FilterCompiler()

    async def execute(
        self,
        actor: Actor,
        itemtype: str,
        items_id: int,
        raw_filters: Any = None,
        sort: Optional[str] = None,
        order: Optional[str] = None,
        offset: int = 0,
        limit: int = 15,
    ) -> HistoryPage:
        """
        Execute get history use case.

        Args:
            actor: The user reading the history
            itemtype: Trackable type tag, e.g. "Computer"
            items_id: Item ID within the type
            raw_filters: Decoded filter payload (list or mapping), or None
            sort: Sort key, unknown keys fall back to id
            order: "asc" or "desc"
            offset: Rows to skip, clamped to >= 0
            limit: Page size, clamped to >= 1

        Returns:
            HistoryPage with total and displayable rows
        """
        if not actor.has_right(LOG_RIGHTNAME, Right.READ):
            return HistoryPage.empty()

        trackable = self.registry.get(itemtype)
        if trackable is None or isinstance(items_id, bool) or not isinstance(items_id, int):
            return HistoryPage.empty()
        if items_id <= 0:
            return HistoryPage.empty()

        offset = max(0, offset)
        limit = max(1, limit)

        async with self.uow:
            item = await self.uow.items.get_by_id(trackable, items_id)
            if item is None or not actor.can_read(trackable, item):
                return HistoryPage.empty()

            predicate = self.compiler.compile(raw_filters)
            if predicate.discarded:
                logger.debug(
                    f"Ignored {predicate.discarded} filter criteria for {itemtype} {items_id}"
                )

            total = await self.uow.change_events.count(itemtype, items_id, predicate)
            if total == 0:
                return HistoryPage.empty()

            events = await self.uow.change_events.fetch(
                itemtype,
                items_id,
                predicate,
                SortSpec.parse(sort, order),
                offset,
                limit,
            )

            visible = [event for event in events if self.is_displayable(event, trackable, actor)]
            users = await self.uow.users.get_by_ids(
                {event.users_id for event in visible if event.users_id is not None}
            )

            rows = [self.build_row(event, trackable, users) for event in visible]
            return HistoryPage(total=total, rows=rows)

    @staticmethod
    def is_displayable(event: ChangeEvent, trackable: TrackableType, actor: Actor) -> bool:
        """Read-time visibility of one event for one actor"""
        if event.action is None:
            return False
        tracked = trackable.get_field(event.field)
        if tracked is None:
            return True
        if tracked.internal:
            return False
        if tracked.rightname and not actor.has_right(tracked.rightname, Right.READ):
            return False
        return True

    def build_row(
        self, event: ChangeEvent, trackable: TrackableType, users: Dict[int, User]
    ) -> HistoryRow:
        if event.itemtype_link:
            label = self.registry.label(event.itemtype_link)
        elif event.field:
            label = trackable.field_label(event.field)
        else:
            label = ""

        user_name = ""
        if event.users_id is not None and event.users_id in users:
            user_name = users[event.users_id].display_name

        return HistoryRow(
            id=event.id,
            date_mod=event.date_mod.strftime(DATE_FORMAT),
            user_name=user_name,
            field=label,
            change=event.change_description,
        )
