"""
Record Change Use Case

Appends one change event to the history log.
"""

import logging
from typing import Optional

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import ChangeEvent, LinkedAction
from src.domain.errors import InvalidChangeEvent
from src.domain.trackables import TrackableRegistry, default_registry

logger = logging.getLogger(__name__)


class RecordChangeUseCase:
    """
    Use case for recording a change on a trackable item.

    Business Rules:
    - itemtype must be a registered trackable type
    - items_id must not be negative
    - linked_action must be a known action code
    - Events are only ever appended
    """

    def __init__(self, uow: UnitOfWork, registry: TrackableRegistry = default_registry):
        self.uow = uow
        self.registry = registry

    async def execute(
        self,
        itemtype: str,
        items_id: int,
        field: str = "",
        old_value: str = "",
        new_value: str = "",
        linked_action: int = LinkedAction.field_update,
        itemtype_link: str = "",
        users_id: Optional[int] = None,
    ) -> ChangeEvent:
        """
        Execute record change use case.

        Raises:
            InvalidChangeEvent: unknown itemtype, negative id or unknown action
            StorageUnavailable: the store could not be written
        """
        if not self.registry.is_known(itemtype):
            raise InvalidChangeEvent(f"Unknown itemtype: {itemtype!r}")
        if isinstance(items_id, bool) or not isinstance(items_id, int) or items_id < 0:
            raise InvalidChangeEvent(f"Invalid items_id: {items_id!r}")
        try:
            action = LinkedAction(linked_action)
        except ValueError as exc:
            raise InvalidChangeEvent(f"Unknown linked action: {linked_action!r}") from exc

        async with self.uow:
            change_event = await self.uow.change_events.create(
                ChangeEvent(
                    itemtype=itemtype,
                    items_id=items_id,
                    itemtype_link=itemtype_link,
                    linked_action=action.value,
                    field=field,
                    old_value=old_value,
                    new_value=new_value,
                    users_id=users_id,
                )
            )
            await self.uow.commit()

        logger.info(f"Recorded {action.name} on {itemtype} {items_id} (log {change_event.id})")
        return change_event
