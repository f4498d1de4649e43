"""
Trackable Type Registry

Maps an itemtype tag ("Computer", "Ticket", ...) to the model that stores
it, the right name that guards it and the catalog of its tracked fields.
Request strings are only ever looked up here, never turned into classes.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Type

from sqlmodel import SQLModel

from .entities import Computer, Monitor, Ticket, User


@dataclass(frozen=True)
class TrackedField:
    """Catalog entry for one logged attribute"""

    label: str
    rightname: Optional[str] = None  # extra right needed to see changes of this field
    internal: bool = False  # technical field, never shown in history


@dataclass(frozen=True)
class TrackableType:
    """A type whose changes are recorded in the history log"""

    name: str
    model: Type[SQLModel]
    rightname: str
    label: str
    fields: Dict[str, TrackedField] = field(default_factory=dict)

    def get_field(self, key: str) -> Optional[TrackedField]:
        return self.fields.get(key)

    def field_label(self, key: str) -> str:
        """Label for a field key, the key itself when the catalog has no entry"""
        tracked = self.fields.get(key)
        if tracked is None:
            return key
        return tracked.label


class TrackableRegistry:
    """Registry of trackable types, keyed by itemtype tag"""

    def __init__(self, types: Iterable[TrackableType] = ()):
        self._types: Dict[str, TrackableType] = {}
        for trackable in types:
            self.register(trackable)

    def register(self, trackable: TrackableType) -> None:
        self._types[trackable.name] = trackable

    def get(self, name: str) -> Optional[TrackableType]:
        if not isinstance(name, str):
            return None
        return self._types.get(name)

    def is_known(self, name: str) -> bool:
        return self.get(name) is not None

    def names(self) -> List[str]:
        return sorted(self._types)

    def label(self, name: str) -> str:
        """Display label for an itemtype tag, the tag itself when unknown"""
        trackable = self.get(name)
        if trackable is None:
            return name
        return trackable.label


_COMMON_FIELDS = {
    "name": TrackedField("Name"),
    "entities_id": TrackedField("Entity"),
    "comment": TrackedField("Comments"),
    "is_deleted": TrackedField("Deleted"),
    "date_mod": TrackedField("Last update", internal=True),
}


def build_default_registry() -> TrackableRegistry:
    return TrackableRegistry(
        [
            TrackableType(
                name="Computer",
                model=Computer,
                rightname="computer",
                label="Computer",
                fields={
                    **_COMMON_FIELDS,
                    "serial": TrackedField("Serial number"),
                    "otherserial": TrackedField("Inventory number"),
                    "last_inventory_update": TrackedField(
                        "Last inventory update", internal=True
                    ),
                    "infocom": TrackedField("Financial and administrative information", rightname="infocom"),
                },
            ),
            TrackableType(
                name="Monitor",
                model=Monitor,
                rightname="monitor",
                label="Monitor",
                fields={
                    **_COMMON_FIELDS,
                    "serial": TrackedField("Serial number"),
                    "size": TrackedField("Size"),
                    "infocom": TrackedField("Financial and administrative information", rightname="infocom"),
                },
            ),
            TrackableType(
                name="Ticket",
                model=Ticket,
                rightname="ticket",
                label="Ticket",
                fields={
                    **_COMMON_FIELDS,
                    "status": TrackedField("Status"),
                    "urgency": TrackedField("Urgency"),
                    "priority": TrackedField("Priority"),
                    "content": TrackedField("Description"),
                    "sla_waiting_duration": TrackedField("SLA waiting duration", internal=True),
                },
            ),
            TrackableType(
                name="User",
                model=User,
                rightname="user",
                label="User",
                fields={
                    "name": TrackedField("Login"),
                    "realname": TrackedField("Surname"),
                    "firstname": TrackedField("First name"),
                    "is_active": TrackedField("Active"),
                    "profiles_id": TrackedField("Profile", rightname="profile"),
                    "password": TrackedField("Password", internal=True),
                    "date_mod": TrackedField("Last update", internal=True),
                },
            ),
        ]
    )


default_registry = build_default_registry()
