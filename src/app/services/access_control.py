"""
Access Control

The acting user as seen by history queries: rights from the profile,
readable entities and page size preference.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Optional

from src.domain.entities import Right
from src.domain.trackables import TrackableType


@dataclass(frozen=True)
class Actor:
    user_id: int
    rights: Dict[str, int] = field(default_factory=dict)
    entities: FrozenSet[int] = frozenset()
    list_limit: Optional[int] = None

    def has_right(self, rightname: str, right: Right = Right.READ) -> bool:
        """True when every bit of `right` is granted for `rightname`"""
        granted = self.rights.get(rightname, 0)
        return (granted & right) == right

    def can_read(self, trackable: TrackableType, item: Any) -> bool:
        """Read access on one item: type right plus entity visibility"""
        if item is None:
            return False
        if not self.has_right(trackable.rightname, Right.READ):
            return False
        return getattr(item, "entities_id", None) in self.entities
