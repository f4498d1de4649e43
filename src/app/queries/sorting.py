"""
Sort specification for history pages.

Only whitelisted keys are accepted; anything else falls back to the
default ordering by id. The store maps keys to columns.
"""

from dataclasses import dataclass
from typing import Any

DEFAULT_SORT_KEY = "id"
SORTABLE_KEYS = ("id", "date_mod", "users_id", "user_name", "field", "linked_action")


@dataclass(frozen=True)
class SortSpec:
    key: str = DEFAULT_SORT_KEY
    descending: bool = False

    @classmethod
    def default(cls) -> "SortSpec":
        return cls()

    @classmethod
    def parse(cls, sort: Any, order: Any) -> "SortSpec":
        """
        Build a SortSpec from raw request tokens.

        An unknown or empty sort key means the default key; the order token
        is still honoured ("desc" in any case, anything else is ascending).
        """
        key = sort.strip() if isinstance(sort, str) else ""
        if key not in SORTABLE_KEYS:
            key = DEFAULT_SORT_KEY
        descending = isinstance(order, str) and order.strip().lower() == "desc"
        return cls(key=key, descending=descending)
