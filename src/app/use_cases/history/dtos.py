from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class HistoryRow:
    """One displayable history line, values not yet escaped"""

    id: int
    date_mod: str
    user_name: str
    field: str
    change: str


@dataclass(frozen=True)
class HistoryPage:
    """Total of matching events and the displayable rows of one page"""

    total: int = 0
    rows: List[HistoryRow] = field(default_factory=list)

    @classmethod
    def empty(cls) -> "HistoryPage":
        return cls()
