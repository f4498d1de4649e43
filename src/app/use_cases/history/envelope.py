"""
History Result Envelope

Stable JSON shape served to the history grid:
{"total": int, "rows": [{"id", "date_mod", "user_name", "field", "change"}]}
"""

import html
from typing import Any, Dict, Iterable

from .dtos import HistoryRow

ROW_KEYS = ("id", "date_mod", "user_name", "field", "change")


def encode_row(row: HistoryRow) -> Dict[str, Any]:
    return {
        "id": row.id,
        "date_mod": row.date_mod,
        "user_name": row.user_name,
        "field": row.field,
        # Stored descriptions may hold raw markup from legacy data
        "change": html.escape(row.change, quote=True),
    }


def encode_history(total: int, rows: Iterable[HistoryRow]) -> Dict[str, Any]:
    """Encode a page; total is always present, even without rows"""
    return {
        "total": int(total),
        "rows": [encode_row(row) for row in rows],
    }


def empty_history() -> Dict[str, Any]:
    return encode_history(0, [])
