"""
History Use Cases

All change history read logic.
"""

from .dtos import HistoryPage, HistoryRow
from .envelope import empty_history, encode_history
from .get_history_use_case import GetHistoryUseCase

__all__ = [
    "GetHistoryUseCase",
    "HistoryPage",
    "HistoryRow",
    "empty_history",
    "encode_history",
]
