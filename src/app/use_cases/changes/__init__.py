"""
Change Use Cases

Writing to the history log.
"""

from .record_change_use_case import RecordChangeUseCase

__all__ = [
    "RecordChangeUseCase",
]
