"""
Change History Domain Errors

Failures that cross layer boundaries as exceptions. Validation and
authorization failures are not listed here: they resolve to an empty
history page instead of raising.
"""

from typing import Optional


class HistoryError(Exception):
    """Base error with a machine code and a message"""

    code = "HISTORY_ERROR"

    def __init__(self, message: str, code: Optional[str] = None):
        self.message = message
        if code is not None:
            self.code = code
        super().__init__(message)


class StorageUnavailable(HistoryError):
    """The change log store could not be reached or failed mid-query"""

    code = "STORAGE_UNAVAILABLE"

    def __init__(
        self,
        message: str,
        itemtype: Optional[str] = None,
        items_id: Optional[int] = None,
        filter_summary: str = "",
    ):
        super().__init__(message)
        self.itemtype = itemtype
        self.items_id = items_id
        self.filter_summary = filter_summary


class InvalidChangeEvent(HistoryError):
    """A change event targets an unknown itemtype or an invalid id"""

    code = "INVALID_CHANGE_EVENT"
