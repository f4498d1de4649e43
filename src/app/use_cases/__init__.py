"""
Use Cases - Backward Compatibility Shim

All use cases have been organized into domain folders:
- history/: Reading change history
- changes/: Recording changes
- users/: Acting user context

Import from subdirectories for better organization.
"""

# Re-export everything for backward compatibility
from .history import (
    GetHistoryUseCase,
    HistoryPage,
    HistoryRow,
)
from .changes import (
    RecordChangeUseCase,
)
from .users import (
    LoadActorUseCase,
)

__all__ = [
    # History
    "GetHistoryUseCase",
    "HistoryPage",
    "HistoryRow",
    # Changes
    "RecordChangeUseCase",
    # Users
    "LoadActorUseCase",
]
