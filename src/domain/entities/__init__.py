"""
Change History Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    LinkedAction,
    Right,
)

# Export all entities
from .profile import Profile
from .user import User
from .assets import Computer, Monitor
from .ticket import Ticket
from .change_event import ChangeEvent

__all__ = [
    # Enums
    "LinkedAction",
    "Right",
    # Entities
    "Profile",
    "User",
    "Computer",
    "Monitor",
    "Ticket",
    "ChangeEvent",
]
