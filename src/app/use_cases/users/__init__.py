"""
User Use Cases

All user-related business logic.
"""

from .load_actor_use_case import LoadActorUseCase

__all__ = [
    "LoadActorUseCase",
]
