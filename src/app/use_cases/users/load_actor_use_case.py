"""
Load Actor Use Case

Loads the acting user, with profile rights and readable entities, from the
verified token subject.
"""

from typing import Optional

from src.app.services.access_control import Actor
from src.app.services.unit_of_work import UnitOfWork


class LoadActorUseCase:
    """
    Use case for loading the acting user.

    Business Rules:
    - User must exist and be active
    - User must have a profile, and the profile must exist
    - Readable entities are the user's entity list plus the home entity
    - Returns None instead of raising when any rule fails
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: int) -> Optional[Actor]:
        """
        Execute load actor use case.

        Args:
            user_id: User ID from the token

        Returns:
            Actor, or None when the user cannot act
        """
        async with self.uow:
            # Load user
            user = await self.uow.users.get_by_id(user_id)
            if user is None or not user.is_active:
                return None

            # Load profile
            if user.profiles_id is None:
                return None
            profile = await self.uow.profiles.get_by_id(user.profiles_id)
            if profile is None:
                return None

            entities = set(user.entities or [])
            entities.add(user.entities_id)

            return Actor(
                user_id=user.id,
                rights=dict(profile.rights or {}),
                entities=frozenset(entities),
                list_limit=user.list_limit,
            )
