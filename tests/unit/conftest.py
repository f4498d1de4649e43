import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.services.access_control import Actor


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    # Mock repositories
    uow.users = MagicMock()
    uow.users.get_by_id = AsyncMock()
    uow.users.get_by_ids = AsyncMock(return_value={})

    uow.profiles = MagicMock()
    uow.profiles.get_by_id = AsyncMock()

    uow.items = MagicMock()
    uow.items.get_by_id = AsyncMock()

    uow.change_events = MagicMock()
    uow.change_events.count = AsyncMock(return_value=0)
    uow.change_events.fetch = AsyncMock(return_value=[])
    uow.change_events.create = AsyncMock()

    return uow


@pytest.fixture
def admin_actor():
    return Actor(
        user_id=1,
        rights={"logs": 1, "computer": 31, "ticket": 31, "infocom": 1},
        entities=frozenset({0}),
    )
