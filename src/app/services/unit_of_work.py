from abc import ABC, abstractmethod

from src.app.repositories.change_event_repository import IChangeEventRepository
from src.app.repositories.item_repository import IItemRepository
from src.app.repositories.profile_repository import IProfileRepository
from src.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    profiles: IProfileRepository
    items: IItemRepository
    change_events: IChangeEventRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
