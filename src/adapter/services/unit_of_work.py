from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.change_event_repository import ChangeEventRepository
from src.adapter.repositories.item_repository import ItemRepository
from src.adapter.repositories.profile_repository import ProfileRepository
from src.adapter.repositories.user_repository import UserRepository
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """Unit of work over one AsyncSession; anything not committed is rolled back on exit"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.users = UserRepository(session)
        self.profiles = ProfileRepository(session)
        self.items = ItemRepository(session)
        self.change_events = ChangeEventRepository(session)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        # History reads never write; a failed connect leaves nothing to undo
        if self.session.in_transaction():
            await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
