import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from tests.fixtures.json_loader import TestDataLoader
from src.depends import get_unit_of_work
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.utils.jwt import generate_jwt
from src.domain.entities import ChangeEvent, Computer, Monitor, Profile, Ticket, User


@pytest_asyncio.fixture
def test_data():
    return TestDataLoader()


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
async def seeded_session(db_session, test_data):
    """Session over a database holding profiles, users, items and their history"""
    for data in test_data.get_copy("profiles"):
        db_session.add(Profile(**data))
    for data in test_data.get_copy("users"):
        db_session.add(User(**data))
    for data in test_data.get_copy("computers"):
        db_session.add(Computer(**data))
    for data in test_data.get_copy("monitors"):
        db_session.add(Monitor(**data))
    for data in test_data.get_copy("tickets"):
        db_session.add(Ticket(**data))
    for data in test_data.get_change_events():
        db_session.add(ChangeEvent(**data))
    await db_session.commit()
    yield db_session


@pytest_asyncio.fixture
async def client(seeded_session):
    from httpx import ASGITransport
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(seeded_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
def auth_headers():
    def _headers(user_id: int) -> dict:
        return {"Authorization": f"Bearer {generate_jwt(user_id)}"}

    return _headers
