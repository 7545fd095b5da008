from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from cricketcoach.database import Base, enable_sqlite_foreign_keys, get_db
from cricketcoach.main import app
from cricketcoach.models.coach import Coach

test_engine = create_async_engine("sqlite+aiosqlite://", echo=False)
enable_sqlite_foreign_keys(test_engine)
test_session = async_sessionmaker(test_engine, expire_on_commit=False)


async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
    async with test_session() as session:
        yield session


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
async def setup_db() -> AsyncGenerator[None, None]:
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def session() -> AsyncGenerator[AsyncSession, None]:
    async with test_session() as s:
        yield s


@pytest.fixture
async def coach_id(setup_db: None) -> int:
    """Create a coach and return its id."""
    async with test_session() as s:
        coach = Coach(name="Test Coach", email="coach@example.com")
        s.add(coach)
        await s.commit()
        return coach.id
