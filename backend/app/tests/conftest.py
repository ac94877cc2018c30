"""
Shared fixtures for backend tests.

Tests run against an in-memory SQLite database through aiosqlite; the
environment is pointed at it before any application module is imported.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.core import Base, Profession, Race, get_db
from app.features.players.repository import SQLAlchemyPlayerRepository
from app.features.players.schemas import PlayerCreate
from app.features.players.service import PlayerService

# 2010-06-15T00:00:00Z
BIRTHDAY_2010 = 1276560000000


@pytest_asyncio.fixture
async def test_engine():
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    """Session factory bound to the test engine."""
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def db_session(session_factory):
    """Database session for direct repository tests."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def player_repository(db_session):
    """SQLAlchemy repository over the test database."""
    return SQLAlchemyPlayerRepository(db_session)


@pytest.fixture
def player_service(player_repository):
    """Player service backed by the test database."""
    return PlayerService(player_repository)


@pytest.fixture
def make_player():
    """Factory for valid create payloads with per-test overrides."""

    def _make(**overrides) -> PlayerCreate:
        data = {
            "name": "Arwen",
            "title": "Evenstar",
            "race": Race.ELF,
            "profession": Profession.SORCERER,
            "birthday": BIRTHDAY_2010,
            "banned": False,
            "experience": 1000,
        }
        data.update(overrides)
        return PlayerCreate(**data)

    return _make


@pytest_asyncio.fixture
async def client(session_factory):
    """HTTP client against the app with the database dependency overridden."""
    from app.main import app

    async def _override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c

    app.dependency_overrides.clear()
