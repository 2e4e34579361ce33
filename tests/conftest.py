"""
Cheese Shop API — Test Configuration (conftest.py)
===================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Points the app at a throwaway SQLite file BEFORE the package is
       imported, then provides database, session, and HTTP client fixtures.

Fixtures (all function-scoped):
    ├── mock_db_session: AsyncMock session for service unit tests
    ├── database: Creates tables, drops them and disposes the engine after
    ├── db_session: Real AsyncSession on the test database
    ├── cheddar: One committed Cheddar row
    └── test_client: HTTPX AsyncClient wired to the FastAPI app
"""

import os
import tempfile
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Settings are read at import time, so the environment goes first
_TEST_DIR = tempfile.mkdtemp(prefix="cheeseshop_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DIR}/test.db"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["CREATE_TABLES_ON_STARTUP"] = "false"
os.environ["SEED_ON_STARTUP"] = "false"

from cheeseshop.database import Base, async_session_factory, create_tables, engine  # noqa: E402
from cheeseshop.schemas.cheese import CheeseCreate  # noqa: E402
from cheeseshop.services.cheese_service import cheese_service  # noqa: E402


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = cheese
        result = await cheese_service.get_cheese(mock_db_session, 1)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_cheese_data():
    """Field values matching the Cheese model."""
    return {
        "id": 1,
        "name": "Cheddar",
        "price": Decimal("3.00"),
        "is_best_seller": True,
    }


@pytest_asyncio.fixture
async def database():
    """Fresh schema for each test; the engine is disposed so no pooled
    connection outlives the test's event loop."""
    await create_tables()
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(database):
    async with async_session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def cheddar(db_session):
    """The single Cheddar record used by the concrete endpoint scenarios."""
    created = await cheese_service.create_cheese(
        db_session,
        CheeseCreate(name="Cheddar", price=Decimal("3"), is_best_seller=True),
    )
    await db_session.commit()
    return created


@pytest_asyncio.fixture
async def test_client(database):
    """
    HTTPX AsyncClient talking to the app through ASGITransport.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/cheeses")
            assert response.status_code == 200
    """
    from cheeseshop.main import app
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
