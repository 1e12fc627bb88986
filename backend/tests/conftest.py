"""
Catalog Backend - Test Configuration (conftest.py)
===================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock database session (no real DB needed)
    ├── db_engine:       Async engine on a fresh SQLite file with the schema
    ├── db_session:      Session on db_engine, for DAO tests
    ├── test_client:     HTTPX client, get_db_session → mock_db_session
    └── db_client:       HTTPX client, get_db_session → real SQLite sessions

Both clients use raise_app_exceptions=False so that a 500 produced by the
catch-all handler reaches the test as a response instead of an exception.
"""

import os
import tempfile

# Override settings for testing BEFORE any app imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(
    tempfile.mkdtemp(prefix="catalog_test_"), "app.db"
)
os.environ["JWT_SECRET"] = "test-secret-not-for-production-use-only"
os.environ["BCRYPT_ROUNDS"] = "4"  # Fastest cost bcrypt accepts
os.environ["LOG_LEVEL"] = "WARNING"

from typing import AsyncGenerator  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker  # noqa: E402

from app.database import Base, build_engine, get_db_session  # noqa: E402
from app.main import create_app  # noqa: E402

# Register every table with Base.metadata
from app.models.service import Service  # noqa: E402,F401
from app.models.user import User  # noqa: E402,F401
from app.models.version import Version  # noqa: E402,F401


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Route tests patch the DAOs, so the session only has to be passed through.
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def db_engine(tmp_path):
    """
    Engine on an empty SQLite file with all tables created.

    Built through build_engine() so foreign keys (and therefore
    ON DELETE CASCADE) are enforced exactly as in the application.
    """
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


# ══════════════════════════════════════════════════════════════════════════
# HTTP Client Fixtures
# ══════════════════════════════════════════════════════════════════════════

def _client(app) -> AsyncClient:
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    return AsyncClient(transport=transport, base_url="http://test")


@pytest_asyncio.fixture
async def test_client(mock_db_session):
    """
    HTTP client whose routes receive mock_db_session.

    Usage:
        async def test_not_found(test_client):
            with patch("app.routes.versions.version_dao") as dao:
                dao.get_version_by_id = AsyncMock(return_value=None)
                response = await test_client.get(f"/api/versions/{uuid4()}")
    """
    app = create_app()

    async def override_session():
        yield mock_db_session

    app.dependency_overrides[get_db_session] = override_session
    async with _client(app) as client:
        yield client


@pytest_asyncio.fixture
async def db_client(session_factory):
    """
    HTTP client backed by the per-test SQLite database.

    Mirrors get_db_session: one session per request, commit on success,
    rollback on error.
    """
    app = create_app()

    async def override_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_session
    async with _client(app) as client:
        yield client
