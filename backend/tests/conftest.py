"""
Pytest configuration and fixtures.

This file is automatically discovered by pytest and provides
shared fixtures for all test modules.

The suite never needs PostgreSQL: the environment is switched to
`testing` with an in-memory aiosqlite URL before the application is
imported, and every test that touches the database gets its own fresh
in-memory database.

References:
-----------
- Pytest Fixtures: https://docs.pytest.org/en/stable/fixture.html
- FastAPI Testing: https://fastapi.tiangolo.com/advanced/async-tests/
- SQLAlchemy asyncio: https://docs.sqlalchemy.org/en/20/orm/extensions/asyncio.html
"""

import os

# Must run before anything imports personalization.core.config
os.environ["APP_ENV"] = "testing"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_FORMAT"] = "text"

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import personalization.models  # noqa: F401
from personalization.db.base import Base
from personalization.db.deps import get_db, get_db_override
from personalization.main import app
from personalization.schemas.content_volume import ContentVolumeSettings
from personalization.schemas.digest import DigestSettings
from personalization.schemas.discovery import DiscoverySettings
from personalization.schemas.notification import NotificationSettings
from personalization.schemas.summary import SummaryPreferences
from personalization.services.preference_store import PreferenceStore


# ================================
# Database Fixtures
# ================================

@pytest_asyncio.fixture
async def test_engine():
    """
    In-memory SQLite engine with the preference tables created.

    StaticPool keeps the single connection alive, so the in-memory database
    survives across sessions for the duration of one test.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Session on the per-test database."""
    session_factory = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def store(db_session: AsyncSession) -> PreferenceStore:
    """PreferenceStore bound to the test session."""
    return PreferenceStore(db_session)


# ================================
# FastAPI Client Fixtures
# ================================

@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """
    Async HTTP client for the FastAPI app.

    Overrides the get_db dependency to use the test database session.

    Usage:
        async def test_something(client: AsyncClient):
            response = await client.get("/api/v1/defaults")
            assert response.status_code == 200
    """
    app.dependency_overrides[get_db] = get_db_override(db_session)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ================================
# Record Fixtures
# ================================

@pytest.fixture
def user_id() -> str:
    return "user-123"


@pytest.fixture
def notification_settings(user_id: str) -> NotificationSettings:
    return NotificationSettings.defaults(user_id)


@pytest.fixture
def summary_preferences(user_id: str) -> SummaryPreferences:
    return SummaryPreferences.defaults(user_id)


@pytest.fixture
def digest_settings(user_id: str) -> DigestSettings:
    return DigestSettings.defaults(user_id)


@pytest.fixture
def content_volume_settings(user_id: str) -> ContentVolumeSettings:
    return ContentVolumeSettings.defaults(user_id)


@pytest.fixture
def discovery_settings(user_id: str) -> DiscoverySettings:
    return DiscoverySettings.defaults(user_id)


# ================================
# Pytest Hooks
# ================================

def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "integration: mark test as integration test (exercises the HTTP layer)"
    )
