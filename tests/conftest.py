"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory database, session records, device channel and repository doubles
Dependencies: pytest, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import uuid
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest

from neurocare.boundary.device import InMemoryDeviceChannel
from neurocare.configs.therapy import TherapySettings
from neurocare.models.session import SessionRecord


@pytest.fixture
async def test_session_factory():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        async_sessionmaker: Factory bound to a fresh database (lazy imported to avoid settings issues)
    """
    from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
    from sqlalchemy.pool import StaticPool
    from neurocare.boundary.db.base import Base
    from neurocare.boundary.db import models  # noqa: F401

    # Use SQLite in-memory database for tests
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    # Cleanup
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def test_async_db(test_session_factory):
    """
    Create a database session for a single test.

    Yields:
        AsyncSession: Test database session with cleanup
    """
    async with test_session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def user_id() -> str:
    """Generate a test user ID."""
    return f"user-{uuid.uuid4().hex[:8]}"


@pytest.fixture
def now() -> datetime:
    """Fixed reference instant."""
    return datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_record(user_id, now):
    """
    Factory for SessionRecord instances.

    Returns:
        Callable: Builds a record, days_ago shifts the timestamp back
    """

    def _make(days_ago: float = 0, **overrides) -> SessionRecord:
        values = {
            "user_id": user_id,
            "timestamp": now - timedelta(days=days_ago),
            "duration": 600,
            "vibration_intensity": 50,
            "average_temperature": 36.8,
        }
        values.update(overrides)
        return SessionRecord(**values)

    return _make


@pytest.fixture
def therapy_settings() -> TherapySettings:
    """Settings with a long tick so tests drive the timer by hand."""
    return TherapySettings(tick_interval_seconds=60)


@pytest.fixture
def device_channel() -> InMemoryDeviceChannel:
    """Connected in-memory device channel."""
    return InMemoryDeviceChannel(connected=True)


@pytest.fixture
def mock_repository():
    """
    Create mock SessionRepository for testing.

    Returns:
        AsyncMock: Repository whose save returns a fresh UUID
    """
    repository = AsyncMock()
    repository.save = AsyncMock(return_value=uuid.uuid4())
    repository.list_by_user = AsyncMock(return_value=[])
    repository.delete_one = AsyncMock(return_value=True)
    repository.delete_all_for_user = AsyncMock(return_value=0)
    return repository
