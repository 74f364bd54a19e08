"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh SQLite database file (tmp_path)
    - get_db dependency overridden to use the test session factory
    - app.state.db_manager replaced so /health probes the test database
    - Seed fixtures commit through their own session, like a separate client would

Design Decisions:
    - File-backed SQLite instead of :memory: — each session gets its own
      connection, so commit/rollback boundaries behave like PostgreSQL's
"""

from datetime import datetime, timezone

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from koinonia.db.base import Base
from koinonia.infrastructure.database import get_db, DatabaseSessionManager
from koinonia.infrastructure.security import PasslibCredentialStore
from koinonia.main import app
from koinonia.models.event import Event
from koinonia.models.user import User
import koinonia.models  # noqa: F401


@pytest.fixture
async def test_engine(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'koinonia.db'}", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = getattr(app.state, "db_manager", None)
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    app.state.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    app.state.db_manager = original_manager


@pytest.fixture
async def seed_user(test_db):
    """Insert a user with password "secret123"."""
    user = User(
        name="Maria Souza",
        email="maria@example.com",
        password_hash=PasslibCredentialStore(rounds=4).hash("secret123"),
    )
    test_db.add(user)
    await test_db.commit()
    return user


@pytest.fixture
async def seed_event(test_db):
    """Insert a free event on 01/01/2026."""
    event = Event(
        title="Culto de Ano Novo",
        location="Templo Central",
        event_date=datetime(2026, 1, 1, tzinfo=timezone.utc),
        price_cents=0,
        is_free=True,
    )
    test_db.add(event)
    await test_db.commit()
    return event
