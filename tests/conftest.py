"""
Noteful API — Test Configuration (conftest.py)
==============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session:  AsyncMock session for service unit tests
    ├── db_engine:        async SQLite engine on a temp file, schema created
    ├── session_factory:  async_sessionmaker bound to db_engine
    ├── test_client:      HTTPX AsyncClient running the real app, with
    │                     get_db_session / get_session_factory overridden
    ├── make_user:        inserts a user row and returns (user, auth headers)
    └── auth_headers:     bearer headers for a fresh user
"""

import os

# Override settings for testing BEFORE any noteful imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["JWT_SECRET"] = "test-secret-not-real"
os.environ["LOG_LEVEL"] = "WARNING"

from typing import AsyncGenerator, Dict, Tuple
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from noteful.database import Base, get_db_session, get_session_factory
from noteful.models import User
from noteful.schemas.user import TokenUser
from noteful.security import create_auth_token


# ══════════════════════════════════════════════════════════════════════════
# Unit-test fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_note(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = note
            result = await note_service.get_note(mock_db_session, user_id, str(note_id))
    """
    session = AsyncMock()
    session.execute = AsyncMock(return_value=MagicMock())
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.delete = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# API fixtures (real app, temporary SQLite database)
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine(tmp_path):
    """
    A file-backed SQLite database per test.

    File-backed (not :memory:) so the concurrent ownership checks get
    connections of their own that still see the same data.
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'noteful.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine) -> async_sessionmaker:
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def test_client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTPX AsyncClient talking to the FastAPI app through ASGITransport.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from noteful.main import app

    async def override_get_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    app.dependency_overrides[get_session_factory] = lambda: session_factory

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def make_user(session_factory):
    """
    Insert a user directly (skipping bcrypt) and return it with auth headers.

    Usage:
        user, headers = await make_user("alice")
    """

    async def _make_user(username: str = "alice") -> Tuple[User, Dict[str, str]]:
        async with session_factory() as session:
            user = User(username=username, password="not-a-real-digest", fullname=None)
            session.add(user)
            await session.commit()
        token = create_auth_token(TokenUser.model_validate(user))
        return user, {"Authorization": f"Bearer {token}"}

    return _make_user


@pytest_asyncio.fixture
async def auth_headers(make_user) -> Dict[str, str]:
    _, headers = await make_user("alice")
    return headers
