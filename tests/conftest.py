"""
Notes API - Test Configuration (conftest.py)
=============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped, fresh for each test):
    ├── db_engine:        in-memory SQLite (aiosqlite) with the schema created
    ├── session_factory:  sessionmaker bound to db_engine, seeded with 4 notes
    ├── db_session:       one AsyncSession for handler-level tests
    ├── mock_db_session:  AsyncMock session for tests that must not hit a DB
    └── test_client:      httpx AsyncClient talking to a fresh app instance

Seed data (two users, two notes each):
    user A: NOTE_A_ID, NOTE_ID_FOR_DELETE
    user B: NOTE_B_ID, NOTE_ID_FOR_UPDATE
"""

import os

# Override settings BEFORE any notes_api import: the settings singleton and
# the module-level engine are built at import time.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["JWT_SECRET"] = "test-secret-not-for-production"
os.environ["JWT_ALGORITHM"] = "HS256"
os.environ["JWT_AUDIENCE"] = "NotesWebAPI"
os.environ["API_VERSIONS"] = "1.0"
os.environ["LOG_LEVEL"] = "WARNING"

import uuid
from typing import AsyncGenerator, Dict
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from notes_api.database import get_db_session, init_models
from notes_api.models.note import Note, utc_now
from notes_api.security import create_access_token

USER_A_ID = uuid.uuid4()
USER_B_ID = uuid.uuid4()

NOTE_A_ID = uuid.UUID("dee1787b-ffba-4ef0-a196-6c2a351fcfbb")
NOTE_B_ID = uuid.UUID("11600f50-8dc1-4e32-b0a5-ade9d44f5f0a")
NOTE_ID_FOR_DELETE = uuid.uuid4()
NOTE_ID_FOR_UPDATE = uuid.uuid4()

API = "/api/1.0/note"


def seed_notes():
    now = utc_now()
    return [
        Note(id=NOTE_A_ID, user_id=USER_A_ID, title="Title1", details="Details1",
             creation_date=now, edit_date=None),
        Note(id=NOTE_B_ID, user_id=USER_B_ID, title="Title2", details="Details2",
             creation_date=now, edit_date=None),
        Note(id=NOTE_ID_FOR_DELETE, user_id=USER_A_ID, title="Title3", details="Details3",
             creation_date=now, edit_date=None),
        Note(id=NOTE_ID_FOR_UPDATE, user_id=USER_B_ID, title="Title4", details="Details4",
             creation_date=now, edit_date=None),
    ]


def auth_headers(user_id: uuid.UUID, **claims) -> Dict[str, str]:
    """Authorization header carrying a valid token for `user_id`."""
    return {"Authorization": f"Bearer {create_access_token(user_id, **claims)}"}


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine():
    """
    A private in-memory database per test.

    StaticPool keeps the single connection alive, so every session sees the
    same in-memory database.
    """
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(db_engine):
    factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        session.add_all(seed_notes())
        await session.commit()
    return factory


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = note
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.delete = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# HTTP Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def app(session_factory):
    """A fresh app whose sessions come from the seeded test database."""
    from notes_api.main import create_app

    application = create_app()

    async def override_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    application.dependency_overrides[get_db_session] = override_db_session
    return application


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient routed straight into the ASGI app (no server).

    raise_app_exceptions=False: Starlette re-raises unhandled errors after the
    500 response is sent; tests want to inspect that response instead.
    """
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
