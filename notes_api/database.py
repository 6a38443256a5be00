"""
Notes API - Database Session Management
========================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
How:   Creates an async engine, provides a session dependency that commits on
       success and rolls back on error.
Who:   Used by route handlers via FastAPI's dependency injection system.
When:  Engine is created at module import; sessions are created per request.

Concurrency model:
    Each request gets its own AsyncSession. Nothing else is shared between
    requests except the engine's connection pool, which SQLAlchemy owns.
    Two concurrent updates to the same note are not coordinated here: the
    database decides, and the last writer wins.
"""

from typing import Any, AsyncGenerator, Dict

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from notes_api.config import settings


def _engine_options() -> Dict[str, Any]:
    # SQLite pools (StaticPool / NullPool) reject the sizing arguments.
    options: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}
    if not settings.is_sqlite:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return options


# ── Engine Configuration ──────────────────────────────────────────────────
engine: AsyncEngine = create_async_engine(settings.database_url, **_engine_options())

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: attributes stay readable after commit, so mapped
# view models can be built without another round trip.
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object, which Alembic reads for migrations and
    init_models() uses to create tables directly.
    """
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler
        3. On success: commits the transaction
        4. On error: rolls back and re-raises for the exception handlers
        5. Always: closes the session (returns connection to pool)

    Routes must declare it with scope="function" so the commit runs before
    the response is sent; a failed commit then becomes a 500 instead of a
    success the client already received.

    Example usage in a route:
        @router.get("/note")
        async def get_all(db: AsyncSession = Depends(get_db_session, scope="function")):
            ...
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def init_models(bind: AsyncEngine = engine) -> None:
    """
    Create all tables registered on Base.metadata.

    For tests and throwaway SQLite databases. Real deployments use
    `alembic upgrade head`.
    """
    # Import registers the model on Base.metadata
    from notes_api.models.note import Note  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    """Gracefully closes all pooled connections; called on application shutdown."""
    await engine.dispose()
