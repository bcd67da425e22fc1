"""
QuickPaste Backend - Database Engine & Session Management
==========================================================

What:  Async SQLAlchemy engine, session factory, and the declarative Base.
How:   `create_engine_from_settings()` builds a pooled async engine;
       `create_session_factory()` wraps it in an `async_sessionmaker`.
Who:   Called once by the app factory when STORE_BACKEND=database; the
       resulting session factory is handed to DatabasePasteStore.
When:  Engine is created at app construction; sessions are created per
       store operation.

Connection Pooling:
    pool_size=20:      Persistent connections for normal load
    max_overflow=10:   Temporary connections for traffic spikes (total max = 30)
    pool_pre_ping:     Validates connections before use (catches stale connections)
    pool_recycle=3600: Recycles connections every hour

    The pool is the only concurrency limit on the durable backend: store
    operations wait here for a free connection while holding no other lock.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from quickpaste.config import Settings


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares one metadata object between the models, `auto_create_schema`
    and Alembic's --autogenerate.
    """
    pass


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    """
    Build the async engine described by `settings`.

    SQLite engines skip the pool sizing arguments: aiosqlite databases use
    SQLAlchemy's default pool for the URL, and in-memory SQLite rejects
    `pool_size` outright.
    """
    engine_kwargs = {
        "echo": settings.log_level == "DEBUG",
    }
    if not settings.is_sqlite:
        engine_kwargs.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return create_async_engine(settings.database_url, **engine_kwargs)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Session factory bound to `engine`.

    expire_on_commit=False: rows read inside a transaction stay readable
    after it commits.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def create_schema(engine: AsyncEngine) -> None:
    """Create every table registered on Base.metadata (development helper)."""
    # Registers PasteRecord on Base.metadata
    from quickpaste.models.paste import PasteRecord  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine(engine: AsyncEngine) -> None:
    """
    What:  Gracefully closes all connections in the pool.
    When:  Called during application shutdown (lifespan handler).
    """
    await engine.dispose()
