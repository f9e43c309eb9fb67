"""PostgreSQL store with async SQLAlchemy.

Handles:
- Connection pooling
- Database session management
- Read snapshots (one transaction per statistics request)
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy import BigInteger, Integer, text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from streamstats.settings import get_settings


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""

    pass


# 64-bit keys on Postgres; SQLite only autoincrements an INTEGER primary key.
BigIntId = BigInteger().with_variant(Integer, "sqlite")


# Engine and session factory (initialized on startup)
_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


async def init_db(url: str | None = None) -> None:
    """Initialize database connection pool.

    Args:
        url: Override for the configured database URL (used by tests).
    """
    global _engine, _session_factory

    settings = get_settings()
    url = url or settings.async_database_url
    engine_kwargs: dict[str, object] = {"echo": settings.debug, "pool_pre_ping": True}
    if not url.startswith("sqlite"):
        engine_kwargs.update(
            connect_args=settings.db_connect_args,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
        )
    _engine = create_async_engine(url, **engine_kwargs)
    _session_factory = async_sessionmaker(
        _engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def close_db() -> None:
    """Close database connection pool."""
    global _engine, _session_factory
    if _engine:
        await _engine.dispose()
        _engine = None
        _session_factory = None


async def ping_db() -> None:
    """Run a trivial query to validate connectivity."""
    async with get_session() as session:
        await session.execute(text("SELECT 1"))


@asynccontextmanager
async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session context manager.

    Usage:
        async with get_session() as session:
            result = await session.execute(query)
    """
    if _session_factory is None:
        raise RuntimeError("Database not initialized. Call init_db() first.")

    async with _session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


@asynccontextmanager
async def get_snapshot() -> AsyncGenerator[AsyncSession, None]:
    """Open a read snapshot spanning every query issued on the session.

    The connection is pinned with the configured isolation level before the
    first statement, so counts and ranks all observe the same point in time.
    Commits on normal exit, rolls back on any exception.

    Usage:
        async with get_snapshot() as session:
            rank = await compute_user_rank(session, "alice")
    """
    if _session_factory is None:
        raise RuntimeError("Database not initialized. Call init_db() first.")

    settings = get_settings()
    async with _session_factory() as session:
        try:
            await session.connection(
                execution_options={"isolation_level": settings.snapshot_isolation_level}
            )
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def create_tables() -> None:
    """Create all tables (for development/testing only)."""
    if _engine is None:
        raise RuntimeError("Database not initialized. Call init_db() first.")

    async with _engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

