"""
Database Configuration.

SQLAlchemy async engine and session management.
Uses lazy initialization to prevent import-time failures when .env is not configured.
"""

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from rolenotes.backend.core.logging import get_logger

logger = get_logger(__name__)

# Module-level state for lazy initialization
_engine: AsyncEngine | None = None
_async_session_factory: async_sessionmaker[AsyncSession] | None = None


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """
    Turn on foreign key enforcement for every SQLite connection.

    SQLite ignores ON DELETE CASCADE unless the pragma is set per connection.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection: Any, connection_record: Any) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def _create_engine() -> AsyncEngine:
    """Create async SQLAlchemy engine."""
    from rolenotes.backend.core.config import get_app_config, get_database_url

    db_config = get_app_config().database

    engine = create_async_engine(
        get_database_url(),
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_recycle=db_config.pool_recycle,
        echo=db_config.echo,
    )
    logger.debug(
        "Database engine created",
        extra={"host": db_config.host, "database": db_config.name},
    )
    return engine


def get_engine() -> AsyncEngine:
    """
    Get the database engine, creating it on first use.

    Returns:
        SQLAlchemy async engine instance
    """
    global _engine
    if _engine is None:
        _engine = _create_engine()
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """
    Get the session factory, creating it on first use.

    Returns:
        SQLAlchemy async session factory
    """
    global _async_session_factory
    if _async_session_factory is None:
        _async_session_factory = async_sessionmaker(
            get_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
        )
    return _async_session_factory


async def init_models(engine: AsyncEngine | None = None) -> None:
    """
    Create all tables that do not exist yet.

    Schema migrations are managed outside this project; this only
    bootstraps an empty database.
    """
    from rolenotes.backend.models import Base

    target = engine or get_engine()
    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created")


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency that provides a database session.

    The session is committed when the request succeeds and rolled back
    when it raises.

    Usage in endpoints:
        @router.get("/items")
        async def get_items(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    session_factory = get_session_factory()
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def dispose_engine() -> None:
    """Close pooled connections and forget the engine and session factory."""
    global _engine, _async_session_factory
    if _engine is not None:
        await _engine.dispose()
        logger.debug("Database engine disposed")
    _engine = None
    _async_session_factory = None
