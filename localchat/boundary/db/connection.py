"""
Database connection management.

Provides the async SQLAlchemy engine (aiosqlite), session factory, and the
FastAPI dependency for database session injection.

Dependencies: sqlalchemy, aiosqlite, localchat.configs
System role: Database connection lifecycle management
"""

import logging
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from localchat.boundary.db.base import Base
from localchat.configs.database import DatabaseSettings

logger = logging.getLogger(__name__)


def _configure_sqlite(engine: AsyncEngine) -> None:
    """
    Install connection hooks required by SQLite.

    Enables foreign keys on every connection and takes over transaction
    begin from the driver so SAVEPOINT (used by session import) behaves.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        # disable the driver's implicit BEGIN; emitted in _on_begin instead
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")


def get_async_engine(
    db_config: DatabaseSettings | None = None,
    url: str | None = None,
) -> AsyncEngine:
    """
    Create async SQLAlchemy engine for the SQLite database file.

    An in-memory URL gets a StaticPool so every session shares the single
    connection holding the data.

    Args:
        db_config: Database settings (defaults to environment-derived settings)
        url: Explicit database URL, overrides db_config

    Returns:
        AsyncEngine: Configured async SQLAlchemy engine

    Usage:
        engine = get_async_engine(url="sqlite+aiosqlite:///:memory:")
        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
    """
    db_config = db_config or DatabaseSettings()
    database_url = url or db_config.async_database_url

    kwargs: dict = {"echo": db_config.echo_sql}
    if ":memory:" in database_url:
        kwargs["poolclass"] = StaticPool
        kwargs["connect_args"] = {"check_same_thread": False}

    engine = create_async_engine(database_url, **kwargs)
    _configure_sqlite(engine)
    return engine


def get_async_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Create async session factory for database operations.

    Returns async_sessionmaker bound to engine with autoflush=False for
    explicit transaction control and expire_on_commit=False so rows stay
    readable after the service commits.

    Args:
        engine: Async engine to bind

    Returns:
        async_sessionmaker: Async session factory

    Usage:
        SessionFactory = get_async_session_factory(engine)
        async with SessionFactory() as session:
            session.add(obj)
            await session.commit()
    """
    return async_sessionmaker(
        bind=engine,
        autoflush=False,
        expire_on_commit=False,
    )


async def create_all_tables(engine: AsyncEngine) -> None:
    """
    Create all database tables from registered ORM models.

    Idempotent: issues CREATE TABLE IF NOT EXISTS for each model.

    Args:
        engine: Async engine to create tables on
    """
    # Import models so they register with Base.metadata
    import localchat.boundary.db.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"{__name__}:create_all_tables - Tables ready")


async def get_async_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for async database session injection with automatic cleanup.

    Opens a session from the factory held by the application state and
    closes it after the route completes, even if exceptions occur.

    Yields:
        AsyncSession: Async SQLAlchemy database session (scoped to request lifetime)

    Usage:
        from fastapi import Depends

        @router.get("/sessions/{id}")
        async def get_session(id: str, db: AsyncSession = Depends(get_async_db)):
            return await session_crud.get_by_id(db, id)
    """
    SessionFactory = request.app.state.container.session_factory
    async with SessionFactory() as session:
        yield session
