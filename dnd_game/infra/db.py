"""Async engine and session lifecycle for the application process."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncGenerator

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from dnd_game.domain import seed
from dnd_game.errors import DatabaseNotInitializedError
from dnd_game.infra import migrate
from dnd_game.infra.config import (
    ConnectionConfig,
    DevelopmentConnection,
    TestConnection,
    resolve_connection,
    settings,
)

logger = logging.getLogger(__name__)

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def create_engine_for(conn: ConnectionConfig) -> AsyncEngine:
    engine = create_async_engine(conn.url, **conn.engine_kwargs())

    # SQLite leaves foreign keys off per connection unless asked
    if conn.dialect == "sqlite":
        @event.listens_for(engine.sync_engine, "connect")
        def _set_sqlite_pragma(dbapi_conn, connection_record):
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


async def run_migrations(engine: AsyncEngine, conn: ConnectionConfig) -> list[str]:
    """Bring the store behind ``engine`` to the catalog head."""
    if not isinstance(conn, TestConnection):
        return await asyncio.to_thread(migrate.upgrade, conn_config=conn)

    # An in-memory store exists only on this engine's connection. Batch
    # rebuilds drop tables, so foreign keys stay off while they run.
    async with engine.connect() as connection:
        await connection.exec_driver_sql("PRAGMA foreign_keys=OFF")
        applied = await connection.run_sync(
            lambda sync_conn: migrate.upgrade(connection=sync_conn)
        )
        await connection.commit()
        await connection.exec_driver_sql("PRAGMA foreign_keys=ON")
        await connection.commit()
    return applied


async def init_database(environment: str | None = None) -> AsyncEngine:
    """Connect, migrate to head and, in development, seed an empty store.

    Idempotent: a second call returns the engine already in use.
    """
    global _engine, _session_factory
    if _engine is not None:
        return _engine

    conn = resolve_connection(environment or settings.app_env)
    if isinstance(conn, DevelopmentConnection):
        conn.filename.parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine_for(conn)
    try:
        async with engine.connect() as connection:
            await connection.execute(text("SELECT 1"))
        logger.info("Database connection established (%s, %s)", conn.environment, conn.dialect)

        applied = await run_migrations(engine, conn)
        logger.info("Migrations complete (%d applied)", len(applied))
    except Exception:
        await engine.dispose()
        raise

    _engine = engine
    _session_factory = async_sessionmaker(engine, expire_on_commit=False)

    if isinstance(conn, DevelopmentConnection):
        async with _session_factory() as db:
            if not await seed.has_users(db):
                logger.info("Empty development store; seeding demo data")
                await seed.seed(db)

    return engine


def get_engine() -> AsyncEngine:
    if _engine is None:
        raise DatabaseNotInitializedError()
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    if _session_factory is None:
        raise DatabaseNotInitializedError()
    return _session_factory


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with get_session_factory()() as session:
        yield session


async def close_database() -> None:
    global _engine, _session_factory
    if _engine is None:
        return
    await _engine.dispose()
    _engine = None
    _session_factory = None
    logger.info("Database connection closed")
