"""Async SQLAlchemy engine and session helpers.

Usage:
    engine = create_engine(settings.database_url)
    await create_tables(engine)
    async with get_session(engine) as session:
        repo = Repository(session)
        ...
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from tourney.db.models import Base

logger = logging.getLogger(__name__)

# Result entry and standings reads share one SQLite file; WAL plus a busy
# timeout keeps a reader from failing with "database is locked".
_SQLITE_PRAGMAS = (
    "PRAGMA journal_mode=WAL",
    "PRAGMA synchronous=NORMAL",
    "PRAGMA busy_timeout=15000",
    "PRAGMA foreign_keys=ON",
)


def _apply_sqlite_pragmas(dbapi_conn: object, connection_record: object) -> None:
    cursor = dbapi_conn.cursor()  # type: ignore[attr-defined]
    for pragma in _SQLITE_PRAGMAS:
        cursor.execute(pragma)
    cursor.close()


def create_engine(database_url: str, *, echo: bool = False) -> AsyncEngine:
    """Create an async engine for *database_url*.

    SQLite connections get the pragmas above, including foreign key
    enforcement, on every new connection.
    """
    is_sqlite = database_url.startswith("sqlite")
    connect_args: dict[str, object] = {"timeout": 15} if is_sqlite else {}
    engine = create_async_engine(database_url, echo=echo, connect_args=connect_args)
    if is_sqlite:
        event.listen(engine.sync_engine, "connect", _apply_sqlite_pragmas)
    return engine


async def create_tables(engine: AsyncEngine) -> None:
    """Create the tournaments, groups, teams and matches tables if missing."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("tables_ready count=%d", len(Base.metadata.tables))


# id(sync_engine) -> (engine, factory); the engine is kept so a recycled id
# can never hand out a factory bound to a disposed engine.
_factories: dict[int, tuple[AsyncEngine, async_sessionmaker[AsyncSession]]] = {}


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory for *engine*, built on first use and then reused."""
    cached = _factories.get(id(engine.sync_engine))
    if cached is None or cached[0] is not engine:
        cached = (engine, async_sessionmaker(engine, expire_on_commit=False))
        _factories[id(engine.sync_engine)] = cached
    return cached[1]


@asynccontextmanager
async def get_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Unit of work: commit when the block exits cleanly, roll back otherwise."""
    async with create_session_factory(engine)() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
