"""Declarative base and async engine setup.

Two backends are supported: PostgreSQL through asyncpg for deployments and
SQLite through aiosqlite for local runs and the test suite. SQLite only
enforces foreign keys when each connection asks for it, so the engine
turns that on as connections open.
"""

import structlog
from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from goalboard.core.config import get_settings

logger = structlog.get_logger(__name__)


class Base(DeclarativeBase):
    pass


_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def is_sqlite(url: str) -> bool:
    return make_url(url).get_backend_name() == "sqlite"


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str) -> AsyncEngine:
    """Create an async engine tuned for the URL's backend.

    SQL statement logging goes through the "sqlalchemy.engine" logger
    (see configure_structlog), so echo is never set here.
    """
    if is_sqlite(url):
        # File-backed SQLite has no server connection to go stale
        engine = create_async_engine(url)
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        return engine
    return create_async_engine(url, pool_pre_ping=True)


async def create_tables(engine: AsyncEngine) -> None:
    # Import all models so metadata is populated before create_all
    import goalboard.db.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def init_db(url: str | None = None) -> None:
    """Initialize the global engine and session factory, creating missing tables."""
    global _engine, _session_factory

    if _engine is not None:
        return

    db_url = url or get_settings().database_url

    _engine = build_engine(db_url)
    _session_factory = async_sessionmaker(
        _engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    await create_tables(_engine)

    logger.info("database_initialized", backend=make_url(db_url).get_backend_name())


async def close_db() -> None:
    global _engine, _session_factory

    if _engine is not None:
        await _engine.dispose()
        _engine = None
        _session_factory = None


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Return the configured session factory.

    Raises RuntimeError if init_db() has not been called.
    """
    if _session_factory is None:
        raise RuntimeError("Database not initialized. Call init_db() first.")
    return _session_factory
