"""Database package: shared engine and session factory."""

from goalboard.db.base import Base, build_engine, close_db, create_tables, get_session_factory, init_db

__all__ = [
    "Base",
    "build_engine",
    "close_db",
    "create_tables",
    "get_session_factory",
    "init_db",
]
