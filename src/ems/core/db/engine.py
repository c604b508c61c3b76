"""Database engine construction."""

from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from src.ems.core.config import Settings


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine(settings: Settings, **overrides: Any) -> AsyncEngine:
    """Create the async engine for the configured database.

    PostgreSQL (asyncpg) gets a sized pool with acquisition and command
    timeouts. SQLite (aiosqlite, used locally and in tests) gets foreign
    key enforcement switched on for every connection.
    """
    url = settings.database_url
    if url.startswith("sqlite"):
        engine = create_async_engine(url, **overrides)
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    options: dict[str, Any] = {
        "pool_size": settings.database_pool_size,
        "max_overflow": settings.database_max_overflow,
        "pool_timeout": settings.database_pool_timeout,
        "pool_pre_ping": True,
        "connect_args": {"command_timeout": settings.database_command_timeout},
    }
    options.update(overrides)
    return create_async_engine(url, **options)
