"""
Database Configuration

Async SQLAlchemy 2.0 engine setup for the embedded SQLite note store.
Uses aiosqlite as the driver for non-blocking I/O.

Design:
    - No module-level engine: callers build one with ``build_engine`` and
      hand it to the gateway, which owns its lifecycle.
    - Every new DBAPI connection gets the configured LIKE case sensitivity.
"""

from __future__ import annotations

import logging

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from quicknotes.core.config import settings
from quicknotes.models.base import Base

logger = logging.getLogger(__name__)


def build_engine(
    url: str | None = None,
    *,
    case_sensitive_like: bool | None = None,
    echo: bool | None = None,
) -> AsyncEngine:
    """
    Create an async engine for the note store.

    Args:
        url: SQLAlchemy URL. Defaults to ``settings.DATABASE_URL``.
        case_sensitive_like: Enable ``PRAGMA case_sensitive_like`` on every
            connection. Defaults to ``settings.CASE_SENSITIVE_SEARCH``.
        echo: Log emitted SQL. Defaults to ``settings.SQL_ECHO``.

    Returns:
        A new AsyncEngine. Dispose it with ``await engine.dispose()``.

    Note:
        ``case_sensitive_like`` is a deprecated SQLite pragma. Builds
        compiled with ``SQLITE_OMIT_DEPRECATED`` ignore it silently, and
        LIKE then falls back to SQLite's ASCII case-insensitive matching.
    """
    url = url or settings.DATABASE_URL
    if case_sensitive_like is None:
        case_sensitive_like = settings.CASE_SENSITIVE_SEARCH
    if echo is None:
        echo = settings.SQL_ECHO

    engine = create_async_engine(url, echo=echo)
    pragma = "ON" if case_sensitive_like else "OFF"

    @event.listens_for(engine.sync_engine, "connect")
    def _set_like_pragma(dbapi_connection, connection_record):  # noqa: ANN001
        cursor = dbapi_connection.cursor()
        cursor.execute(f"PRAGMA case_sensitive_like = {pragma}")
        cursor.close()

    logger.debug("Database engine created: %s", engine.url)
    return engine


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to ``engine``."""
    # expire_on_commit=False: prevents implicit I/O after commit when accessing attributes
    return async_sessionmaker(engine, expire_on_commit=False)


__all__ = ["Base", "build_engine", "build_session_factory"]
