"""
Note Gateway

Data access layer for notes: the only component that issues storage
operations. Owns the ``notes`` schema and translates driver failures
into ``StorageUnavailable``.
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from types import TracebackType

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from quicknotes.core.database import build_engine, build_session_factory
from quicknotes.core.errors import StorageUnavailable
from quicknotes.models import Base, NoteRecord
from quicknotes.schemas.notes import Note

logger = logging.getLogger(__name__)


@contextmanager
def _storage_errors(operation: str) -> Iterator[None]:
    """Re-raise driver and filesystem failures as ``StorageUnavailable``."""
    try:
        yield
    except (SQLAlchemyError, sqlite3.Error, OSError) as e:
        logger.exception("Note store %s failed", operation)
        raise StorageUnavailable(f"Note store {operation} failed: {e}") from e


class NoteGateway:
    """
    Gateway for note persistence with substring search.

    The gateway is constructed explicitly and injected where needed; there
    is no process-wide connection. Each operation runs in its own
    short-lived session, so no transaction spans two calls.

    Lifecycle::

        async with NoteGateway("sqlite+aiosqlite:///notes.db") as gateway:
            note = await gateway.create("Buy milk")
            page = await gateway.search("milk", limit=50, offset=0)

    Key guarantees:
        - ``search``: ordered by id descending, pattern ``%term%`` with
          LIKE wildcards in ``term`` passed through unescaped.
        - ``update`` / ``delete``: silently no-op for unknown ids.
    """

    def __init__(
        self,
        database_url: str | None = None,
        *,
        engine: AsyncEngine | None = None,
    ) -> None:
        self._engine = engine if engine is not None else build_engine(database_url)
        self._session_factory = build_session_factory(self._engine)
        self._closed = False

    async def __aenter__(self) -> NoteGateway:
        await self.initialize()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def initialize(self) -> None:
        """
        Create the ``notes`` table if it does not exist.

        Idempotent: safe to call on every process start.

        Raises:
            StorageUnavailable: If the database file cannot be opened.
        """
        with _storage_errors("initialization"):
            async with self._engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        self._closed = False
        logger.info("Note store ready (%s)", self._engine.url)

    async def close(self) -> None:
        """Dispose pooled connections. Calling it twice is harmless."""
        if self._closed:
            return
        await self._engine.dispose()
        self._closed = True
        logger.info("Note store closed")

    # ------------------------------------------------------------------
    # Read operations
    # ------------------------------------------------------------------

    async def search(self, term: str, limit: int, offset: int) -> list[Note]:
        """
        Find notes whose text contains ``term``.

        Args:
            term: Substring to match. Empty matches every note. ``%`` and
                ``_`` keep their LIKE meaning.
            limit: Maximum number of rows.
            offset: Rows to skip before collecting results.

        Returns:
            Notes ordered by id descending (newest first).

        Raises:
            StorageUnavailable: If the store cannot be read.
        """
        stmt = (
            select(NoteRecord)
            .where(NoteRecord.text.like(f"%{term}%"))
            .order_by(NoteRecord.id.desc())
            .limit(limit)
            .offset(offset)
        )
        with _storage_errors("search"):
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                records = result.scalars().all()

        logger.debug(
            "Search %r (limit=%d, offset=%d) returned %d notes",
            term,
            limit,
            offset,
            len(records),
        )
        return [Note.model_validate(record) for record in records]

    # ------------------------------------------------------------------
    # Write operations
    # ------------------------------------------------------------------

    async def create(self, text: str) -> Note:
        """
        Insert a new note.

        The gateway does not validate ``text``; the controller rejects
        blank drafts before calling it.

        Returns:
            The stored note with its assigned id.

        Raises:
            StorageUnavailable: If the row cannot be written.
        """
        record = NoteRecord(text=text)
        with _storage_errors("create"):
            async with self._session_factory() as session:
                session.add(record)
                await session.commit()

        logger.info("Created note %d", record.id)
        return Note.model_validate(record)

    async def update(self, note_id: int, text: str) -> None:
        """Overwrite the text of ``note_id``. Unknown ids are ignored."""
        stmt = (
            update(NoteRecord)
            .where(NoteRecord.id == note_id)
            .values({NoteRecord.text: text})
        )
        with _storage_errors("update"):
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                await session.commit()

        logger.info("Updated note %d (%d row(s))", note_id, result.rowcount)

    async def delete(self, note_id: int) -> None:
        """Remove ``note_id``. Unknown ids are ignored."""
        stmt = delete(NoteRecord).where(NoteRecord.id == note_id)
        with _storage_errors("delete"):
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                await session.commit()

        logger.info("Deleted note %d (%d row(s))", note_id, result.rowcount)
