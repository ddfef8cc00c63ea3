"""
Pytest Configuration and Fixtures

Shared fixtures for gateway and controller tests. Every test gets its
own SQLite file under pytest's tmp_path, so no state leaks between tests.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
import pytest_asyncio

from quicknotes.core.config import database_url_for
from quicknotes.repositories import NoteGateway
from quicknotes.services.controller import NoteListController


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    """URL of a fresh, not yet created, note database."""
    return database_url_for(tmp_path / "notes.db")


@pytest_asyncio.fixture
async def gateway(database_url: str) -> AsyncGenerator[NoteGateway, None]:
    """
    Initialized gateway on an empty store.

    Yields:
        NoteGateway: closed automatically after the test.
    """
    async with NoteGateway(database_url) as gw:
        yield gw


@pytest_asyncio.fixture
async def controller(gateway: NoteGateway) -> NoteListController:
    """Controller wired to the real gateway, page 0 already loaded."""
    ctrl = NoteListController(gateway)
    await ctrl.refresh()
    return ctrl


@pytest.fixture
def create_many(gateway: NoteGateway):
    """Async helper inserting ``count`` notes; returns ids in creation order."""

    async def _create_many(count: int, prefix: str = "note") -> list[int]:
        ids = []
        for i in range(count):
            note = await gateway.create(f"{prefix} {i}")
            ids.append(note.id)
        return ids

    return _create_many
