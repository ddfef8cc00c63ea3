#!/usr/bin/env python3
"""
Seed Notes for Manual Testing

Fills the note store with generated notes so pagination and search can
be exercised from the screen.

Usage:
    python scripts/seed_notes.py
    python scripts/seed_notes.py --count 500
    python scripts/seed_notes.py --clean  # Delete all notes first
"""

from __future__ import annotations

import argparse
import asyncio
import sys

from quicknotes.core.config import database_url_for, settings
from quicknotes.core.errors import StorageUnavailable
from quicknotes.repositories import NoteGateway

DEFAULT_COUNT = 120
SAMPLE_TEXTS = [
    "Buy milk",
    "Call Alice about the weekend trip",
    "Dentist appointment on Tuesday at 10:30",
    "Ideas: a longer note that will be truncated in the list view",
    "Pay the electricity bill",
]


def log_info(msg: str) -> None:
    print(f"ℹ {msg}")


def log_success(msg: str) -> None:
    print(f"✓ {msg}")


def log_error(msg: str) -> None:
    print(f"✗ {msg}")


async def delete_all_notes(gateway: NoteGateway, batch: int = 500) -> int:
    """Delete every note, one page at a time."""
    deleted = 0
    while notes := await gateway.search("", batch, 0):
        for note in notes:
            await gateway.delete(note.id)
        deleted += len(notes)
    return deleted


async def seed(database_url: str, count: int, clean: bool) -> int:
    async with NoteGateway(database_url) as gateway:
        if clean:
            log_info("Cleaning existing notes...")
            log_success(f"Deleted {await delete_all_notes(gateway)} notes")

        for i in range(count):
            text = f"#{i + 1} {SAMPLE_TEXTS[i % len(SAMPLE_TEXTS)]}"
            await gateway.create(text)
    return count


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed the note store")
    parser.add_argument(
        "--count", type=int, default=DEFAULT_COUNT, help="Number of notes to create"
    )
    parser.add_argument("--clean", action="store_true", help="Delete all notes first")
    parser.add_argument(
        "--db-path", default=settings.NOTES_DB_PATH, help="SQLite database file"
    )

    args = parser.parse_args()

    print("\n📝 Quick Notes Seeder\n")

    try:
        created = asyncio.run(
            seed(database_url_for(args.db_path), args.count, args.clean)
        )
    except StorageUnavailable as e:
        log_error(str(e))
        return 1

    log_success(f"Created {created} notes in {args.db_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
