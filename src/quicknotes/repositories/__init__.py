"""Repositories package."""

from quicknotes.repositories.notes import NoteGateway

__all__ = [
    "NoteGateway",
]
