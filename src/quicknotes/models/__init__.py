"""Models package - re-exports all models for convenient imports."""

from quicknotes.models.base import Base
from quicknotes.models.note import NoteRecord

__all__ = [
    "Base",
    "NoteRecord",
]
