"""
Note Model

The only persisted entity: a free-text note keyed by an
auto-incrementing integer id.
"""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from quicknotes.models.base import Base


class NoteRecord(Base):
    """
    Persistent storage for notes.

    Attributes:
        id: Primary key, assigned by SQLite (AUTOINCREMENT, never reused).
        text: Note content, stored in the ``note`` column.
    """

    __tablename__ = "notes"
    # AUTOINCREMENT keeps ids monotonic even after the newest row is deleted
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    text: Mapped[str | None] = mapped_column("note", Text, nullable=True)

    def __repr__(self) -> str:
        preview = (self.text or "")[:20]
        return f"<NoteRecord(id={self.id}, text='{preview}...')>"
