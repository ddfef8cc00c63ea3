"""
Note Schemas

Pydantic models for notes flowing from the gateway to the controller.
ORM records never leave the gateway; callers only see ``Note``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Note(BaseModel):
    """
    Immutable snapshot of a persisted note.

    Attributes:
        id: Store-assigned identifier.
        text: Full note content.
    """

    id: int = Field(ge=1, description="Store-assigned identifier")
    text: str = Field(default="", description="Full note content")

    model_config = ConfigDict(from_attributes=True, frozen=True)

    @field_validator("text", mode="before")
    @classmethod
    def _null_text_as_empty(cls, value: str | None) -> str:
        # The ``note`` column is nullable; rows written by other tools may hold NULL
        return "" if value is None else value
