"""
Note List Controller

Mediates between user intent and the note gateway. Holds the paged,
filtered view of notes plus the state of the add/edit dialog and the
delete confirmation, and turns gateway failures into a banner message.

All methods run on one asyncio event loop. The controller suspends only
while awaiting the gateway; triggers whose request is still in flight
are ignored until it completes.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Final, Protocol

from quicknotes.core.errors import StorageUnavailable
from quicknotes.schemas.notes import Note

logger = logging.getLogger(__name__)

PAGE_SIZE: Final[int] = 50
PREVIEW_LENGTH: Final[int] = 30
ELLIPSIS: Final[str] = "..."


class NoteStore(Protocol):
    """The gateway operations the controller depends on."""

    async def search(self, term: str, limit: int, offset: int) -> list[Note]: ...

    async def create(self, text: str) -> Note: ...

    async def update(self, note_id: int, text: str) -> None: ...

    async def delete(self, note_id: int) -> None: ...


@dataclass
class Draft:
    """
    Unsaved text in the add/edit dialog.

    Attributes:
        note_id: Id of the note being edited, ``None`` for a new note.
        text: Current draft text.
    """

    note_id: int | None
    text: str = ""

    @property
    def is_new(self) -> bool:
        return self.note_id is None


@dataclass
class ViewState:
    """Process-local screen state. Never persisted."""

    visible_notes: list[Note] = field(default_factory=list)
    search_term: str = ""
    current_page: int = 0
    edit_target: Draft | None = None
    delete_target: int | None = None
    error: str | None = None
    loading: bool = False
    saving: bool = False
    deleting: bool = False


def preview(text: str, length: int = PREVIEW_LENGTH) -> str:
    """Truncate ``text`` to ``length`` characters, marking the cut with '...'."""
    if len(text) > length:
        return text[:length] + ELLIPSIS
    return text


class NoteListController:
    """
    Controller for the single note list screen.

    Usage::

        async with NoteGateway() as gateway:
            controller = NoteListController(gateway)
            await controller.refresh()
            controller.open_add()
            controller.set_draft("Buy milk")
            await controller.save()
    """

    def __init__(
        self,
        gateway: NoteStore,
        *,
        page_size: int = PAGE_SIZE,
        preview_length: int = PREVIEW_LENGTH,
        search_debounce: float = 0.0,
    ) -> None:
        self._gateway = gateway
        self.page_size = page_size
        self.preview_length = preview_length
        self.search_debounce = search_debounce
        self.state = ViewState()
        # Bumped on every page-0 load; older loads drop their results
        self._generation = 0

    # ------------------------------------------------------------------
    # Presentation helpers
    # ------------------------------------------------------------------

    def preview(self, note: Note) -> str:
        return preview(note.text, self.preview_length)

    @property
    def is_editing(self) -> bool:
        return self.state.edit_target is not None

    @property
    def is_confirming_delete(self) -> bool:
        return self.state.delete_target is not None

    @property
    def can_save(self) -> bool:
        """True when the save trigger should be enabled."""
        draft = self.state.edit_target
        return draft is not None and not self.state.saving and bool(draft.text.strip())

    @property
    def can_confirm_delete(self) -> bool:
        return self.state.delete_target is not None and not self.state.deleting

    def dismiss_error(self) -> None:
        self.state.error = None

    # ------------------------------------------------------------------
    # Search & pagination
    # ------------------------------------------------------------------

    async def refresh(self) -> None:
        """Reload page 0 of the current search term, replacing the list."""
        self._generation += 1
        await self._load_first_page(self._generation)

    async def set_search_term(self, term: str) -> None:
        """
        Switch to a new search term.

        Resets pagination and replaces the visible list with page 0 of the
        new term. With a debounce window, a term superseded during the
        window is never fetched.
        """
        self.state.search_term = term
        self.state.current_page = 0
        self._generation += 1
        generation = self._generation

        if self.search_debounce > 0:
            await asyncio.sleep(self.search_debounce)
            if generation != self._generation:
                logger.debug("Search %r superseded during debounce", term)
                return

        await self._load_first_page(generation)

    async def load_more(self) -> None:
        """
        Append the next page for the unchanged search term.

        Called when the end of the rendered list is reached. Past the last
        page this appends nothing. Ignored while another load is running.
        """
        if self.state.loading:
            return

        generation = self._generation
        next_page = self.state.current_page + 1
        self.state.loading = True
        try:
            notes = await self._gateway.search(
                self.state.search_term,
                self.page_size,
                next_page * self.page_size,
            )
        except StorageUnavailable as e:
            self._report("load more notes", e)
            return
        finally:
            self.state.loading = False

        if generation != self._generation:
            return
        self.state.visible_notes = self.state.visible_notes + notes
        self.state.current_page = next_page

    async def _load_first_page(self, generation: int) -> None:
        term = self.state.search_term
        self.state.loading = True
        try:
            notes = await self._gateway.search(term, self.page_size, 0)
        except StorageUnavailable as e:
            if generation == self._generation:
                self._report("load notes", e)
            return
        finally:
            if generation == self._generation:
                self.state.loading = False

        if generation != self._generation:
            logger.debug("Discarding stale results for %r", term)
            return
        self.state.visible_notes = notes
        self.state.current_page = 0

    # ------------------------------------------------------------------
    # Add / edit dialog
    # ------------------------------------------------------------------

    def open_add(self) -> None:
        self.state.edit_target = Draft(note_id=None, text="")

    def open_edit(self, note: Note) -> None:
        self.state.edit_target = Draft(note_id=note.id, text=note.text)

    def set_draft(self, text: str) -> None:
        if self.state.edit_target is not None:
            self.state.edit_target.text = text

    def close_editor(self) -> None:
        self.state.edit_target = None

    async def save(self) -> None:
        """
        Persist the draft and close the dialog.

        A blank draft leaves the dialog open and touches nothing. On a
        storage failure the dialog stays open with the draft intact.
        """
        draft = self.state.edit_target
        if draft is None or self.state.saving:
            return
        if not draft.text.strip():
            return

        self.state.saving = True
        try:
            if draft.is_new:
                await self._gateway.create(draft.text)
            else:
                await self._gateway.update(draft.note_id, draft.text)
        except StorageUnavailable as e:
            self._report("save the note", e)
            return
        finally:
            self.state.saving = False

        # The user may have moved on to another draft while this one was saving
        if self.state.edit_target is draft:
            self.state.edit_target = None
        await self.refresh()

    # ------------------------------------------------------------------
    # Delete confirmation
    # ------------------------------------------------------------------

    def request_delete(self, note_id: int) -> None:
        self.state.delete_target = note_id

    def decline_delete(self) -> None:
        self.state.delete_target = None

    async def confirm_delete(self) -> None:
        """Delete the targeted note, close the confirmation and reload."""
        note_id = self.state.delete_target
        if note_id is None or self.state.deleting:
            return

        self.state.deleting = True
        try:
            await self._gateway.delete(note_id)
        except StorageUnavailable as e:
            self._report("delete the note", e)
            return
        finally:
            self.state.deleting = False

        if self.state.delete_target == note_id:
            self.state.delete_target = None
        await self.refresh()

    def _report(self, action: str, error: StorageUnavailable) -> None:
        logger.error("Could not %s: %s", action, error)
        self.state.error = f"Could not {action}. Please try again."
