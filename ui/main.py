"""
Quick Notes Screen

Streamlit front-end for the single note list screen: search field,
note cards with a delete trigger, an add trigger, the add/edit panel
and the delete confirmation panel.

Run locally:
    streamlit run ui/main.py

The database file is taken from NOTES_DB_PATH (default ``notes.db``).
"""

from __future__ import annotations

import atexit
import logging

import streamlit as st

from quicknotes.core.config import settings
from quicknotes.core.errors import StorageUnavailable
from quicknotes.core.logging import setup_logging
from quicknotes.core.runner import BackgroundLoop
from quicknotes.repositories import NoteGateway
from quicknotes.schemas.notes import Note
from quicknotes.services.controller import NoteListController

logger = logging.getLogger("quicknotes.ui")

SEARCH_KEY = "search_term"
DRAFT_KEY = "draft_text"
CONTROLLER_KEY = "controller"


# ---------------------------------------------------------------------------
# Page Configuration
# ---------------------------------------------------------------------------

st.set_page_config(
    page_title=settings.PROJECT_NAME,
    page_icon="📝",
    layout="centered",
)


# ---------------------------------------------------------------------------
# Runtime (shared by all sessions)
# ---------------------------------------------------------------------------


def _shutdown(loop: BackgroundLoop, gateway: NoteGateway) -> None:
    """Close the note store and stop the loop at interpreter exit."""
    if loop.is_running:
        loop.run(gateway.close())
        loop.stop()


@st.cache_resource
def get_runtime() -> tuple[BackgroundLoop, NoteGateway]:
    """
    Start the background loop and open the note store once per process.

    Raises:
        StorageUnavailable: If the database file cannot be opened. Not
            cached, so the next rerun tries again.
    """
    setup_logging()
    loop = BackgroundLoop()
    gateway = NoteGateway()
    try:
        loop.run(gateway.initialize())
    except StorageUnavailable:
        loop.stop()
        raise
    atexit.register(_shutdown, loop, gateway)
    logger.info("%s started", settings.PROJECT_NAME)
    return loop, gateway


def get_controller(loop: BackgroundLoop, gateway: NoteGateway) -> NoteListController:
    """Per-session controller, loaded with page 0 on first use."""
    if CONTROLLER_KEY not in st.session_state:
        controller = NoteListController(
            gateway,
            search_debounce=settings.SEARCH_DEBOUNCE_SECONDS,
        )
        loop.run(controller.refresh())
        st.session_state[CONTROLLER_KEY] = controller
    return st.session_state[CONTROLLER_KEY]


# ---------------------------------------------------------------------------
# Callbacks
# ---------------------------------------------------------------------------


def on_search(loop: BackgroundLoop, controller: NoteListController) -> None:
    loop.run(controller.set_search_term(st.session_state[SEARCH_KEY]))


def on_load_more(loop: BackgroundLoop, controller: NoteListController) -> None:
    loop.run(controller.load_more())


def on_add(controller: NoteListController) -> None:
    controller.open_add()
    st.session_state[DRAFT_KEY] = ""


def on_open(controller: NoteListController, note: Note) -> None:
    controller.open_edit(note)
    st.session_state[DRAFT_KEY] = note.text


def on_save(loop: BackgroundLoop, controller: NoteListController) -> None:
    controller.set_draft(st.session_state.get(DRAFT_KEY, ""))
    loop.run(controller.save())


def on_confirm_delete(loop: BackgroundLoop, controller: NoteListController) -> None:
    loop.run(controller.confirm_delete())


# ---------------------------------------------------------------------------
# UI Components
# ---------------------------------------------------------------------------


def render_error_banner(controller: NoteListController) -> None:
    if controller.state.error is None:
        return
    message, dismiss = st.columns([5, 1])
    message.error(controller.state.error, icon="⚠️")
    dismiss.button("Dismiss", key="dismiss-error", on_click=controller.dismiss_error)


def render_editor(loop: BackgroundLoop, controller: NoteListController) -> None:
    """Add/edit panel. Saving a blank draft leaves the panel open."""
    draft = controller.state.edit_target
    if draft is None:
        return

    with st.container(border=True):
        st.subheader("New note" if draft.is_new else "Edit note")
        st.text_area("Note", key=DRAFT_KEY, placeholder="Type your note...")
        save, close = st.columns(2)
        save.button(
            "Save",
            type="primary",
            disabled=controller.state.saving,
            on_click=on_save,
            args=(loop, controller),
            use_container_width=True,
        )
        close.button(
            "Close",
            on_click=controller.close_editor,
            use_container_width=True,
        )


def render_delete_confirmation(
    loop: BackgroundLoop, controller: NoteListController
) -> None:
    if controller.state.delete_target is None:
        return

    with st.container(border=True):
        st.write("Do you want to delete this note?")
        confirm, decline = st.columns(2)
        confirm.button(
            "Yes",
            type="primary",
            disabled=not controller.can_confirm_delete,
            on_click=on_confirm_delete,
            args=(loop, controller),
            use_container_width=True,
        )
        decline.button(
            "No",
            on_click=controller.decline_delete,
            use_container_width=True,
        )


def render_note_list(loop: BackgroundLoop, controller: NoteListController) -> None:
    notes = controller.state.visible_notes
    if not notes:
        st.caption("No notes found.")
        return

    for note in notes:
        card, trash = st.columns([8, 1])
        card.button(
            controller.preview(note),
            key=f"open-{note.id}",
            on_click=on_open,
            args=(controller, note),
            use_container_width=True,
        )
        trash.button(
            "🗑️",
            key=f"delete-{note.id}",
            help="Delete note",
            on_click=controller.request_delete,
            args=(note.id,),
        )

    # Streamlit has no scroll events; this stands in for reaching the end
    st.button(
        "Load more",
        key="load-more",
        disabled=controller.state.loading,
        on_click=on_load_more,
        args=(loop, controller),
    )


# ---------------------------------------------------------------------------
# Main Entry Point
# ---------------------------------------------------------------------------


def main() -> None:
    """Main application entry point."""
    try:
        loop, gateway = get_runtime()
    except StorageUnavailable as e:
        st.error(f"Cannot open the note store: {e}")
        st.stop()

    controller = get_controller(loop, gateway)

    st.title(f"📝 {settings.PROJECT_NAME}")
    render_error_banner(controller)

    st.text_input(
        "Search",
        key=SEARCH_KEY,
        placeholder="Search notes...",
        label_visibility="collapsed",
        on_change=on_search,
        args=(loop, controller),
    )
    st.button("➕ New note", type="primary", on_click=on_add, args=(controller,))

    render_editor(loop, controller)
    render_delete_confirmation(loop, controller)
    render_note_list(loop, controller)


if __name__ == "__main__":
    main()
