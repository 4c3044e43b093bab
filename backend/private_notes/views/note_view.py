from __future__ import annotations

from typing import Optional

from private_notes.storage.notes_store import Note, NoteId, NotesStore

DASHBOARD_URL = "/dashboard"


class NoteView:
    """One note, shown read-only or in an edit form seeded from the loaded record."""

    def __init__(self, store: NotesStore, note_id: NoteId):
        self.store = store
        self.note_id = str(note_id)
        self.note: Optional[Note] = None
        self.loading = True
        self.editing = False
        self.edit_title = ""
        self.edit_content = ""
        self.saving = False
        self.error = ""
        self.redirect_to: Optional[str] = None

    def load(self) -> "NoteView":
        self.loading = True
        result = self.store.get_note(self.note_id)
        if not result.ok or result.data is None:
            self.redirect_to = DASHBOARD_URL
            return self

        self.note = result.data
        self._reset_form()
        self.loading = False
        return self

    def _reset_form(self) -> None:
        self.edit_title = self.note.title if self.note else ""
        self.edit_content = self.note.content if self.note else ""

    def begin_edit(self) -> None:
        if self.note is None:
            return
        self._reset_form()
        self.editing = True

    def cancel_edit(self) -> None:
        self.editing = False
        self._reset_form()

    def save(self, title: Optional[str] = None, content: Optional[str] = None) -> bool:
        if title is not None:
            self.edit_title = title
        if content is not None:
            self.edit_content = content
        if self.saving or self.note is None:
            return False

        self.saving = True
        self.error = ""
        try:
            result = self.store.update_note(self.note_id, self.edit_title, self.edit_content)
        finally:
            self.saving = False

        if not result.ok or result.data is None:
            self.error = result.error or "Could not save note"
            return False

        self.note = result.data
        self.editing = False
        return True

    def delete(self) -> bool:
        result = self.store.delete_note(self.note_id)
        if not result.ok:
            self.error = result.error
            return False
        self.redirect_to = DASHBOARD_URL
        return True
