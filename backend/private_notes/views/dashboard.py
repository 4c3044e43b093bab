from __future__ import annotations

from typing import Optional

from private_notes.storage.notes_store import Note, NoteId, NotesStore
from private_notes.web.components import note_count_label


class DashboardView:
    """State of the notes list page: the notes, the create form and the error banner."""

    def __init__(self, store: NotesStore):
        self.store = store
        self.notes: list[Note] = []
        self.loading = True
        self.error = ""
        self.show_form = False
        self.title = ""
        self.content = ""
        self.creating = False

    @property
    def count_label(self) -> str:
        return note_count_label(len(self.notes))

    @property
    def is_empty(self) -> bool:
        return not self.loading and not self.notes

    def load(self) -> "DashboardView":
        self.loading = True
        self.error = ""
        result = self.store.list_notes()
        if result.ok:
            self.notes = list(result.data or [])
        else:
            self.error = result.error
        self.loading = False
        return self

    def open_form(self) -> None:
        self.show_form = True

    def close_form(self) -> None:
        self.show_form = False
        self.title = ""
        self.content = ""

    def create(self, title: Optional[str] = None, content: Optional[str] = None) -> Optional[Note]:
        if title is not None:
            self.title = title
        if content is not None:
            self.content = content
        if not self.title.strip() or self.creating:
            return None

        self.creating = True
        self.error = ""
        try:
            result = self.store.create_note(self.title, self.content)
        finally:
            self.creating = False

        if not result.ok:
            self.error = result.error
            return None

        # the new note goes on top without reloading the list
        self.notes = [result.data] + self.notes
        self.close_form()
        return result.data

    def delete(self, note_id: NoteId) -> bool:
        result = self.store.delete_note(note_id)
        if not result.ok:
            self.error = result.error
            return False
        self.notes = [n for n in self.notes if n.id != str(note_id)]
        return True
