from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Union
from uuid import UUID

from private_notes.result import Result
from private_notes.session.context import AuthContext
from private_notes.storage.remote_client import (
    REMOTE_ERRORS,
    SINGLE_ROW_MISMATCH,
    error_code,
    error_message,
)

logger = logging.getLogger(__name__)

NOT_AUTHENTICATED = "User not authenticated"
NOT_FOUND = "Note not found"
TITLE_REQUIRED = "Title is required"

NoteId = Union[str, UUID]


@dataclass(frozen=True)
class Note:
    id: str
    user_id: str
    title: str
    content: str
    created_at: str
    updated_at: str

    @property
    def was_edited(self) -> bool:
        return self.updated_at != self.created_at

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Note":
        return cls(
            id=str(row["id"]),
            user_id=str(row["user_id"]),
            title=row["title"],
            content=row.get("content") or "",
            created_at=str(row["created_at"]),
            updated_at=str(row["updated_at"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "title": self.title,
            "content": self.content,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


class NotesStore:
    """
    CRUD over the `notes` table.

    Ownership is enforced by the database's row-level security; every query
    runs with the signed-in user's token, so nothing here filters by owner.
    Each call returns a `Result` and never raises for a remote failure.
    """

    def __init__(self, client: Any, auth: AuthContext, table: str = "notes"):
        self.client = client
        self.auth = auth
        self.table = table

    def _query(self) -> Any:
        return self.client.table(self.table)

    def _fail(self, action: str, exc: BaseException) -> Result:
        message = error_message(exc)
        logger.error("Error %s: %s", action, message)
        if error_code(exc) == SINGLE_ROW_MISMATCH:
            return Result.failure(NOT_FOUND)
        return Result.failure(message)

    def list_notes(self) -> Result[list[Note]]:
        try:
            response = self._query().select("*").retry(False).order("created_at", desc=True).execute()
        except REMOTE_ERRORS as exc:
            return self._fail("fetching notes", exc)
        return Result.success([Note.from_row(row) for row in response.data or []])

    def get_note(self, note_id: NoteId) -> Result[Note]:
        try:
            response = self._query().select("*").retry(False).eq("id", str(note_id)).single().execute()
        except REMOTE_ERRORS as exc:
            return self._fail("fetching note", exc)
        if not response.data:
            return Result.failure(NOT_FOUND)
        return Result.success(Note.from_row(response.data))

    def create_note(self, title: str, content: str = "") -> Result[Note]:
        user = self.auth.user
        if user is None:
            logger.warning("Refusing to create a note without a session")
            return Result.failure(NOT_AUTHENTICATED)

        title = (title or "").strip()
        if not title:
            return Result.failure(TITLE_REQUIRED)

        row = {"user_id": user.id, "title": title, "content": (content or "").strip()}
        try:
            response = self._query().insert(row).execute()
        except REMOTE_ERRORS as exc:
            return self._fail("creating note", exc)
        if not response.data:
            return Result.failure("Note was not created")

        note = Note.from_row(response.data[0])
        logger.info("Note %s created", note.id)
        return Result.success(note)

    def update_note(self, note_id: NoteId, title: str, content: str = "") -> Result[Note]:
        """Replace title and content. `updated_at` is set by a database trigger."""
        title = (title or "").strip()
        if not title:
            return Result.failure(TITLE_REQUIRED)

        values = {"title": title, "content": (content or "").strip()}
        try:
            response = self._query().update(values).eq("id", str(note_id)).execute()
        except REMOTE_ERRORS as exc:
            return self._fail("updating note", exc)
        if not response.data:
            # no row matched, or row-level security hid it
            return Result.failure(NOT_FOUND)
        return Result.success(Note.from_row(response.data[0]))

    def delete_note(self, note_id: NoteId) -> Result[None]:
        try:
            self._query().delete().eq("id", str(note_id)).execute()
        except REMOTE_ERRORS as exc:
            return self._fail("deleting note", exc)
        return Result.success(None)
