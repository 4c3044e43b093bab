from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from private_notes.api.deps import get_notes_store, require_user
from private_notes.models.notes import NoteCreate, NoteOut, NoteUpdate
from private_notes.result import Result
from private_notes.storage.notes_store import (
    NOT_AUTHENTICATED,
    NOT_FOUND,
    TITLE_REQUIRED,
    NotesStore,
)

router = APIRouter(prefix="/api/notes", tags=["notes"], dependencies=[Depends(require_user)])

_STATUS_BY_ERROR = {
    NOT_AUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    NOT_FOUND: status.HTTP_404_NOT_FOUND,
    TITLE_REQUIRED: 422,
}


def _unwrap(result: Result):
    if result.ok:
        return result.data
    code = _STATUS_BY_ERROR.get(result.error, status.HTTP_502_BAD_GATEWAY)
    raise HTTPException(status_code=code, detail=result.error)


@router.get("", response_model=list[NoteOut])
def list_notes(store: NotesStore = Depends(get_notes_store)) -> list[NoteOut]:
    notes = _unwrap(store.list_notes())
    return [NoteOut(**n.to_dict()) for n in notes]


@router.post("", response_model=NoteOut, status_code=201)
def create_note(payload: NoteCreate, store: NotesStore = Depends(get_notes_store)) -> NoteOut:
    note = _unwrap(store.create_note(payload.title, payload.content))
    return NoteOut(**note.to_dict())


@router.get("/{note_id}", response_model=NoteOut)
def get_note(note_id: UUID, store: NotesStore = Depends(get_notes_store)) -> NoteOut:
    note = _unwrap(store.get_note(note_id))
    return NoteOut(**note.to_dict())


@router.put("/{note_id}", response_model=NoteOut)
def update_note(note_id: UUID, payload: NoteUpdate, store: NotesStore = Depends(get_notes_store)) -> NoteOut:
    note = _unwrap(store.update_note(note_id, payload.title, payload.content))
    return NoteOut(**note.to_dict())


# idempotent: deleting a missing note is still 204
@router.delete("/{note_id}", status_code=204)
def delete_note(note_id: UUID, store: NotesStore = Depends(get_notes_store)) -> None:
    _unwrap(store.delete_note(note_id))
    return None
