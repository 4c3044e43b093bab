from datetime import datetime

from private_notes.session.context import AuthContext
from private_notes.storage.notes_store import (
    NOT_AUTHENTICATED,
    NOT_FOUND,
    TITLE_REQUIRED,
    NotesStore,
)


def test_groceries_lifecycle(signed_in):
    auth, store = signed_in

    created = store.create_note("Groceries", "Milk, eggs")
    assert created.ok and created.error is None
    note = created.data
    assert note.id
    assert note.user_id == auth.user.id
    assert note.created_at == note.updated_at

    updated = store.update_note(note.id, "Groceries", "Milk, eggs, bread")
    assert updated.ok
    assert updated.data.title == "Groceries"
    assert updated.data.content == "Milk, eggs, bread"
    assert datetime.fromisoformat(updated.data.updated_at) > datetime.fromisoformat(updated.data.created_at)

    deleted = store.delete_note(note.id)
    assert deleted.ok and deleted.data is None

    fetched = store.get_note(note.id)
    assert not fetched.ok
    assert fetched.data is None
    assert fetched.error == NOT_FOUND


def test_create_trims_title_and_content(signed_in):
    _, store = signed_in
    result = store.create_note("  Trip plan \n", "\t pack boots  ")
    assert result.data.title == "Trip plan"
    assert result.data.content == "pack boots"


def test_create_requires_title(signed_in, platform):
    _, store = signed_in
    before = platform.queries

    result = store.create_note("   ", "body")

    assert result.error == TITLE_REQUIRED
    assert platform.queries == before


def test_create_without_session_fails_without_insert(platform, settings):
    auth = AuthContext(platform.client(), settings).start()
    store = NotesStore(auth.client, auth)

    result = store.create_note("Groceries", "Milk")

    assert not result.ok
    assert result.error == NOT_AUTHENTICATED
    assert platform.insert_calls == 0
    assert platform.rows == []


def test_list_is_newest_first(signed_in):
    _, store = signed_in
    for title in ("first", "second", "third"):
        assert store.create_note(title, "").ok

    result = store.list_notes()

    assert result.ok
    assert [n.title for n in result.data] == ["third", "second", "first"]
    stamps = [n.created_at for n in result.data]
    assert stamps == sorted(stamps, reverse=True)


def test_deleted_note_never_listed_again(signed_in):
    _, store = signed_in
    keep = store.create_note("keep", "").data
    gone = store.create_note("gone", "").data

    assert store.delete_note(gone.id).ok

    ids = [n.id for n in store.list_notes().data]
    assert gone.id not in ids
    assert keep.id in ids


def test_delete_of_missing_note_is_not_an_error(signed_in):
    _, store = signed_in
    assert store.delete_note("00000000-0000-0000-0000-000000000000").ok


def test_update_only_touches_title_content_and_updated_at(signed_in):
    _, store = signed_in
    original = store.create_note("Draft", "one").data

    updated = store.update_note(original.id, " Final ", " two ").data

    assert updated.id == original.id
    assert updated.user_id == original.user_id
    assert updated.created_at == original.created_at
    assert updated.title == "Final"
    assert updated.content == "two"
    assert updated.updated_at != original.updated_at


def test_update_missing_note_is_not_found(signed_in):
    _, store = signed_in
    result = store.update_note("00000000-0000-0000-0000-000000000000", "t", "c")
    assert result.error == NOT_FOUND


def test_update_requires_title(signed_in):
    _, store = signed_in
    note = store.create_note("Title", "").data
    assert store.update_note(note.id, "  ", "x").error == TITLE_REQUIRED


def test_other_users_notes_are_invisible(platform, settings):
    platform.add_user("alice@example.com", "alice-pass")
    platform.add_user("bob@example.com", "bob-pass")

    alice = AuthContext(platform.client(), settings).start()
    alice.sign_in("alice@example.com", "alice-pass")
    bob = AuthContext(platform.client(), settings).start()
    bob.sign_in("bob@example.com", "bob-pass")

    note = NotesStore(alice.client, alice).create_note("secret", "for alice").data
    bob_store = NotesStore(bob.client, bob)

    assert bob_store.list_notes().data == []
    assert bob_store.get_note(note.id).error == NOT_FOUND
    assert bob_store.update_note(note.id, "hacked", "").error == NOT_FOUND

    # delete reports success but the row survives
    assert bob_store.delete_note(note.id).ok
    assert NotesStore(alice.client, alice).get_note(note.id).data.title == "secret"


def test_remote_failure_becomes_error_message(signed_in, platform):
    _, store = signed_in
    platform.outage = "connection refused"

    for result in (
        store.list_notes(),
        store.get_note("00000000-0000-0000-0000-000000000000"),
        store.create_note("t", "c"),
        store.update_note("00000000-0000-0000-0000-000000000000", "t", "c"),
        store.delete_note("00000000-0000-0000-0000-000000000000"),
    ):
        assert result.data is None
        assert result.error == "connection refused"


def test_reads_are_not_retried_when_service_is_unavailable(signed_in, platform):
    _, store = signed_in
    note = store.create_note("Groceries", "").data
    platform.unavailable = True

    before = platform.queries
    listed = store.list_notes()
    assert listed.error == "Service Unavailable"
    assert platform.queries == before + 1

    before = platform.queries
    fetched = store.get_note(note.id)
    assert fetched.error == "Service Unavailable"
    assert fetched.data is None
    assert platform.queries == before + 1
