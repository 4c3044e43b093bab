import pytest

from private_notes.storage.session_store import SESSION_ID_KEY, ServerSessionStorage, SessionStore


def test_storage_keeps_only_an_id_in_the_cookie(tmp_path):
    cookie = {}
    storage = ServerSessionStorage(SessionStore(tmp_path), cookie)
    assert storage.get_item("token") is None

    storage.set_item("token", "x" * 8000)
    assert set(cookie) == {SESSION_ID_KEY}
    assert storage.get_item("token") == "x" * 8000

    # a later request with the same cookie sees the same items
    again = ServerSessionStorage(SessionStore(tmp_path), dict(cookie))
    assert again.get_item("token") == "x" * 8000


def test_removing_last_item_drops_file_and_id(tmp_path):
    cookie = {}
    storage = ServerSessionStorage(SessionStore(tmp_path), cookie)
    storage.set_item("token", "abc")
    storage.set_item("verifier", "def")
    path = tmp_path / "sessions" / f"{cookie[SESSION_ID_KEY]}.json"

    storage.remove_item("verifier")
    assert path.exists()
    assert storage.get_item("token") == "abc"

    storage.remove_item("token")
    assert not path.exists()
    assert SESSION_ID_KEY not in cookie


def test_session_id_must_be_path_safe(tmp_path):
    store = SessionStore(tmp_path)
    with pytest.raises(ValueError):
        store.load("../../etc/passwd")
