import pytest

from private_notes.config import Settings
from private_notes.session.context import AuthContext
from private_notes.storage.notes_store import NotesStore
from tests.fakes import FakePlatform
from tests.support import make_client, set_env


@pytest.fixture()
def settings(monkeypatch) -> Settings:
    set_env(monkeypatch)
    return Settings.from_env()


@pytest.fixture()
def platform() -> FakePlatform:
    return FakePlatform()


@pytest.fixture()
def signed_in(platform, settings):
    """AuthContext for a signed-in user plus a NotesStore bound to it."""
    platform.add_user("alice@example.com", "alice-pass")
    auth = AuthContext(platform.client(), settings).start()
    assert auth.sign_in("alice@example.com", "alice-pass").ok
    yield auth, NotesStore(auth.client, auth)
    auth.close()


@pytest.fixture()
def client(tmp_path, monkeypatch, platform):
    platform.add_user("alice@example.com", "alice-pass")
    return make_client(monkeypatch, platform, tmp_path)
