import importlib

from fastapi import Request
from fastapi.testclient import TestClient

from private_notes.storage.session_store import ServerSessionStorage


def set_env(monkeypatch, **extra):
    monkeypatch.setenv("SUPABASE_URL", "https://example.supabase.co")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "anon-key-for-tests")
    monkeypatch.setenv("SESSION_SECRET", "session-secret-for-tests")
    monkeypatch.setenv("SITE_URL", "http://testserver")
    monkeypatch.setenv("OAUTH_PROVIDER", "github")
    monkeypatch.delenv("SUPABASE_JWT_SECRET", raising=False)
    monkeypatch.delenv("NOTES_TABLE", raising=False)
    for name, value in extra.items():
        monkeypatch.setenv(name, value)


def make_client(monkeypatch, platform, data_dir, **env) -> TestClient:
    # isolate the server-side session files per test
    set_env(monkeypatch, APP_DATA_DIR=str(data_dir), **env)

    # reload so main.py picks up the env set above
    import private_notes.main
    importlib.reload(private_notes.main)
    app = private_notes.main.app

    from private_notes.api.deps import get_remote_client

    def fake_remote_client(request: Request):
        return platform.client(ServerSessionStorage(app.state.session_store, request.session))

    app.dependency_overrides[get_remote_client] = fake_remote_client
    return TestClient(app)


def login(client, email="alice@example.com", password="alice-pass"):
    r = client.post("/login", data={"email": email, "password": password}, follow_redirects=False)
    assert r.status_code == 303
    return r
