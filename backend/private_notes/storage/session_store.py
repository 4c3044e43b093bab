from __future__ import annotations

import json
import os
import re
import secrets
from pathlib import Path
from typing import Any, MutableMapping, Optional

from supabase_auth import SyncSupportedStorage

SESSION_ID_KEY = "sid"

_SESSION_ID = re.compile(r"^[A-Za-z0-9_-]{20,128}$")


def _atomic_write_json(path: Path, data: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    with tmp_path.open("w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False)
        f.flush()
        os.fsync(f.fileno())
    tmp_path.replace(path)


class SessionStore:
    """Server-side auth storage, one JSON file per browser session id."""

    def __init__(self, base_dir: Path):
        self.base_dir = base_dir

    def _path(self, session_id: str) -> Path:
        # session ids come from our own signed cookie; keep them path-safe anyway
        if not _SESSION_ID.match(session_id):
            raise ValueError("Invalid session id")
        return self.base_dir / "sessions" / f"{session_id}.json"

    def load(self, session_id: str) -> dict[str, str]:
        path = self._path(session_id)
        if not path.exists():
            return {}
        return json.loads(path.read_text(encoding="utf-8"))

    def save(self, session_id: str, items: dict[str, str]) -> None:
        _atomic_write_json(self._path(session_id), items)

    def delete(self, session_id: str) -> None:
        self._path(session_id).unlink(missing_ok=True)


class ServerSessionStorage(SyncSupportedStorage):
    """
    The auth library's storage for one request.

    The signed cookie only carries an opaque session id; the persisted
    session itself (tokens, user record, PKCE verifier) stays on the server.
    """

    def __init__(self, store: SessionStore, cookie_session: MutableMapping[str, Any]):
        self._store = store
        self._cookie = cookie_session

    @property
    def session_id(self) -> Optional[str]:
        return self._cookie.get(SESSION_ID_KEY)

    def get_item(self, key: str) -> Optional[str]:
        if not self.session_id:
            return None
        return self._store.load(self.session_id).get(key)

    def set_item(self, key: str, value: str) -> None:
        if not self.session_id:
            self._cookie[SESSION_ID_KEY] = secrets.token_urlsafe(32)
        items = self._store.load(self.session_id)
        items[key] = value
        self._store.save(self.session_id, items)

    def remove_item(self, key: str) -> None:
        session_id = self.session_id
        if not session_id:
            return
        items = self._store.load(session_id)
        items.pop(key, None)
        if items:
            self._store.save(session_id, items)
        else:
            self._store.delete(session_id)
            self._cookie.pop(SESSION_ID_KEY, None)
