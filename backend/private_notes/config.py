from __future__ import annotations

import os
import secrets
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

# repository_root/data (we are in backend/private_notes/)
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[2] / "data"


def _required(name: str) -> str:
    value = os.getenv(name, "").strip()
    if not value:
        raise RuntimeError(
            f"{name} is not set. Check your environment or .env file."
        )
    return value


@dataclass(frozen=True)
class Settings:
    supabase_url: str
    supabase_anon_key: str
    supabase_jwt_secret: Optional[str]
    session_secret: str
    data_dir: Path
    site_url: str
    oauth_provider: str
    notes_table: str
    log_level: str

    @property
    def oauth_callback_url(self) -> str:
        return f"{self.site_url}/auth/callback"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            supabase_url=_required("SUPABASE_URL"),
            supabase_anon_key=_required("SUPABASE_ANON_KEY"),
            supabase_jwt_secret=os.getenv("SUPABASE_JWT_SECRET") or None,
            # sessions do not survive a restart without an explicit secret
            session_secret=os.getenv("SESSION_SECRET") or secrets.token_urlsafe(32),
            data_dir=Path(os.getenv("APP_DATA_DIR", str(DEFAULT_DATA_DIR))),
            site_url=os.getenv("SITE_URL", "http://localhost:8000").rstrip("/"),
            oauth_provider=os.getenv("OAUTH_PROVIDER", "github"),
            notes_table=os.getenv("NOTES_TABLE", "notes"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
