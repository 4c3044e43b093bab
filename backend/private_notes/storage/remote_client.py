from __future__ import annotations

from typing import Optional

import httpx
from postgrest.exceptions import APIError
from supabase import Client, ClientOptions, create_client
from supabase_auth import SyncSupportedStorage
from supabase_auth.errors import AuthError

from private_notes.config import Settings

# Everything the SDK raises for a failed round trip: PostgREST errors
# (including RLS denials), auth errors and transport failures.
REMOTE_ERRORS = (APIError, AuthError, httpx.HTTPError)

# PostgREST: "JSON object requested, multiple (or no) rows returned"
SINGLE_ROW_MISMATCH = "PGRST116"


def error_message(exc: BaseException) -> str:
    message = getattr(exc, "message", None)
    if message:
        return str(message)
    return str(exc) or exc.__class__.__name__


def error_code(exc: BaseException) -> Optional[str]:
    code = getattr(exc, "code", None)
    return str(code) if code is not None else None


def create_remote_client(settings: Settings, storage: SyncSupportedStorage) -> Client:
    # One client per request. Expired access tokens are refreshed when the
    # session is read, so no background refresh timer is started.
    options = ClientOptions(
        persist_session=True,
        auto_refresh_token=False,
        storage=storage,
        flow_type="pkce",
    )
    return create_client(settings.supabase_url, settings.supabase_anon_key, options=options)


def bind_access_token(client: Client, access_token: str) -> None:
    """Send the user's token with table queries so row-level security applies."""
    client.postgrest.auth(access_token)
