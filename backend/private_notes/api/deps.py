from __future__ import annotations

import logging
from typing import Iterator, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from supabase import Client

from private_notes.config import Settings
from private_notes.session.context import AuthContext
from private_notes.storage.notes_store import NotesStore
from private_notes.storage.remote_client import create_remote_client
from private_notes.storage.session_store import ServerSessionStorage
from private_notes.utils.jwt_auth import decode_access_token

logger = logging.getLogger(__name__)

bearer = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_remote_client(request: Request) -> Client:
    storage = ServerSessionStorage(request.app.state.session_store, request.session)
    return create_remote_client(get_settings(request), storage)


def get_auth_context(
    request: Request,
    creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
    client: Client = Depends(get_remote_client),
) -> Iterator[AuthContext]:
    """
    - Prefer an `Authorization: Bearer <access token>` header (API clients)
    - Otherwise restore the browser session from the session cookie
    """
    settings = get_settings(request)
    if creds is not None and creds.scheme.lower() == "bearer":
        try:
            claims = decode_access_token(creds.credentials, settings.supabase_jwt_secret)
        except JWTError as exc:
            logger.info("Rejected bearer token: %s", exc)
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token")
        if not claims.get("sub"):
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
        ctx = AuthContext.from_access_token(client, settings, creds.credentials, claims)
    else:
        ctx = AuthContext(client, settings).start()

    try:
        yield ctx
    finally:
        ctx.close()


def require_user(auth: AuthContext = Depends(get_auth_context)) -> AuthContext:
    if auth.user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    return auth


def get_notes_store(
    request: Request, auth: AuthContext = Depends(get_auth_context)
) -> NotesStore:
    return NotesStore(auth.client, auth, table=get_settings(request).notes_table)
