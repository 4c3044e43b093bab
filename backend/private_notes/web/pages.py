from __future__ import annotations

from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from private_notes.api.deps import get_auth_context, get_notes_store
from private_notes.session.context import AuthContext
from private_notes.storage.notes_store import NotesStore
from private_notes.views.dashboard import DashboardView
from private_notes.views.login import LoginView
from private_notes.views.note_view import NoteView
from private_notes.views.signup import SignupView
from private_notes.web.components import register_filters

TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
register_filters(templates.env)

LOGIN_URL = "/login"
DASHBOARD_URL = "/dashboard"

router = APIRouter(tags=["pages"])


def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url, status_code=303)


def _render(request: Request, name: str, auth: AuthContext, **context) -> HTMLResponse:
    return templates.TemplateResponse(request, name, {"user": auth.user, **context})


@router.get("/", include_in_schema=False)
def index(auth: AuthContext = Depends(get_auth_context)) -> Response:
    return _redirect(DASHBOARD_URL if auth.user else LOGIN_URL)


# --- auth pages ---

@router.get("/login", response_class=HTMLResponse)
def login_page(request: Request, auth: AuthContext = Depends(get_auth_context)) -> Response:
    view = LoginView(auth)
    if view.redirect_to:
        return _redirect(view.redirect_to)
    return _render(request, "login.html", auth, view=view)


@router.post("/login", response_class=HTMLResponse)
def login_submit(
    request: Request,
    email: str = Form(""),
    password: str = Form(""),
    auth: AuthContext = Depends(get_auth_context),
) -> Response:
    view = LoginView(auth)
    if view.submit(email, password) and view.redirect_to:
        return _redirect(view.redirect_to)
    return _render(request, "login.html", auth, view=view)


@router.post("/login/provider")
def login_provider(
    request: Request,
    provider: Optional[str] = Form(None),
    auth: AuthContext = Depends(get_auth_context),
) -> Response:
    view = LoginView(auth)
    url = view.provider_url(provider)
    if url:
        return _redirect(url)
    return _render(request, "login.html", auth, view=view)


@router.get("/auth/callback")
def auth_callback(code: Optional[str] = None, auth: AuthContext = Depends(get_auth_context)) -> Response:
    if code and auth.exchange_code(code).ok:
        return _redirect(DASHBOARD_URL)
    return _redirect(LOGIN_URL)


@router.get("/signup", response_class=HTMLResponse)
def signup_page(request: Request, auth: AuthContext = Depends(get_auth_context)) -> Response:
    view = SignupView(auth)
    if view.redirect_to:
        return _redirect(view.redirect_to)
    return _render(request, "signup.html", auth, view=view)


@router.post("/signup", response_class=HTMLResponse)
def signup_submit(
    request: Request,
    email: str = Form(""),
    password: str = Form(""),
    confirm_password: str = Form(""),
    auth: AuthContext = Depends(get_auth_context),
) -> Response:
    view = SignupView(auth)
    view.submit(email, password, confirm_password)
    return _render(request, "signup.html", auth, view=view)


@router.post("/logout")
def logout(auth: AuthContext = Depends(get_auth_context)) -> Response:
    auth.sign_out()
    return _redirect(LOGIN_URL)


# --- notes pages (signed-in only; anonymous visitors are sent to the login page) ---

@router.get("/dashboard", response_class=HTMLResponse)
def dashboard(
    request: Request,
    auth: AuthContext = Depends(get_auth_context),
    store: NotesStore = Depends(get_notes_store),
) -> Response:
    if auth.user is None:
        return _redirect(LOGIN_URL)
    view = DashboardView(store).load()
    if request.query_params.get("new"):
        view.open_form()
    return _render(request, "dashboard.html", auth, view=view)


@router.post("/dashboard/notes", response_class=HTMLResponse)
def dashboard_create(
    request: Request,
    title: str = Form(""),
    content: str = Form(""),
    auth: AuthContext = Depends(get_auth_context),
    store: NotesStore = Depends(get_notes_store),
) -> Response:
    if auth.user is None:
        return _redirect(LOGIN_URL)
    view = DashboardView(store).load()
    view.open_form()
    if view.create(title, content) is not None:
        return _redirect(DASHBOARD_URL)
    return _render(request, "dashboard.html", auth, view=view)


@router.post("/dashboard/notes/{note_id}/delete", response_class=HTMLResponse)
def dashboard_delete(
    request: Request,
    note_id: str,
    auth: AuthContext = Depends(get_auth_context),
    store: NotesStore = Depends(get_notes_store),
) -> Response:
    if auth.user is None:
        return _redirect(LOGIN_URL)
    view = DashboardView(store)
    if view.delete(note_id):
        return _redirect(DASHBOARD_URL)
    return _render(request, "dashboard.html", auth, view=view)


@router.get("/note/{note_id}", response_class=HTMLResponse)
def note_page(
    request: Request,
    note_id: str,
    edit: bool = False,
    auth: AuthContext = Depends(get_auth_context),
    store: NotesStore = Depends(get_notes_store),
) -> Response:
    if auth.user is None:
        return _redirect(LOGIN_URL)
    view = NoteView(store, note_id).load()
    if view.redirect_to:
        return _redirect(view.redirect_to)
    if edit:
        view.begin_edit()
    return _render(request, "note.html", auth, view=view)


@router.post("/note/{note_id}", response_class=HTMLResponse)
def note_save(
    request: Request,
    note_id: str,
    title: str = Form(""),
    content: str = Form(""),
    auth: AuthContext = Depends(get_auth_context),
    store: NotesStore = Depends(get_notes_store),
) -> Response:
    if auth.user is None:
        return _redirect(LOGIN_URL)
    view = NoteView(store, note_id).load()
    if view.redirect_to:
        return _redirect(view.redirect_to)
    view.begin_edit()
    if view.save(title, content):
        return _redirect(f"/note/{note_id}")
    return _render(request, "note.html", auth, view=view)


@router.post("/note/{note_id}/delete", response_class=HTMLResponse)
def note_delete(
    request: Request,
    note_id: str,
    auth: AuthContext = Depends(get_auth_context),
    store: NotesStore = Depends(get_notes_store),
) -> Response:
    if auth.user is None:
        return _redirect(LOGIN_URL)
    view = NoteView(store, note_id).load()
    if view.redirect_to:
        return _redirect(view.redirect_to)
    if view.delete():
        return _redirect(view.redirect_to)
    return _render(request, "note.html", auth, view=view)
