from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Optional

from private_notes.config import Settings
from private_notes.result import Result
from private_notes.session.events import (
    INITIAL_SESSION,
    SIGNED_OUT,
    SessionEvent,
    SessionEvents,
    SessionUser,
)
from private_notes.storage.remote_client import REMOTE_ERRORS, bind_access_token, error_message

logger = logging.getLogger(__name__)


class AuthStatus(str, Enum):
    LOADING = "loading"
    AUTHENTICATED = "authenticated"
    ANONYMOUS = "anonymous"


class AuthContext:
    """
    Who is signed in for the current request.

    Lifecycle is explicit: `start()` restores the persisted session and
    subscribes to the platform's auth notifications, `close()` drops the
    subscription. In between, state changes only through `SessionEvents`.
    """

    def __init__(self, client: Any, settings: Settings):
        self.client = client
        self.settings = settings
        self.events = SessionEvents()
        self._status = AuthStatus.LOADING
        self._user: Optional[SessionUser] = None
        self._subscription: Any = None
        self._stop_listening: Optional[Callable[[], None]] = None
        self._bearer_token: Optional[str] = None

    @classmethod
    def from_access_token(
        cls, client: Any, settings: Settings, access_token: str, claims: dict[str, Any]
    ) -> "AuthContext":
        """Resolved context for a request that carries its own bearer token."""
        ctx = cls(client, settings)
        ctx._bearer_token = access_token
        ctx._stop_listening = ctx.events.subscribe(ctx._apply)
        ctx.events.publish(
            SessionEvent(
                event=INITIAL_SESSION,
                user=SessionUser.from_claims(claims),
                access_token=access_token,
            )
        )
        return ctx

    @property
    def status(self) -> AuthStatus:
        return self._status

    @property
    def loading(self) -> bool:
        return self._status is AuthStatus.LOADING

    @property
    def user(self) -> Optional[SessionUser]:
        return self._user

    def start(self) -> "AuthContext":
        if not self.loading:
            return self
        self._stop_listening = self.events.subscribe(self._apply)
        self._subscription = self.client.auth.on_auth_state_change(self._on_platform_change)

        session = None
        try:
            # reading the session also refreshes an expired access token
            session = self.client.auth.get_session()
        except REMOTE_ERRORS as exc:
            logger.warning("Could not restore session: %s", error_message(exc))
        self.events.publish(SessionEvent.from_platform(INITIAL_SESSION, session))
        return self

    def close(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
        if self._stop_listening is not None:
            self._stop_listening()
            self._stop_listening = None
        self.events.close()

    def __enter__(self) -> "AuthContext":
        return self.start()

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _on_platform_change(self, event: str, session: Any) -> None:
        self.events.publish(SessionEvent.from_platform(event, session))

    def _apply(self, event: SessionEvent) -> None:
        if event.event == SIGNED_OUT or event.user is None:
            if self._user is not None:
                logger.info("Session ended for user %s", self._user.id)
            self._user = None
            self._status = AuthStatus.ANONYMOUS
            return

        if event.access_token:
            bind_access_token(self.client, event.access_token)
        self._user = event.user
        self._status = AuthStatus.AUTHENTICATED

    def _fail(self, action: str, exc: BaseException) -> Result:
        message = error_message(exc)
        logger.error("Error %s: %s", action, message)
        return Result.failure(message)

    def sign_up(self, email: str, password: str) -> Result[SessionUser]:
        """Start the email-confirmation flow. The user is not signed in."""
        credentials = {
            "email": email,
            "password": password,
            "options": {"email_redirect_to": f"{self.settings.site_url}/login"},
        }
        try:
            response = self.client.auth.sign_up(credentials)
        except REMOTE_ERRORS as exc:
            return self._fail("signing up", exc)
        user = getattr(response, "user", None)
        logger.info("Sign-up requested for %s", email)
        return Result.success(SessionUser.from_platform(user) if user is not None else None)

    def sign_in(self, email: str, password: str) -> Result[SessionUser]:
        try:
            response = self.client.auth.sign_in_with_password({"email": email, "password": password})
        except REMOTE_ERRORS as exc:
            return self._fail("signing in", exc)
        user = SessionUser.from_platform(response.user)
        logger.info("User %s signed in", user.id)
        return Result.success(user)

    def sign_in_with_provider(self, provider: Optional[str] = None) -> Result[str]:
        """Returns the provider URL the browser has to be sent to."""
        provider = provider or self.settings.oauth_provider
        try:
            response = self.client.auth.sign_in_with_oauth(
                {"provider": provider, "options": {"redirect_to": self.settings.oauth_callback_url}}
            )
        except REMOTE_ERRORS as exc:
            return self._fail(f"starting {provider} sign-in", exc)
        return Result.success(response.url)

    def exchange_code(self, code: str) -> Result[SessionUser]:
        try:
            response = self.client.auth.exchange_code_for_session({"auth_code": code})
        except REMOTE_ERRORS as exc:
            return self._fail("completing provider sign-in", exc)
        user = SessionUser.from_platform(response.user)
        logger.info("User %s signed in through provider", user.id)
        return Result.success(user)

    def sign_out(self) -> Result[None]:
        if self._bearer_token:
            return self._revoke_bearer()
        try:
            self.client.auth.sign_out()
        except REMOTE_ERRORS as exc:
            return self._fail("signing out", exc)
        return Result.success(None)

    def _revoke_bearer(self) -> Result[None]:
        # nothing is stored for a bearer request, so the token itself is revoked
        try:
            self.client.auth.admin.sign_out(self._bearer_token)
        except REMOTE_ERRORS as exc:
            return self._fail("signing out", exc)
        self._bearer_token = None
        self.events.publish(SessionEvent(event=SIGNED_OUT, user=None, access_token=None))
        return Result.success(None)
