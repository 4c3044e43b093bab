from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

# emitted locally when a request restores (or fails to restore) its session
INITIAL_SESSION = "INITIAL_SESSION"
SIGNED_OUT = "SIGNED_OUT"


@dataclass(frozen=True)
class SessionUser:
    id: str
    email: Optional[str] = None

    @classmethod
    def from_platform(cls, user: Any) -> "SessionUser":
        return cls(id=str(user.id), email=getattr(user, "email", None))

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> "SessionUser":
        return cls(id=str(claims["sub"]), email=claims.get("email"))

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "email": self.email}


@dataclass(frozen=True)
class SessionEvent:
    event: str
    user: Optional[SessionUser] = None
    access_token: Optional[str] = None

    @classmethod
    def from_platform(cls, event: str, session: Any) -> "SessionEvent":
        if session is None or getattr(session, "user", None) is None:
            return cls(event=str(event))
        return cls(
            event=str(event),
            user=SessionUser.from_platform(session.user),
            access_token=session.access_token,
        )


Listener = Callable[[SessionEvent], None]


class SessionEvents:
    """In-process channel carrying session changes to whoever listens."""

    def __init__(self) -> None:
        self._listeners: list[Listener] = []
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        if self._closed:
            raise RuntimeError("Session event channel is closed")
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def publish(self, event: SessionEvent) -> None:
        if self._closed:
            return
        for listener in list(self._listeners):
            listener(event)

    def close(self) -> None:
        self._listeners.clear()
        self._closed = True
