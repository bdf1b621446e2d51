"""Portal sign-in.

The login gate asks an :class:`Authenticator` whether the submitted
credentials are acceptable. Two variants exist:

* :class:`StaticCredentialAuthenticator` compares against one configured
  username/password pair.
* :class:`TokenAuthenticator` accepts any of a set of access tokens, given
  as the password.

Signed-in visitors are tracked by :class:`SessionStore`, which hands out an
opaque session id per successful login.
"""

from __future__ import annotations

import hmac
import secrets
from dataclasses import dataclass
from typing import Dict, Generic, Iterable, Optional, TypeVar

from .config import Settings

INVALID_CREDENTIALS = "Invalid username or password. Please try again."

S = TypeVar("S")


@dataclass(frozen=True)
class Principal:
    username: str


class Authenticator:
    def authenticate(self, username: str, password: str) -> Optional[Principal]:
        raise NotImplementedError


class StaticCredentialAuthenticator(Authenticator):
    def __init__(self, username: str, password: str) -> None:
        self.username = username
        self.password = password

    def authenticate(self, username: str, password: str) -> Optional[Principal]:
        user_ok = hmac.compare_digest(username.encode(), self.username.encode())
        pass_ok = hmac.compare_digest(password.encode(), self.password.encode())
        if user_ok and pass_ok:
            return Principal(username)
        return None


class TokenAuthenticator(Authenticator):
    def __init__(self, tokens: Iterable[str]) -> None:
        self.tokens = frozenset(tokens)

    def authenticate(self, username: str, password: str) -> Optional[Principal]:
        if any(hmac.compare_digest(password.encode(), t.encode()) for t in self.tokens):
            return Principal(username or "token")
        return None


def authenticator_from_settings(settings: Settings) -> Authenticator:
    if settings.AUTH_MODE == "token":
        return TokenAuthenticator(settings.portal_tokens)
    if settings.AUTH_MODE != "static":
        raise ValueError(f"Unknown auth mode: {settings.AUTH_MODE}")
    return StaticCredentialAuthenticator(settings.PORTAL_USERNAME, settings.PORTAL_PASSWORD)


class SessionStore(Generic[S]):
    """In-memory map of session id to per-visitor state."""

    def __init__(self) -> None:
        self._sessions: Dict[str, S] = {}

    def open(self, state: S) -> str:
        session_id = secrets.token_urlsafe(24)
        self._sessions[session_id] = state
        return session_id

    def get(self, session_id: Optional[str]) -> Optional[S]:
        if not session_id:
            return None
        return self._sessions.get(session_id)

    def close(self, session_id: str) -> Optional[S]:
        return self._sessions.pop(session_id, None)

    def __len__(self) -> int:
        return len(self._sessions)
