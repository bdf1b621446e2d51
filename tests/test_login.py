import pytest

from pacifico_portal.config import Settings
from pacifico_portal.login import (
    SessionStore,
    StaticCredentialAuthenticator,
    TokenAuthenticator,
    authenticator_from_settings,
)


def test_static_credentials():
    auth = StaticCredentialAuthenticator("parent", "pacifico2024")
    assert auth.authenticate("parent", "pacifico2024").username == "parent"
    assert auth.authenticate("parent", "wrong") is None
    assert auth.authenticate("teacher", "pacifico2024") is None


def test_token_authenticator():
    auth = TokenAuthenticator(["abc", "def"])
    assert auth.authenticate("", "def").username == "token"
    assert auth.authenticate("family", "abc").username == "family"
    assert auth.authenticate("family", "xyz") is None


def test_authenticator_from_settings():
    default = authenticator_from_settings(Settings())
    assert isinstance(default, StaticCredentialAuthenticator)
    assert default.authenticate("parent", "pacifico2024") is not None

    tokens = authenticator_from_settings(Settings(AUTH_MODE="token", PORTAL_TOKENS="a, b"))
    assert isinstance(tokens, TokenAuthenticator)
    assert tokens.authenticate("x", "b") is not None

    with pytest.raises(ValueError):
        authenticator_from_settings(Settings(AUTH_MODE="ldap"))


def test_session_store():
    store = SessionStore()
    sid = store.open({"user": "parent"})
    assert store.get(sid) == {"user": "parent"}
    assert store.get(None) is None
    assert store.get("unknown") is None
    store.close(sid)
    assert store.get(sid) is None
    assert len(store) == 0
