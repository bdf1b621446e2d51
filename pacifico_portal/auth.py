"""Bearer token acquisition for the content API."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import msal

from .config import Settings

CACHE_PATH = Path(os.path.expanduser("~/.cache/pacifico_portal/msal_cache.bin"))


def _load_cache() -> msal.SerializableTokenCache:
    cache = msal.SerializableTokenCache()
    if CACHE_PATH.exists():
        try:
            cache.deserialize(CACHE_PATH.read_text())
        except ValueError as exc:  # pragma: no cover - corruption is rare
            logging.warning("Failed to deserialize cache: %s", exc)
    return cache


def _save_cache(cache: msal.SerializableTokenCache) -> None:
    if not cache.has_state_changed:
        return
    CACHE_PATH.parent.mkdir(parents=True, exist_ok=True)
    CACHE_PATH.write_text(cache.serialize())


def acquire_token(settings: Settings) -> str:
    """Return the token sent as ``Authorization: Bearer`` to the content API.

    A configured ``PACIFICO_API_TOKEN`` wins. Otherwise, when MSAL client
    credentials are configured, a token is requested for ``MSAL_SCOPE``.
    With neither, the empty token is used.
    """

    if settings.API_TOKEN:
        return settings.API_TOKEN
    if not settings.msal_configured:
        return ""

    cache = _load_cache()
    app = msal.ConfidentialClientApplication(
        settings.MSAL_CLIENT_ID,
        authority=settings.MSAL_AUTHORITY,
        client_credential=settings.MSAL_CLIENT_SECRET,
        token_cache=cache,
    )
    scopes = [settings.MSAL_SCOPE] if settings.MSAL_SCOPE else []
    # Client credential tokens are served from the cache when still valid.
    result = app.acquire_token_for_client(scopes=scopes)
    if result and "access_token" in result:
        _save_cache(cache)
        return result["access_token"]

    logging.error(
        "MSAL token request failed: %s",
        (result or {}).get("error_description", "no response"),
    )
    raise RuntimeError("Could not obtain access token (set PACIFICO_API_TOKEN)")
