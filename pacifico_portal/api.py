"""API client for the school content API."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable, Optional

import requests

DEFAULT_BASE_URL = "http://localhost:8000/api"
SNAPSHOT_DIR = Path("out/json")


class ContentAPIError(RuntimeError):
    """The content API could not be reached or answered with a failure."""

    def __init__(self, endpoint: str, message: str, status: Optional[int] = None) -> None:
        super().__init__(f"{endpoint}: {message}")
        self.endpoint = endpoint
        self.status = status


class ContentAPIClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        token: str = "",
        *,
        timeout: float = 30.0,
        token_provider: Optional[Callable[[], str]] = None,
        dump_json: bool = False,
        offline: bool = False,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.token_provider = token_provider
        self.dump_json = dump_json
        self.offline = offline
        self.session = session or requests.Session()
        self.json_dir = SNAPSHOT_DIR

    def _json_path(self, endpoint: str, params: Optional[dict] = None) -> Path:
        name = endpoint.strip("/").replace("/", "_")
        if params:
            name += "_" + "_".join(f"{k}-{v}" for k, v in sorted(params.items()))
        return self.json_dir / (name + ".json")

    def request(
        self,
        method: str,
        endpoint: str,
        params: Optional[dict] = None,
    ) -> Any:
        if self.offline:
            path = self._json_path(endpoint, params)
            try:
                with path.open("r", encoding="utf-8") as f:
                    return json.load(f)
            except (OSError, ValueError) as exc:
                raise ContentAPIError(endpoint, f"no usable snapshot at {path}") from exc

        url = self.base_url + endpoint
        refreshed = False
        while True:
            headers = {
                "Content-Type": "application/json",
                "Authorization": f"Bearer {self.token}",
            }
            try:
                resp = self.session.request(
                    method, url, params=params, headers=headers, timeout=self.timeout
                )
            except requests.RequestException as exc:
                logging.warning("Request error: %s", exc)
                raise ContentAPIError(endpoint, str(exc)) from exc

            if resp.status_code == 401 and self.token_provider and not refreshed:
                logging.info("Token rejected, refreshing")
                try:
                    self.token = self.token_provider()
                except (RuntimeError, ValueError, requests.RequestException) as exc:
                    logging.warning("Token refresh failed: %s", exc)
                    raise ContentAPIError(
                        endpoint, f"token refresh failed: {exc}", status=401
                    ) from exc
                refreshed = True
                continue
            if not resp.ok:
                raise ContentAPIError(
                    endpoint, f"HTTP {resp.status_code}", status=resp.status_code
                )
            try:
                data = resp.json()
            except ValueError as exc:
                raise ContentAPIError(endpoint, "response is not JSON") from exc
            break

        if self.dump_json:
            self.json_dir.mkdir(parents=True, exist_ok=True)
            with self._json_path(endpoint, params).open("w", encoding="utf-8") as f:
                json.dump(data, f)
        return data

    def get(self, endpoint: str, params: Optional[dict] = None) -> Any:
        return self.request("GET", endpoint, params)

    def post(self, endpoint: str) -> Any:
        return self.request("POST", endpoint)

    # Gallery
    def get_albums(self) -> Any:
        return self.get("/gallery/albums")

    def get_album_photos(self, album_id: str) -> Any:
        return self.get(f"/gallery/albums/{album_id}/photos")

    # Calendar
    def get_events(self, year: Any, month: Any) -> Any:
        return self.get("/calendar/events", {"year": year, "month": month})

    # Downloads
    def get_download_categories(self) -> Any:
        return self.get("/downloads/categories")

    def get_download_files(self) -> Any:
        return self.get("/downloads/files")

    def track_download(self, file_id: str) -> Any:
        return self.post(f"/downloads/files/{file_id}/download")
