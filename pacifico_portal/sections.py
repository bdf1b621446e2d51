"""Fetch state for each dashboard section.

Every section (albums, events, files, categories) moves through
``idle -> loading -> success | failed``. A load issues exactly one request.
When it fails, the section keeps showing something according to its
:class:`FallbackPolicy`, and records ``degraded`` plus the ``source`` of
what is shown (live, sample, cached or empty).

Loads are keyed by their request parameters. Each call to
:meth:`Section.begin` hands out a new ticket; results delivered for an older
ticket are dropped, so a slow response for a previous month cannot replace
the month currently on screen.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Executor, Future
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Generic, Hashable, List, Optional, TypeVar

from . import fallback, models
from .api import ContentAPIClient, ContentAPIError

T = TypeVar("T")

ALBUMS_ERROR = "Unable to load photo albums. Please try again later."
EVENTS_ERROR = "Unable to load calendar events. Please try again later."
FILES_ERROR = "Unable to load download files. Please try again later."

# Raised while turning a response body into records.
FETCH_ERRORS = (ContentAPIError, ValueError, TypeError, KeyError)


class Status(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    FAILED = "failed"


class FallbackPolicy(str, Enum):
    SAMPLE = "sample"
    LAST_GOOD = "last_good"
    EMPTY = "empty"


@dataclass
class SectionState(Generic[T]):
    status: Status = Status.IDLE
    data: List[T] = field(default_factory=list)
    error: Optional[str] = None
    degraded: bool = False
    source: str = "none"  # live | sample | cached | empty | none
    key: Any = None

    def as_dict(self) -> dict:
        return {
            "status": self.status.value,
            "error": self.error,
            "degraded": self.degraded,
            "source": self.source,
        }


@dataclass(frozen=True)
class Ticket:
    generation: int
    key: Hashable


class Section(Generic[T]):
    def __init__(
        self,
        name: str,
        fetch: Callable[[Hashable], List[T]],
        sample: Callable[[], List[T]],
        *,
        error_message: Optional[str] = None,
        policy: FallbackPolicy = FallbackPolicy.SAMPLE,
    ) -> None:
        self.name = name
        self.fetch = fetch
        self.sample = sample
        self.error_message = error_message
        self.policy = FallbackPolicy(policy)
        self.state: SectionState[T] = SectionState()
        self._lock = threading.Lock()
        self._generation = 0
        self._future: Optional[Future] = None
        self._last_good: Optional[List[T]] = None

    def begin(self, key: Hashable = None) -> Ticket:
        with self._lock:
            self._generation += 1
            self.state = replace(self.state, status=Status.LOADING, key=key)
            return Ticket(self._generation, key)

    def is_current(self, ticket: Ticket) -> bool:
        return ticket.generation == self._generation

    def complete(self, ticket: Ticket, data: List[T]) -> bool:
        with self._lock:
            if not self.is_current(ticket):
                logging.debug("%s: dropping superseded result for %r", self.name, ticket.key)
                return False
            self._last_good = list(data)
            self.state = SectionState(
                status=Status.SUCCESS,
                data=list(data),
                source="live",
                key=ticket.key,
            )
            return True

    def fail(self, ticket: Ticket, exc: BaseException) -> bool:
        with self._lock:
            if not self.is_current(ticket):
                logging.debug("%s: dropping superseded failure for %r", self.name, ticket.key)
                return False
            logging.warning("%s: load failed (%s), using %s data", self.name, exc, self.policy.value)
            data, source = self._fallback_data()
            self.state = SectionState(
                status=Status.FAILED,
                data=data,
                error=self.error_message,
                degraded=True,
                source=source,
                key=ticket.key,
            )
            return True

    def _fallback_data(self) -> tuple:
        if self.policy is FallbackPolicy.EMPTY:
            return [], "empty"
        if self.policy is FallbackPolicy.LAST_GOOD and self._last_good is not None:
            return list(self._last_good), "cached"
        return self.sample(), "sample"

    def run(self, ticket: Ticket) -> SectionState[T]:
        try:
            data = self.fetch(ticket.key)
        except FETCH_ERRORS as exc:
            self.fail(ticket, exc)
        else:
            self.complete(ticket, data)
        return self.state

    def load(self, key: Hashable = None) -> SectionState[T]:
        return self.run(self.begin(key))

    def submit(self, executor: Executor, key: Hashable = None) -> Future:
        """Load in the background, cancelling a superseded pending load."""

        ticket = self.begin(key)
        previous, self._future = self._future, executor.submit(self.run, ticket)
        if previous is not None:
            previous.cancel()
        return self._future

    def retry(self) -> SectionState[T]:
        return self.load(self.state.key)


def _records(payload: Any, name: str) -> list:
    if not isinstance(payload, dict):
        raise TypeError(f"expected an object with {name!r}, got {type(payload).__name__}")
    return payload.get(name) or []


def album_section(client: ContentAPIClient, policy=FallbackPolicy.SAMPLE) -> Section:
    def fetch(_key):
        return [models.album_from_record(r) for r in _records(client.get_albums(), "albums")]

    return Section(
        "albums", fetch, fallback.sample_albums, error_message=ALBUMS_ERROR, policy=policy
    )


def event_section(client: ContentAPIClient, policy=FallbackPolicy.SAMPLE) -> Section:
    """Events for a ``(year, month)`` key."""

    def fetch(key):
        year, month = key
        payload = client.get_events(year, month)
        return models.from_records(models.CalendarEvent, _records(payload, "events"))

    return Section(
        "events", fetch, fallback.sample_events, error_message=EVENTS_ERROR, policy=policy
    )


def file_section(client: ContentAPIClient, policy=FallbackPolicy.SAMPLE) -> Section:
    def fetch(_key):
        payload = client.get_download_files()
        return models.from_records(models.DownloadFile, _records(payload, "files"))

    return Section(
        "files", fetch, fallback.sample_files, error_message=FILES_ERROR, policy=policy
    )


def category_section(client: ContentAPIClient, policy=FallbackPolicy.SAMPLE) -> Section:
    # Category failures are not reported to the visitor.
    def fetch(_key):
        payload = client.get_download_categories()
        return models.from_records(models.FileCategory, _records(payload, "categories"))

    return Section("categories", fetch, fallback.sample_categories, policy=policy)


def load_album_photos(client: ContentAPIClient, album: models.PhotoAlbum) -> models.PhotoAlbum:
    """Fill ``album.photos`` on first open; later opens reuse them."""

    if album.photos:
        return album
    try:
        payload = client.get_album_photos(album.id)
        album.photos = models.from_records(models.Photo, _records(payload, "photos"))
    except FETCH_ERRORS as exc:
        logging.error("Error fetching album photos: %s", exc)
        album.photos = fallback.sample_album_photos(album.id)
    return album


def track_download(client: ContentAPIClient, file: models.DownloadFile) -> str:
    """Record a download and return the URL to open, even if tracking fails."""

    try:
        client.track_download(file.id)
    except ContentAPIError as exc:
        logging.error("Download error: %s", exc)
    return file.url
