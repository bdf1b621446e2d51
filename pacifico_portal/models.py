"""Data models for portal content."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import date
from typing import Any, List, Optional, Type, TypeVar

from . import util

EVENT_TYPES = ("academic", "festival", "meeting", "holiday", "other")
FILE_TYPES = ("pdf", "image", "video", "audio", "document", "archive", "other")
FILE_CATEGORIES = (
    "handbook",
    "forms",
    "newsletters",
    "photos",
    "videos",
    "resources",
    "other",
)
RELATIONSHIPS = ("spouse", "parent", "sibling", "friend", "other")

T = TypeVar("T")


@dataclass
class CalendarEvent:
    id: str
    title: str
    date: str  # ISO date string
    startTime: str
    type: str = "other"
    description: Optional[str] = None
    endTime: Optional[str] = None
    location: Optional[str] = None
    attendees: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not isinstance(self.date, str):
            raise TypeError(f"event {self.id!r} has no date")
        # Raises ValueError for anything that is not an ISO date.
        util.parse_date(self.date)
        if self.type not in EVENT_TYPES:
            self.type = "other"


@dataclass
class CalendarDay:
    date: date
    events: List[CalendarEvent] = field(default_factory=list)
    isCurrentMonth: bool = False
    isToday: bool = False


@dataclass
class DownloadFile:
    id: str
    name: str
    type: str
    size: str
    uploadDate: str
    category: str
    url: str
    description: Optional[str] = None
    previewUrl: Optional[str] = None
    downloadCount: Optional[int] = None

    def __post_init__(self) -> None:
        if self.type not in FILE_TYPES:
            self.type = "other"
        if self.category not in FILE_CATEGORIES:
            self.category = "other"


@dataclass
class FileCategory:
    id: str
    name: str
    description: str = ""
    fileCount: int = 0


@dataclass
class Photo:
    id: str
    url: str
    thumbnail: str
    title: str
    date: str
    event: str
    description: Optional[str] = None


@dataclass
class PhotoAlbum:
    id: str
    title: str
    date: str  # display string, e.g. "March 15, 2024"
    coverPhoto: str
    photoCount: int
    photos: List[Photo] = field(default_factory=list)


@dataclass
class Profile:
    firstName: str = ""
    lastName: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    city: str = ""
    emergencyContact: str = ""
    emergencyPhone: str = ""
    relationship: str = ""
    notes: str = ""


def from_record(cls: Type[T], record: dict) -> T:
    """Build ``cls`` from an API record, ignoring keys it does not declare."""

    names = {f.name for f in dataclasses.fields(cls)}
    return cls(**{k: v for k, v in record.items() if k in names})


def from_records(cls: Type[T], records: Any) -> List[T]:
    if not isinstance(records, list):
        raise TypeError(f"expected a list of records, got {type(records).__name__}")
    return [from_record(cls, r) for r in records]


def album_from_record(record: dict) -> PhotoAlbum:
    album = from_record(PhotoAlbum, record)
    album.photos = [
        p if isinstance(p, Photo) else from_record(Photo, p) for p in album.photos
    ]
    return album


def to_record(obj: Any) -> Any:
    if isinstance(obj, list):
        return [to_record(o) for o in obj]
    record = dataclasses.asdict(obj)
    if isinstance(obj, CalendarDay):
        record["date"] = obj.date.isoformat()
    return record
