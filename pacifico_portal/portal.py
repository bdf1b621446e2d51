"""Dashboard view state for one signed-in visitor."""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional

from . import calendar_grid, downloads, models, sections, util
from .api import ContentAPIClient
from .sections import FallbackPolicy, Section

SECTIONS = ("gallery", "calendar", "downloads", "profile")
TABS = ("gallery", "calendar", "downloads")
VIEW_MODES = ("month", "list")


class UnknownSection(ValueError):
    pass


@dataclass
class NavigationState:
    active_section: str = "gallery"
    profile_menu_open: bool = False


def select_section(nav: NavigationState, name: str) -> NavigationState:
    if name not in SECTIONS:
        raise UnknownSection(name)
    return NavigationState(active_section=name, profile_menu_open=False)


def toggle_profile_menu(nav: NavigationState) -> NavigationState:
    return dataclasses.replace(nav, profile_menu_open=not nav.profile_menu_open)


def update_profile(profile: models.Profile, changes: Dict[str, str]) -> models.Profile:
    names = {f.name for f in dataclasses.fields(models.Profile)}
    unknown = set(changes) - names
    if unknown:
        raise ValueError(f"Unknown profile fields: {', '.join(sorted(unknown))}")
    relationship = changes.get("relationship", profile.relationship)
    if relationship and relationship not in models.RELATIONSHIPS:
        raise ValueError(f"Unknown relationship: {relationship}")
    return dataclasses.replace(profile, **changes)


class GalleryView:
    def __init__(self, client: ContentAPIClient, policy: FallbackPolicy) -> None:
        self.client = client
        self.albums: Section[models.PhotoAlbum] = sections.album_section(client, policy)

    def load(self) -> None:
        self.albums.load()

    def retry(self) -> None:
        self.albums.retry()

    def open_album(self, album_id: str) -> Optional[models.PhotoAlbum]:
        for album in self.albums.state.data:
            if album.id == album_id:
                return sections.load_album_photos(self.client, album)
        return None

    def as_dict(self) -> dict:
        return {
            **self.albums.state.as_dict(),
            "albums": models.to_record(self.albums.state.data),
        }


class CalendarView:
    def __init__(self, client: ContentAPIClient, policy: FallbackPolicy) -> None:
        self.events: Section[models.CalendarEvent] = sections.event_section(client, policy)
        self.current = util.today().replace(day=1)
        self.view_mode = "month"

    def show(self, month: date) -> None:
        """Navigate to ``month`` and load its events."""

        self.current = month.replace(day=1)
        self.events.load((self.current.year, self.current.month))

    def retry(self) -> None:
        self.events.retry()

    def navigate(self, step: int) -> None:
        self.show(calendar_grid.shift_month(self.current, step))

    def set_view_mode(self, mode: str) -> None:
        if mode not in VIEW_MODES:
            raise ValueError(f"Unknown view mode: {mode}")
        self.view_mode = mode

    def as_dict(self, today: Optional[date] = None) -> dict:
        today = today or util.today()
        events = self.events.state.data
        body = {
            **self.events.state.as_dict(),
            "month": self.current.strftime("%Y-%m"),
            "label": calendar_grid.month_label(self.current),
            "view": self.view_mode,
            "upcoming": models.to_record(calendar_grid.upcoming(events, today)),
        }
        if self.view_mode == "month":
            body["weekdays"] = list(calendar_grid.WEEKDAY_HEADERS)
            body["days"] = models.to_record(
                calendar_grid.build_month_grid(self.current, events, today=today)
            )
        else:
            body["events"] = models.to_record(calendar_grid.events_in_date_order(events))
        return body


class DownloadsView:
    def __init__(self, client: ContentAPIClient, policy: FallbackPolicy) -> None:
        self.client = client
        self.files: Section[models.DownloadFile] = sections.file_section(client, policy)
        self.categories: Section[models.FileCategory] = sections.category_section(
            client, policy
        )
        self.search_term = ""
        self.category_id = downloads.ALL
        self.type_id = downloads.ALL

    def load(self) -> None:
        # Independent requests; neither waits on the other.
        self.files.load()
        self.categories.load()

    def retry(self) -> None:
        self.files.retry()
        self.categories.retry()

    def set_filters(
        self,
        search_term: Optional[str] = None,
        category_id: Optional[str] = None,
        type_id: Optional[str] = None,
    ) -> None:
        if search_term is not None:
            self.search_term = search_term
        if category_id is not None:
            self.category_id = category_id
        if type_id is not None:
            self.type_id = type_id

    def toggle_category(self, category_id: str) -> None:
        self.category_id = downloads.ALL if category_id == self.category_id else category_id

    @property
    def filtered(self) -> List[models.DownloadFile]:
        return downloads.filter_files(
            self.files.state.data, self.search_term, self.category_id, self.type_id
        )

    def download(self, file_id: str) -> Optional[str]:
        file = downloads.find_file(self.files.state.data, file_id)
        if file is None:
            return None
        return sections.track_download(self.client, file)

    def as_dict(self) -> dict:
        return {
            **self.files.state.as_dict(),
            "filters": {
                "search": self.search_term,
                "category": self.category_id,
                "type": self.type_id,
            },
            "files": models.to_record(self.filtered),
            "categories": models.to_record(self.categories.state.data),
            "categoriesState": self.categories.state.as_dict(),
        }


@dataclass
class PortalSession:
    """Everything one visitor sees; section data lives only while shown."""

    username: str
    client: ContentAPIClient
    policy: FallbackPolicy = FallbackPolicy.SAMPLE
    nav: NavigationState = field(default_factory=NavigationState)
    profile: models.Profile = field(default_factory=models.Profile)
    gallery: Optional[GalleryView] = None
    calendar: Optional[CalendarView] = None
    downloads: Optional[DownloadsView] = None

    def select(self, name: str) -> None:
        self.nav = select_section(self.nav, name)
        for tab in TABS:
            if tab != name:
                setattr(self, tab, None)

    def toggle_profile_menu(self) -> None:
        self.nav = toggle_profile_menu(self.nav)

    def gallery_view(self) -> GalleryView:
        self.select("gallery")
        if self.gallery is None:
            self.gallery = GalleryView(self.client, self.policy)
            self.gallery.load()
        return self.gallery

    def calendar_view(self, month: Optional[date] = None) -> CalendarView:
        self.select("calendar")
        if self.calendar is None:
            self.calendar = CalendarView(self.client, self.policy)
            self.calendar.show(month or self.calendar.current)
        elif month is not None and month.replace(day=1) != self.calendar.current:
            self.calendar.show(month)
        return self.calendar

    def downloads_view(self) -> DownloadsView:
        self.select("downloads")
        if self.downloads is None:
            self.downloads = DownloadsView(self.client, self.policy)
            self.downloads.load()
        return self.downloads

    def save_profile(self, changes: Dict[str, str]) -> models.Profile:
        self.profile = update_profile(self.profile, changes)
        logging.info("Saving profile for %s", self.username)
        return self.profile

    def as_dict(self) -> dict:
        return {
            "username": self.username,
            "activeSection": self.nav.active_section,
            "profileMenuOpen": self.nav.profile_menu_open,
            "tabs": list(TABS),
        }
