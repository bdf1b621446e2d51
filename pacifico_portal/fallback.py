"""Sample content shown when the content API is unavailable."""

from __future__ import annotations

import copy
from typing import List

from .models import CalendarEvent, DownloadFile, FileCategory, Photo, PhotoAlbum

_EVENTS = [
    CalendarEvent(
        id="1",
        title="Parent-Teacher Conferences",
        description="Individual meetings with teachers to discuss student progress",
        date="2024-12-20",
        startTime="9:00 AM",
        endTime="5:00 PM",
        location="Main Building",
        type="meeting",
        attendees=["Parents", "Teachers"],
    ),
    CalendarEvent(
        id="2",
        title="Winter Festival",
        description="Annual winter celebration with performances and crafts",
        date="2024-12-22",
        startTime="6:00 PM",
        endTime="8:00 PM",
        location="School Auditorium",
        type="festival",
        attendees=["All Families"],
    ),
    CalendarEvent(
        id="3",
        title="Winter Break",
        description="School closed for winter holidays",
        date="2024-12-23",
        startTime="All Day",
        type="holiday",
    ),
    CalendarEvent(
        id="4",
        title="New Year's Day",
        description="School closed for New Year's Day",
        date="2025-01-01",
        startTime="All Day",
        type="holiday",
    ),
    CalendarEvent(
        id="5",
        title="Classes Resume",
        description="First day back from winter break",
        date="2025-01-06",
        startTime="8:00 AM",
        location="All Classrooms",
        type="academic",
    ),
    CalendarEvent(
        id="6",
        title="Grade 8 Graduation Planning",
        description="Meeting to plan eighth grade graduation ceremony",
        date="2025-01-15",
        startTime="7:00 PM",
        endTime="8:30 PM",
        location="Conference Room",
        type="meeting",
        attendees=["Grade 8 Parents", "Teachers"],
    ),
]

_CATEGORIES = [
    FileCategory("handbook", "Handbooks", "School handbooks and policies", 5),
    FileCategory("forms", "Forms", "Permission slips and forms", 8),
    FileCategory("newsletters", "Newsletters", "Monthly newsletters", 12),
    FileCategory("photos", "Photos", "Event photos", 25),
    FileCategory("videos", "Videos", "School videos", 6),
    FileCategory("resources", "Resources", "Educational resources", 15),
]

_FILES = [
    DownloadFile(
        id="1",
        name="Parent Handbook 2024-2025",
        description="Complete guide for parents including policies, procedures, and important information",
        type="pdf",
        size="2.4 MB",
        uploadDate="2024-08-15",
        category="handbook",
        url="/placeholder.pdf",
        downloadCount=156,
    ),
    DownloadFile(
        id="2",
        name="Field Trip Permission Form",
        description="Required form for all field trip participation",
        type="pdf",
        size="245 KB",
        uploadDate="2024-09-01",
        category="forms",
        url="/placeholder.pdf",
        downloadCount=89,
    ),
    DownloadFile(
        id="3",
        name="October Newsletter",
        description="Monthly newsletter with updates and upcoming events",
        type="pdf",
        size="1.8 MB",
        uploadDate="2024-10-01",
        category="newsletters",
        url="/placeholder.pdf",
        downloadCount=234,
    ),
    DownloadFile(
        id="4",
        name="Spring Festival Photos",
        description="Collection of photos from the 2024 Spring Festival celebration",
        type="archive",
        size="45.2 MB",
        uploadDate="2024-03-20",
        category="photos",
        url="/placeholder.zip",
        downloadCount=67,
    ),
    DownloadFile(
        id="5",
        name="Grade 5 Play Recording",
        description="Video recording of the Grade 5 class play performance",
        type="video",
        size="125 MB",
        uploadDate="2024-05-15",
        category="videos",
        url="/placeholder.mp4",
        previewUrl="/placeholder.mp4",
        downloadCount=45,
    ),
    DownloadFile(
        id="6",
        name="Waldorf Education Guide",
        description="Introduction to Waldorf education philosophy and methods",
        type="pdf",
        size="3.1 MB",
        uploadDate="2024-07-10",
        category="resources",
        url="/placeholder.pdf",
        downloadCount=123,
    ),
    DownloadFile(
        id="7",
        name="Emergency Contact Form",
        description="Updated emergency contact information form",
        type="document",
        size="156 KB",
        uploadDate="2024-08-25",
        category="forms",
        url="/placeholder.docx",
        downloadCount=78,
    ),
    DownloadFile(
        id="8",
        name="School Calendar 2024-2025",
        description="Complete academic year calendar with all important dates",
        type="pdf",
        size="892 KB",
        uploadDate="2024-08-01",
        category="handbook",
        url="/placeholder.pdf",
        downloadCount=201,
    ),
]

_ALBUMS = [
    PhotoAlbum(
        id="1",
        title="Spring Festival 2024",
        date="March 15, 2024",
        coverPhoto="/children-spring-festival-waldorf-school.jpg",
        photoCount=24,
        photos=[
            Photo(
                id="1-1",
                url="/waldorf-school-spring-festival-children-dancing.jpg",
                thumbnail="/waldorf-school-spring-festival-children-dancing.jpg",
                title="Spring Dance Performance",
                date="March 15, 2024",
                event="Spring Festival",
                description="Children performing traditional spring dances",
            ),
            Photo(
                id="1-2",
                url="/waldorf-school-spring-festival-maypole.jpg",
                thumbnail="/waldorf-school-spring-festival-maypole.jpg",
                title="Maypole Celebration",
                date="March 15, 2024",
                event="Spring Festival",
                description="Traditional maypole dancing celebration",
            ),
        ],
    ),
    PhotoAlbum(
        id="2",
        title="Harvest Celebration",
        date="October 8, 2024",
        coverPhoto="/waldorf-school-harvest-festival-autumn.jpg",
        photoCount=18,
        photos=[
            Photo(
                id="2-1",
                url="/waldorf-school-harvest-festival-pumpkins.jpg",
                thumbnail="/waldorf-school-harvest-festival-pumpkins.jpg",
                title="Pumpkin Display",
                date="October 8, 2024",
                event="Harvest Celebration",
                description="Beautiful harvest display created by students",
            ),
        ],
    ),
    PhotoAlbum(
        id="3",
        title="Winter Concert",
        date="December 12, 2024",
        coverPhoto="/waldorf-school-winter-concert-children-singing.jpg",
        photoCount=32,
        photos=[
            Photo(
                id="3-1",
                url="/waldorf-school-winter-concert-choir.jpg",
                thumbnail="/waldorf-school-winter-concert-choir.jpg",
                title="School Choir Performance",
                date="December 12, 2024",
                event="Winter Concert",
                description="Annual winter concert featuring all grade levels",
            ),
        ],
    ),
]


# Each call returns fresh copies.
def sample_events() -> List[CalendarEvent]:
    return copy.deepcopy(_EVENTS)


def sample_categories() -> List[FileCategory]:
    return copy.deepcopy(_CATEGORIES)


def sample_files() -> List[DownloadFile]:
    return copy.deepcopy(_FILES)


def sample_albums() -> List[PhotoAlbum]:
    """Albums as listed by the gallery, photos not yet loaded."""

    albums = copy.deepcopy(_ALBUMS)
    for album in albums:
        album.photos = []
    return albums


def sample_album_photos(album_id: str) -> List[Photo]:
    for album in _ALBUMS:
        if album.id == album_id:
            return copy.deepcopy(album.photos)
    return []
