"""FastAPI application: content API proxy and portal views."""

from __future__ import annotations

import logging
from datetime import date
from typing import Dict, Optional

from fastapi import APIRouter, Depends, FastAPI, Header, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from . import auth, models
from .api import ContentAPIClient, ContentAPIError
from .config import Settings, get_settings
from .login import INVALID_CREDENTIALS, Authenticator, SessionStore, authenticator_from_settings
from .portal import PortalSession, UnknownSection
from .sections import FallbackPolicy

logger = logging.getLogger(__name__)

proxy = APIRouter(prefix="/api", tags=["proxy"])
portal = APIRouter(prefix="/portal", tags=["portal"])


class LoginBody(BaseModel):
    username: str
    password: str


class ProfileBody(BaseModel):
    firstName: Optional[str] = None
    lastName: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    emergencyContact: Optional[str] = None
    emergencyPhone: Optional[str] = None
    relationship: Optional[str] = None
    notes: Optional[str] = None


def _error(message: str, status_code: int = 500) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


# ---------- App state accessors ----------
def get_client(request: Request) -> ContentAPIClient:
    return request.app.state.client


def get_sessions(request: Request) -> SessionStore[PortalSession]:
    return request.app.state.sessions


class NotSignedIn(Exception):
    pass


def get_portal_session(
    request: Request,
    x_portal_session: Optional[str] = Header(default=None),
) -> PortalSession:
    session = request.app.state.sessions.get(x_portal_session)
    if session is None:
        raise NotSignedIn()
    return session


def _forward(call, message: str, label: str):
    try:
        return call()
    except ContentAPIError as exc:
        logger.error("%s API Error: %s", label, exc)
        return _error(message)


# ---------- Proxy routes ----------
@proxy.get("/calendar/events")
def calendar_events(
    year: Optional[str] = None,
    month: Optional[str] = None,
    client: ContentAPIClient = Depends(get_client),
):
    return _forward(lambda: client.get_events(year, month), "Failed to fetch events", "Calendar")


@proxy.get("/downloads/categories")
def download_categories(client: ContentAPIClient = Depends(get_client)):
    return _forward(
        client.get_download_categories, "Failed to fetch categories", "Downloads Categories"
    )


@proxy.get("/downloads/files")
def download_files(client: ContentAPIClient = Depends(get_client)):
    return _forward(client.get_download_files, "Failed to fetch files", "Downloads")


@proxy.post("/downloads/files/{file_id}/download")
def download_file(file_id: str, client: ContentAPIClient = Depends(get_client)):
    return _forward(
        lambda: client.track_download(file_id), "Failed to process download", "Download"
    )


@proxy.get("/gallery/albums")
def gallery_albums(client: ContentAPIClient = Depends(get_client)):
    return _forward(client.get_albums, "Failed to fetch albums", "Gallery")


@proxy.get("/gallery/albums/{album_id}/photos")
def gallery_album_photos(album_id: str, client: ContentAPIClient = Depends(get_client)):
    return _forward(
        lambda: client.get_album_photos(album_id), "Failed to fetch photos", "Gallery Photos"
    )


# ---------- Portal routes ----------
@portal.post("/login")
def login(body: LoginBody, request: Request):
    authenticator: Authenticator = request.app.state.authenticator
    principal = authenticator.authenticate(body.username, body.password)
    if principal is None:
        logger.info("Rejected sign-in for %r", body.username)
        return _error(INVALID_CREDENTIALS, 401)
    session = PortalSession(
        username=principal.username,
        client=request.app.state.client,
        policy=request.app.state.fallback_policy,
    )
    session_id = request.app.state.sessions.open(session)
    return {"session": session_id, "state": session.as_dict()}


@portal.post("/logout")
def logout(
    x_portal_session: Optional[str] = Header(default=None),
    sessions: SessionStore = Depends(get_sessions),
    session: PortalSession = Depends(get_portal_session),
):
    sessions.close(x_portal_session)
    return {"ok": True}


@portal.get("/state")
def state(session: PortalSession = Depends(get_portal_session)):
    return session.as_dict()


@portal.post("/sections/{name}")
def select_section(name: str, session: PortalSession = Depends(get_portal_session)):
    try:
        session.select(name)
    except UnknownSection:
        return _error(f"Unknown section: {name}", 404)
    return session.as_dict()


@portal.post("/profile-menu")
def profile_menu(session: PortalSession = Depends(get_portal_session)):
    session.toggle_profile_menu()
    return session.as_dict()


@portal.get("/profile")
def get_profile(session: PortalSession = Depends(get_portal_session)):
    session.select("profile")
    return models.to_record(session.profile)


@portal.put("/profile")
def put_profile(body: ProfileBody, session: PortalSession = Depends(get_portal_session)):
    changes: Dict[str, str] = body.model_dump(exclude_none=True)
    try:
        profile = session.save_profile(changes)
    except ValueError as exc:
        return _error(str(exc), 422)
    return models.to_record(profile)


@portal.get("/gallery")
def gallery(session: PortalSession = Depends(get_portal_session)):
    return session.gallery_view().as_dict()


@portal.get("/gallery/albums/{album_id}")
def gallery_album(album_id: str, session: PortalSession = Depends(get_portal_session)):
    album = session.gallery_view().open_album(album_id)
    if album is None:
        return _error("Album not found", 404)
    return models.to_record(album)


@portal.get("/calendar")
def calendar(
    year: Optional[int] = Query(default=None, ge=1, le=9999),
    month: Optional[int] = Query(default=None, ge=1, le=12),
    view: str = "month",
    session: PortalSession = Depends(get_portal_session),
):
    if (year is None) != (month is None):
        return _error("year and month must be given together", 422)
    target = date(year, month, 1) if year is not None else None
    cal = session.calendar_view(target)
    try:
        cal.set_view_mode(view)
    except ValueError as exc:
        return _error(str(exc), 422)
    return cal.as_dict()


@portal.get("/downloads")
def downloads(
    search: Optional[str] = None,
    category: Optional[str] = None,
    type: Optional[str] = None,
    session: PortalSession = Depends(get_portal_session),
):
    view = session.downloads_view()
    view.set_filters(search, category, type)
    return view.as_dict()


@portal.post("/{name}/retry")
def retry(name: str, session: PortalSession = Depends(get_portal_session)):
    views = {
        "gallery": session.gallery_view,
        "calendar": session.calendar_view,
        "downloads": session.downloads_view,
    }
    if name not in views:
        return _error(f"Unknown section: {name}", 404)
    view = views[name]()
    view.retry()
    return view.as_dict()


@portal.post("/downloads/{file_id}")
def download(file_id: str, session: PortalSession = Depends(get_portal_session)):
    url = session.downloads_view().download(file_id)
    if url is None:
        return _error("File not found", 404)
    return {"url": url}


def build_client(settings: Settings, **kwargs) -> ContentAPIClient:
    return ContentAPIClient(
        settings.API_URL,
        auth.acquire_token(settings),
        timeout=settings.REQUEST_TIMEOUT,
        token_provider=lambda: auth.acquire_token(settings),
        **kwargs,
    )


def create_app(
    settings: Optional[Settings] = None,
    client: Optional[ContentAPIClient] = None,
    authenticator: Optional[Authenticator] = None,
) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(
        title="Pacifico Parent Portal",
        description="Parent portal for gallery, calendar and downloads",
        version="1.0.0",
    )
    app.state.settings = settings
    app.state.client = client or build_client(settings)
    app.state.authenticator = authenticator or authenticator_from_settings(settings)
    app.state.fallback_policy = FallbackPolicy(settings.FALLBACK_POLICY)
    app.state.sessions = SessionStore()

    @app.exception_handler(NotSignedIn)
    async def not_signed_in(request: Request, exc: NotSignedIn):
        return _error("Not signed in", 401)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    app.include_router(proxy)
    app.include_router(portal)
    return app
