from datetime import date

import pytest

from pacifico_portal import models, portal
from pacifico_portal.api import ContentAPIError
from pacifico_portal.portal import NavigationState, PortalSession


class DownClient:
    """Every content API call fails."""

    def __getattr__(self, name):
        def call(*args):
            raise ContentAPIError(name, "connection refused")

        return call


def test_select_section_closes_profile_menu():
    nav = portal.toggle_profile_menu(NavigationState())
    assert nav.profile_menu_open
    nav = portal.select_section(nav, "profile")
    assert nav == NavigationState(active_section="profile", profile_menu_open=False)


def test_select_unknown_section():
    with pytest.raises(portal.UnknownSection):
        portal.select_section(NavigationState(), "settings")


def test_update_profile_returns_new_profile():
    before = models.Profile()
    after = portal.update_profile(before, {"city": "Lima", "relationship": "friend"})
    assert before.city == ""
    assert after.city == "Lima"
    with pytest.raises(ValueError):
        portal.update_profile(before, {"nickname": "x"})


def test_switching_sections_discards_previous_data():
    session = PortalSession(username="parent", client=DownClient())
    gallery = session.gallery_view()
    assert gallery.albums.state.degraded
    session.calendar_view(date(2024, 12, 1))
    assert session.gallery is None
    assert session.calendar is not None
    assert session.gallery_view() is not gallery


def test_calendar_navigation_reloads_month():
    session = PortalSession(username="parent", client=DownClient())
    view = session.calendar_view(date(2024, 12, 5))
    assert view.events.state.key == (2024, 12)
    view.navigate(1)
    assert view.current == date(2025, 1, 1)
    assert view.events.state.key == (2025, 1)
    body = view.as_dict(today=date(2024, 12, 21))
    assert body["month"] == "2025-01"
    assert body["error"] == "Unable to load calendar events. Please try again later."
    assert [e["date"] for e in body["upcoming"]][0] == "2024-12-22"


def test_calendar_rejects_unknown_view_mode():
    session = PortalSession(username="parent", client=DownClient())
    with pytest.raises(ValueError):
        session.calendar_view(date(2024, 12, 1)).set_view_mode("week")


def test_category_card_toggles_filter():
    session = PortalSession(username="parent", client=DownClient())
    view = session.downloads_view()
    view.toggle_category("forms")
    assert view.category_id == "forms"
    assert {f.category for f in view.filtered} == {"forms"}
    view.toggle_category("forms")
    assert view.category_id == "all"
    assert len(view.filtered) == 8
