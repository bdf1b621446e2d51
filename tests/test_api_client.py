import json

import pytest
import requests

from pacifico_portal import api, sections
from pacifico_portal.api import ContentAPIClient, ContentAPIError
from pacifico_portal.sections import Status


class FakeResponse:
    def __init__(self, status_code=200, body=None, text=None):
        self.status_code = status_code
        self._body = body
        self._text = text

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self._text is not None:
            return json.loads(self._text)
        return self._body


class FakeSession:
    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []

    def request(self, method, url, params=None, headers=None, timeout=None):
        self.requests.append(
            {"method": method, "url": url, "params": params, "headers": headers, "timeout": timeout}
        )
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def test_get_sends_bearer_token_and_query():
    session = FakeSession(FakeResponse(body={"events": []}))
    client = ContentAPIClient("http://school.test/api/", "secret", timeout=5, session=session)
    assert client.get_events(2024, 12) == {"events": []}
    sent = session.requests[0]
    assert sent["method"] == "GET"
    assert sent["url"] == "http://school.test/api/calendar/events"
    assert sent["params"] == {"year": 2024, "month": 12}
    assert sent["headers"]["Authorization"] == "Bearer secret"
    assert sent["timeout"] == 5


def test_track_download_posts():
    session = FakeSession(FakeResponse(body={"ok": True}))
    client = ContentAPIClient("http://school.test/api", session=session)
    client.track_download("7")
    assert session.requests[0]["method"] == "POST"
    assert session.requests[0]["url"].endswith("/downloads/files/7/download")


@pytest.mark.parametrize("status", [400, 404, 500, 503])
def test_non_success_status_raises(status):
    client = ContentAPIClient(session=FakeSession(FakeResponse(status, {"message": "no"})))
    with pytest.raises(ContentAPIError) as info:
        client.get_albums()
    assert info.value.status == status


def test_transport_error_raises():
    session = FakeSession(requests.ConnectionError("refused"))
    with pytest.raises(ContentAPIError):
        ContentAPIClient(session=session).get_download_files()


def test_non_json_body_raises():
    session = FakeSession(FakeResponse(text="<html>oops</html>"))
    with pytest.raises(ContentAPIError):
        ContentAPIClient(session=session).get_download_categories()


def test_token_refreshed_once_on_401():
    session = FakeSession(FakeResponse(401), FakeResponse(body={"albums": []}))
    client = ContentAPIClient(token="old", token_provider=lambda: "new", session=session)
    assert client.get_albums() == {"albums": []}
    assert [r["headers"]["Authorization"] for r in session.requests] == [
        "Bearer old",
        "Bearer new",
    ]


def test_repeated_401_raises():
    session = FakeSession(FakeResponse(401), FakeResponse(401))
    client = ContentAPIClient(token="old", token_provider=lambda: "new", session=session)
    with pytest.raises(ContentAPIError):
        client.get_albums()


def test_failed_token_refresh_raises_content_api_error():
    def no_token():
        raise RuntimeError("Could not obtain access token")

    session = FakeSession(FakeResponse(401))
    client = ContentAPIClient(token="old", token_provider=no_token, session=session)
    with pytest.raises(ContentAPIError) as excinfo:
        client.get_albums()
    assert excinfo.value.status == 401
    assert len(session.requests) == 1


def test_failed_token_refresh_falls_back_in_section():
    def no_token():
        raise requests.ConnectionError("authority unreachable")

    session = FakeSession(FakeResponse(401))
    client = ContentAPIClient(token="old", token_provider=no_token, session=session)
    state = sections.album_section(client).load()
    assert state.status is Status.FAILED
    assert state.error == sections.ALBUMS_ERROR
    assert state.source == "sample"


def test_dump_and_offline_snapshots(tmp_path, monkeypatch):
    monkeypatch.setattr(api, "SNAPSHOT_DIR", tmp_path)
    session = FakeSession(FakeResponse(body={"events": [{"id": "1"}]}))
    ContentAPIClient(dump_json=True, session=session).get_events(2024, 12)

    offline = ContentAPIClient(offline=True, session=FakeSession())
    assert offline.get_events(2024, 12) == {"events": [{"id": "1"}]}
    with pytest.raises(ContentAPIError):
        offline.get_events(2025, 1)
