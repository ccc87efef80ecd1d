from __future__ import annotations

import pytest
import requests

from attendance_sheet.core.exceptions import (
    EmailTakenError,
    InvalidCredentialsError,
    StorageUnavailableError,
    ValidationError,
)
from attendance_sheet.sync.client import AttendanceApiClient


class FakeResponse:
    def __init__(self, status_code: int, payload):
        self.status_code = status_code
        self._payload = payload

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeSession:
    def __init__(self, response=None, error: Exception | None = None):
        self.response = response
        self.error = error
        self.calls: list[tuple] = []

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if self.error:
            raise self.error
        return self.response


def test_login_posts_credentials():
    session = FakeSession(FakeResponse(200, {"success": True, "sessionId": "s1", "email": "a@b.com"}))
    client = AttendanceApiClient("http://api/", session=session, timeout=3)

    result = client.login("a@b.com", "secret1")

    assert result["sessionId"] == "s1"
    method, url, kwargs = session.calls[0]
    assert (method, url) == ("POST", "http://api/auth/login")
    assert kwargs["json"] == {"email": "a@b.com", "password": "secret1"}
    assert kwargs["timeout"] == 3


def test_save_sends_whole_document():
    session = FakeSession(FakeResponse(200, {"success": True, "ok": True}))
    client = AttendanceApiClient("http://api", session=session)

    client.save("s1", {"roster": ["Alice"], "attendance": {}})

    _, url, kwargs = session.calls[0]
    assert url == "http://api/attendance/save"
    assert kwargs["json"] == {"sessionId": "s1", "roster": ["Alice"], "attendance": {}}


def test_load_uses_query_param():
    session = FakeSession(FakeResponse(200, {"success": True, "roster": [], "attendance": {}}))
    client = AttendanceApiClient("http://api", session=session)

    client.load("s1")

    method, url, kwargs = session.calls[0]
    assert (method, url, kwargs["params"]) == ("GET", "http://api/attendance/load", {"sessionId": "s1"})


@pytest.mark.parametrize(
    "status, error",
    [
        (400, ValidationError),
        (401, InvalidCredentialsError),
        (409, EmailTakenError),
        (500, StorageUnavailableError),
    ],
)
def test_http_errors_are_mapped(status, error):
    session = FakeSession(FakeResponse(status, {"success": False, "error": "nope"}))
    client = AttendanceApiClient("http://api", session=session)

    with pytest.raises(error, match="nope"):
        client.create_account("a@b.com", "secret1")


def test_network_error_and_non_json_body():
    client = AttendanceApiClient("http://api", session=FakeSession(error=requests.ConnectionError("refused")))
    with pytest.raises(StorageUnavailableError):
        client.load("s1")

    client = AttendanceApiClient("http://api", session=FakeSession(FakeResponse(502, ValueError("html"))))
    with pytest.raises(StorageUnavailableError):
        client.load("s1")
