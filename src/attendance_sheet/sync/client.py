from __future__ import annotations

from typing import Any, Optional

import requests

from ..core.exceptions import (
    EmailTakenError,
    InvalidCredentialsError,
    StorageUnavailableError,
    ValidationError,
)

_ERRORS_BY_STATUS = {
    400: ValidationError,
    401: InvalidCredentialsError,
    409: EmailTakenError,
}


class AttendanceApiClient:
    """API client for the attendance HTTP surface."""

    def __init__(self, base_url: str, *, session: Optional[requests.Session] = None, timeout: float = 10):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, method: str, path: str, **kwargs: Any) -> dict:
        try:
            response = self.session.request(method, f"{self.base_url}{path}", timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise StorageUnavailableError("Failed to connect to server") from e

        try:
            payload = response.json()
        except ValueError:
            payload = {}
        if not isinstance(payload, dict):
            payload = {}

        if response.status_code >= 400 or not payload.get("success", False):
            message = payload.get("error") or f"Request failed ({response.status_code})"
            raise _ERRORS_BY_STATUS.get(response.status_code, StorageUnavailableError)(message)
        return payload

    def create_account(self, email: str, password: str) -> dict:
        return self._request("POST", "/auth/create", json={"email": email, "password": password})

    def login(self, email: str, password: str) -> dict:
        return self._request("POST", "/auth/login", json={"email": email, "password": password})

    def logout(self, session_id: str) -> None:
        self._request("POST", "/auth/logout", json={"sessionId": session_id})

    def load(self, session_id: str) -> dict:
        return self._request("GET", "/attendance/load", params={"sessionId": session_id})

    def save(self, session_id: str, document: dict) -> None:
        self._request(
            "POST",
            "/attendance/save",
            json={
                "sessionId": session_id,
                "roster": document.get("roster", []),
                "attendance": document.get("attendance", {}),
            },
        )
