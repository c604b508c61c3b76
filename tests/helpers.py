"""Shared test helpers."""

from datetime import UTC, datetime
from typing import Any
from uuid import UUID

STRONG_PASSWORD = "correct-horse-battery-staple"


def signup_payload(**overrides: Any) -> dict[str, Any]:
    """A valid camelCase signup body; keyword arguments replace top-level keys."""
    payload: dict[str, Any] = {
        "emailId": "a@x.com",
        "password": STRONG_PASSWORD,
        "workspaceName": "Acme",
        "adminName": "Ann",
        "workspaceLogo": "",
        "role": 2,
        "departments": [1],
        "designations": [1],
        "shifts": [{"name": "Day", "startTime": "09:00", "endTime": "17:00"}],
    }
    payload.update(overrides)
    return payload


def auth_headers(token: str, workspace_id: UUID | str | None = None) -> dict[str, str]:
    headers = {"Authorization": f"Bearer {token}"}
    if workspace_id is not None:
        headers["X-Workspace-ID"] = str(workspace_id)
    return headers


class MutableClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, start: float = 1_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class MutableDateTimeClock:
    """Manually advanced datetime clock for token expiry tests."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2026, 1, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now
