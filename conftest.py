"""Pytest configuration and fixtures."""

import asyncio
import json
import sys
from pathlib import Path
from unittest.mock import Mock

import pytest

# Add current directory to path for package imports
sys.path.insert(0, str(Path(__file__).parent))

from kickalert import Config, SessionState  # noqa: E402

API_BASE = "https://api.kickbase.test"
FAR_FUTURE = "2099-01-01T00:00:00.000Z"

LEAGUE = {
    "id": "7389547",
    "name": "Bundesliga Buddies",
    "creator": "max",
    "creatorId": "1001",
    "creation": "2024-07-01T10:00:00Z",
    "maxMembers": 18,
    "adminCount": 1,
    "memberCount": 12,
    "isCommissioner": False,
    "cpi": "1",
}


class FakeResponse:
    """Minimal stand-in for an aiohttp response context manager."""

    def __init__(self, status, body):
        self.status = status
        self._body = body

    async def __aenter__(self):
        # Yield like a real network round-trip so concurrent runs interleave
        await asyncio.sleep(0)
        return self

    async def __aexit__(self, *exc):
        return False

    async def text(self):
        return self._body if isinstance(self._body, str) else json.dumps(self._body)

    async def json(self, content_type=None):
        if isinstance(self._body, str):
            return json.loads(self._body)
        return self._body


class FakeHttp:
    """Records requests and replays canned (status, body) pairs per route.

    Routes are keyed by (METHOD, path). A route value may be a list of
    responses (consumed in order) or an exception instance to raise.
    """

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []

    def _respond(self, method, url, **kwargs):
        path = url[len(API_BASE):] if url.startswith(API_BASE) else url
        self.calls.append({"method": method, "path": path, **kwargs})
        route = self.routes.get((method, path))
        if route is None:
            return FakeResponse(404, "not found")
        if isinstance(route, Exception):
            raise route
        if isinstance(route, list):
            status, body = route.pop(0) if len(route) > 1 else route[0]
        else:
            status, body = route
        return FakeResponse(status, body)

    def get(self, url, **kwargs):
        return self._respond("GET", url, **kwargs)

    def post(self, url, **kwargs):
        return self._respond("POST", url, **kwargs)

    def paths(self):
        return [(c["method"], c["path"]) for c in self.calls]


def login_body(leagues=None, token="tok-1", expiry=FAR_FUTURE):
    body = {"tkn": token, "tknex": expiry, "u": {"id": "42", "name": "Tester"}}
    if leagues is not None:
        body["srvl"] = leagues
    return body


@pytest.fixture(autouse=True)
def kickbase_config(monkeypatch):
    """Point Config at a fake API and a fully configured Twilio channel."""
    monkeypatch.setattr(Config, "KICKBASE_EMAIL", "manager@example.com")
    monkeypatch.setattr(Config, "KICKBASE_PASSWORD", "hunter2")
    monkeypatch.setattr(Config, "KICKBASE_API_BASE", API_BASE)
    monkeypatch.setattr(Config, "LEAGUE_ENDPOINTS", ["/v4/leagues"])
    monkeypatch.setattr(Config, "BUDGET_THRESHOLD", 0)
    monkeypatch.setattr(Config, "TWILIO_ACCOUNT_SID", "AC123")
    monkeypatch.setattr(Config, "TWILIO_AUTH_TOKEN", "secret")
    monkeypatch.setattr(Config, "TWILIO_WHATSAPP_NUMBER", "whatsapp:+14155238886")
    monkeypatch.setattr(Config, "YOUR_PHONE_NUMBER", "whatsapp:+491700000000")
    monkeypatch.setattr(Config, "CONTENT_SID", "HX123")
    monkeypatch.setattr(Config, "ALERT_DEADLINE", "20:30")
    monkeypatch.setattr(Config, "TIMEZONE", "Europe/Berlin")
    return Config


@pytest.fixture
def state():
    return SessionState()


@pytest.fixture
def twilio_client():
    client = Mock()
    client.messages.create.return_value = Mock(sid="SM0001")
    return client
