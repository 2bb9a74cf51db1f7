# tests/conftest.py
# SPDX-License-Identifier: Apache-2.0
"""Shared fixtures: a fake `requests` session and a call-recording API client."""

import json
import sys
from pathlib import Path

import pytest

# Make the project importable without installing it.
ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from pointnow_console.api.client import ApiClient  # noqa: E402
from pointnow_console.core.session import SessionStore  # noqa: E402
from pointnow_console.core.storage import MemoryStorage  # noqa: E402

BASE_URL = "https://api.pointnow.test"


class FakeResponse:
    def __init__(self, status_code=200, body=None, *, raw=None):
        self.status_code = status_code
        if raw is not None:
            self.content = raw
        elif body is None:
            self.content = b""
        else:
            self.content = json.dumps(body).encode("utf-8")

    def json(self):
        return json.loads(self.content)


class FakeSession:
    """Stands in for `requests.Session`; replies from a queue and records calls."""

    def __init__(self):
        self.calls = []
        self.replies = []
        self.on_request = None

    def reply(self, status_code=200, body=None, **kwargs):
        self.replies.append(FakeResponse(status_code, body, **kwargs))

    def fail(self, exc):
        self.replies.append(exc)

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        if self.on_request is not None:
            self.on_request()
        reply = self.replies.pop(0) if self.replies else FakeResponse(200, {})
        if isinstance(reply, Exception):
            raise reply
        return reply


class RecordingClient:
    """Duck-typed `ApiClient` for resource-module tests.

    Records ``(method, endpoint, data)`` and returns `response`.
    """

    def __init__(self, response=None):
        self.calls = []
        self.response = {} if response is None else response

    def _record(self, method, endpoint, data=None, **kwargs):
        self.calls.append({"method": method, "endpoint": endpoint, "data": data, **kwargs})
        return self.response

    def get(self, endpoint, **kwargs):
        return self._record("GET", endpoint, **kwargs)

    def post(self, endpoint, data=None, **kwargs):
        return self._record("POST", endpoint, data, **kwargs)

    def put(self, endpoint, data=None, **kwargs):
        return self._record("PUT", endpoint, data, **kwargs)

    def patch(self, endpoint, data=None, **kwargs):
        return self._record("PATCH", endpoint, data, **kwargs)

    def delete(self, endpoint, **kwargs):
        return self._record("DELETE", endpoint, **kwargs)

    @property
    def last(self):
        return self.calls[-1]


def login_payload(*, role="ADMIN", business_id="biz-1", access_token="tok-123"):
    link = {"business_id": business_id} if business_id else None
    return {
        "user": {
            "id": "user-1",
            "email": "owner@kopi.my",
            "name": "Aina",
            "phone_number": "+60123456789",
            "admin": link if role == "ADMIN" else None,
            "staff": link if role == "STAFF" else None,
            "user_roles": [{"role": {"name": role}}],
        },
        "backend_tokens": {"access_token": access_token, "refresh_token": "ref-456", "expires_in": 3600},
    }


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def token_box():
    """Mutable holder for the bearer token the client sees."""
    return {"token": None}


@pytest.fixture
def api_client(fake_session, token_box):
    return ApiClient(BASE_URL, lambda: token_box["token"], session=fake_session, timeout=5)


@pytest.fixture
def recorder():
    return RecordingClient()


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def store(storage):
    return SessionStore(storage)
