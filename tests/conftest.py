"""
Pytest configuration for userfront-core tests.
"""

import json
from typing import Any, Optional

import httpx
import pytest
from jose import jwt

from userfront_core.adapters.cookies import InMemoryCookieJar
from userfront_core.adapters.location import InMemoryLocation
from userfront_core.adapters.storage import InMemoryLocalStorage
from userfront_core.context import SessionContext


TENANT_ID = "demo1234"
NOW = 1_700_000_000.0
SECRET = "test-secret"


# -----------------------------------------------------------------------------
# HTTP
# -----------------------------------------------------------------------------


class MockApi:
    """
    Canned API responses served through ``httpx.MockTransport``.

    Routes are matched on method and path suffix (``"auth/basic"`` matches
    ``/v0/auth/basic``). Unmatched requests get a 404.
    """

    def __init__(self):
        self.routes: dict[tuple[str, str], tuple[int, Any]] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, json: Any = None, status_code: int = 200):
        self.routes[(method.upper(), path)] = (status_code, json)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        for (method, path), (status_code, body) in self.routes.items():
            if request.method == method and request.url.path.endswith("/" + path):
                if body is None:
                    return httpx.Response(status_code)
                return httpx.Response(status_code, json=body)
        return httpx.Response(404, json={"message": "Not found"})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last_request(self) -> Optional[httpx.Request]:
        return self.requests[-1] if self.requests else None

    def requests_to(self, method: str, path: str) -> list[httpx.Request]:
        return [
            r
            for r in self.requests
            if r.method == method.upper() and r.url.path.endswith("/" + path)
        ]


def request_json(request: httpx.Request) -> Any:
    return json.loads(request.content) if request.content else None


class FakeClock:
    """Controllable replacement for ``time.time``."""

    def __init__(self, now: float = NOW):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# -----------------------------------------------------------------------------
# FIXTURES
# -----------------------------------------------------------------------------


@pytest.fixture
def api():
    return MockApi()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def location():
    return InMemoryLocation("https://example.com/login")


@pytest.fixture
def cookie_jar():
    return InMemoryCookieJar()


@pytest.fixture
def local_storage():
    return InMemoryLocalStorage()


@pytest.fixture
def make_session(api, clock, cookie_jar, local_storage):
    """Build an initialized session for a given page URL."""

    def _make(href: str = "https://example.com/login", tenant_id: str = TENANT_ID):
        session = SessionContext(
            cookie_jar=cookie_jar,
            local_storage=local_storage,
            location=InMemoryLocation(href),
            transport=api.transport,
            clock=clock,
        )
        session.init(tenant_id)
        return session

    return _make


@pytest.fixture
def session(api, clock, cookie_jar, local_storage, location):
    session = SessionContext(
        cookie_jar=cookie_jar,
        local_storage=local_storage,
        location=location,
        transport=api.transport,
        clock=clock,
    )
    session.init(TENANT_ID)
    return session


@pytest.fixture
def make_token(clock):
    """Mint an HS256 JWT whose ``exp`` is relative to the fake clock."""

    def _make(claims: Optional[dict] = None, expires_in: Optional[float] = 3600):
        payload = dict(claims or {})
        if expires_in is not None:
            payload["exp"] = int(clock.now + expires_in)
        return jwt.encode(payload, SECRET, algorithm="HS256")

    return _make


@pytest.fixture
def issued_tokens(make_token):
    """Build a ``tokens`` response payload."""

    def _make(
        access_claims: Optional[dict] = None,
        id_claims: Optional[dict] = None,
        refresh: bool = True,
        cookie_options: Optional[dict] = None,
    ):
        options = cookie_options or {"secure": True, "sameSite": "Lax", "expires": 30}
        tokens = {
            "access": {
                "value": make_token({"userId": 1, **(access_claims or {})}),
                "cookieOptions": options,
            },
            "id": {
                "value": make_token(
                    {"userId": 1, "email": "u@x.com", **(id_claims or {})}
                ),
                "cookieOptions": options,
            },
        }
        if refresh:
            tokens["refresh"] = {
                "value": make_token({"userId": 1}, expires_in=86400),
                "cookieOptions": {**options, "sameSite": "None"},
            }
        return tokens

    return _make
