"""Shared fixtures: a fake StorageGRID admin node behind httpx.MockTransport."""

import threading
import time
from collections.abc import Callable, Iterator
from email.utils import formatdate
from typing import Any

import httpx
import pytest

from storagegrid_sdk import Client, Credentials

ENDPOINT = "https://grid.example.com"
API_PREFIX = "/api/v4"

Handler = Callable[[httpx.Request], httpx.Response]


def envelope(data: Any) -> dict[str, Any]:
    """Wrap a payload the way the API does."""
    return {
        "responseTime": "2024-05-01T12:00:00.000Z",
        "status": "success",
        "apiVersion": "4.0",
        "deprecated": False,
        "data": data,
    }


def expires_in(seconds: float) -> str:
    """An RFC 1123 Expires header value ``seconds`` from now."""
    return formatdate(time.time() + seconds, usegmt=True)


class FakeGrid:
    """Serves the authorize endpoint and registered API routes.

    Every request is recorded. Logins hand out "token-1", "token-2", ...
    valid for ``token_lifetime`` seconds unless ``login_handler`` answers
    them instead.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self.logins = 0
        self.requests: list[httpx.Request] = []
        self.routes: dict[tuple[str, str], Handler] = {}
        self.token_lifetime = 3600.0
        self.login_delay = 0.0
        self.login_handler: Handler | None = None

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def route(
        self,
        method: str,
        path: str,
        data: Any = None,
        status: int = 200,
        handler: Handler | None = None,
    ) -> None:
        """Answer ``method path`` with an enveloped ``data`` or a custom handler."""
        if handler is None:

            def handler(_: httpx.Request) -> httpx.Response:
                if status >= 300 or data is None:
                    return httpx.Response(status)
                return httpx.Response(status, json=envelope(data))

        self.routes[(method, path)] = handler

    def handle(self, request: httpx.Request) -> httpx.Response:
        with self._lock:
            self.requests.append(request)

        path = request.url.path.removeprefix(API_PREFIX)
        if request.method == "POST" and path == "/authorize":
            return self._login(request)

        handler = self.routes.get((request.method, path))
        if handler is None:
            return httpx.Response(404)
        return handler(request)

    def _login(self, request: httpx.Request) -> httpx.Response:
        if self.login_delay:
            time.sleep(self.login_delay)
        with self._lock:
            self.logins += 1
            token = f"token-{self.logins}"
        if self.login_handler is not None:
            return self.login_handler(request)
        return httpx.Response(
            200,
            json=envelope(token),
            headers={"Expires": expires_in(self.token_lifetime)},
        )

    def api_requests(self) -> list[httpx.Request]:
        """Recorded requests other than logins."""
        return [r for r in self.requests if not r.url.path.endswith("/authorize")]


@pytest.fixture
def grid() -> FakeGrid:
    return FakeGrid()


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(username="admin", password="secret")


@pytest.fixture
def client(grid: FakeGrid, credentials: Credentials) -> Iterator[Client]:
    """Client talking to the fake grid."""
    api_client = Client(ENDPOINT, credentials=credentials, transport=grid.transport)
    yield api_client
    api_client.close()
