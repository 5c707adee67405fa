"""Test double for code built on the StorageGRID services.

:class:`MockHTTPClient` satisfies the services' ``HTTPClient`` protocol
without any network: register the ``data`` payload each (method, path)
should return, run the code under test, then inspect the recorded calls.

    mock = MockHTTPClient()
    mock.add("GET", "/grid/accounts", [{"id": "1", "name": "a"}])
    tenants = TenantService(mock).list()
    assert mock.calls[0].path == "/grid/accounts"
"""

import json
from dataclasses import dataclass
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel

from .client import encode_body

M = TypeVar("M", bound=BaseModel)

API_VERSION = "4.0"


@dataclass
class Call:
    """One request seen by the mock."""

    method: str
    path: str
    body: Any = None
    timeout: float | None = None

    def json(self) -> Any:
        """The body as it would have been sent on the wire."""
        if self.body is None:
            return None
        return json.loads(encode_body(self.body))


class MockHTTPClient:
    """Records requests and answers them from registered payloads.

    A registered exception instance is raised instead of answering.
    Requests to unregistered routes raise KeyError when a decoded result
    is expected; requests that expect no body succeed.
    """

    def __init__(self, responses: dict[tuple[str, str], Any] | None = None):
        self.responses: dict[tuple[str, str], Any] = dict(responses or {})
        self.calls: list[Call] = []

    def add(self, method: str, path: str, data: Any) -> None:
        """Register the ``data`` payload (or exception) for a route."""
        self.responses[(method, path)] = data

    def _answer(self, method: str, path: str) -> dict[str, Any]:
        try:
            data = self.responses[(method, path)]
        except KeyError:
            msg = f"No response registered for {method} {path}"
            raise KeyError(msg) from None
        if isinstance(data, BaseException):
            raise data
        return {"status": "success", "apiVersion": API_VERSION, "data": data}

    def do_raw(
        self,
        method: str,
        path: str,
        body: Any = None,
        *,
        timeout: float | None = None,
    ) -> httpx.Response:
        self.calls.append(Call(method, path, body, timeout))
        if (method, path) not in self.responses:
            return httpx.Response(204)
        return httpx.Response(200, json=self._answer(method, path))

    def do_parsed(
        self,
        method: str,
        path: str,
        body: Any = None,
        output: type[M] | None = None,
        *,
        timeout: float | None = None,
    ) -> M | None:
        self.calls.append(Call(method, path, body, timeout))
        if output is None:
            data = self.responses.get((method, path))
            if isinstance(data, BaseException):
                raise data
            return None
        return output.model_validate(self._answer(method, path))
