"""Transport contract the resource services are built on."""

from typing import Any, Protocol, TypeVar

import httpx
from pydantic import BaseModel

M = TypeVar("M", bound=BaseModel)


class HTTPClient(Protocol):
    """What a service needs from the transport.

    :class:`storagegrid_sdk.client.Client` satisfies it for real calls and
    :class:`storagegrid_sdk.testing.MockHTTPClient` for tests.
    """

    def do_raw(
        self,
        method: str,
        path: str,
        body: Any = None,
        *,
        timeout: float | None = None,
    ) -> httpx.Response: ...

    def do_parsed(
        self,
        method: str,
        path: str,
        body: Any = None,
        output: type[M] | None = None,
        *,
        timeout: float | None = None,
    ) -> M | None: ...
