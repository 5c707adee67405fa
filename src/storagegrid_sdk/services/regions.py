"""Region service, available on both the grid and the tenant API."""

from typing import Protocol

from ..types import Response
from .base import HTTPClient

GRID_REGION_ENDPOINT = "/grid/regions"
TENANT_REGION_ENDPOINT = "/org/regions"


class RegionServiceProtocol(Protocol):
    def list(self) -> list[str]: ...


class RegionService:
    """List the regions configured on the grid.

    Use :meth:`for_grid` or :meth:`for_tenant` to pick the endpoint that
    matches the signed-in API.
    """

    def __init__(self, client: HTTPClient, endpoint: str = GRID_REGION_ENDPOINT):
        self._client = client
        self._endpoint = endpoint

    @classmethod
    def for_grid(cls, client: HTTPClient) -> "RegionService":
        return cls(client, GRID_REGION_ENDPOINT)

    @classmethod
    def for_tenant(cls, client: HTTPClient) -> "RegionService":
        return cls(client, TENANT_REGION_ENDPOINT)

    def list(self) -> list[str]:
        response = self._client.do_parsed(
            "GET", self._endpoint, output=Response[list[str]]
        )
        return response.data
