"""High-availability group service (grid management API)."""

from typing import Protocol

from ..types import APIModel, Response
from .base import HTTPClient

HA_GROUP_ENDPOINT = "/private/ha-groups"


class Interface(APIModel):
    """A node network interface that can hold the group's virtual IPs."""

    interface: str | None = None
    node_id: str | None = None


class HAGroup(APIModel):
    """A set of virtual IPs bound to node interfaces."""

    id: str = ""
    name: str | None = None
    description: str | None = None
    gateway_cidr: str | None = None
    virtual_ips: list[str] | None = None
    # Ordered by priority, the first interface is preferred
    interfaces: list[Interface] | None = None


class HAGroupServiceProtocol(Protocol):
    def get_by_id(self, group_id: str) -> HAGroup: ...

    def create(self, group: HAGroup) -> HAGroup: ...

    def update(self, group: HAGroup) -> HAGroup: ...

    def delete(self, group_id: str) -> None: ...

    def list(self) -> list[HAGroup]: ...


class HAGroupService:
    """Manage HA groups."""

    def __init__(self, client: HTTPClient):
        self._client = client

    def list(self) -> list[HAGroup]:
        response = self._client.do_parsed(
            "GET", HA_GROUP_ENDPOINT, output=Response[list[HAGroup]]
        )
        return response.data

    def get_by_id(self, group_id: str) -> HAGroup:
        response = self._client.do_parsed(
            "GET", f"{HA_GROUP_ENDPOINT}/{group_id}", output=Response[HAGroup]
        )
        return response.data

    def create(self, group: HAGroup) -> HAGroup:
        response = self._client.do_parsed(
            "POST", HA_GROUP_ENDPOINT, group, output=Response[HAGroup]
        )
        return response.data

    def update(self, group: HAGroup) -> HAGroup:
        if not group.id:
            msg = "HA group id is required for update"
            raise ValueError(msg)
        response = self._client.do_parsed(
            "PUT", f"{HA_GROUP_ENDPOINT}/{group.id}", group, output=Response[HAGroup]
        )
        return response.data

    def delete(self, group_id: str) -> None:
        self._client.do_parsed("DELETE", f"{HA_GROUP_ENDPOINT}/{group_id}")
