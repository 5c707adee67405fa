"""Tenant account service (grid management API)."""

from typing import Protocol

from pydantic import Field

from ..types import APIModel, Response
from .base import HTTPClient
from .usage import TenantUsage

TENANT_ENDPOINT = "/grid/accounts"


class SynchronizeRules(APIModel):
    """Tenant data cloned to other grids over a grid federation connection."""

    create_user: bool | None = None
    create_group: bool | None = None
    create_key: bool | None = None


class TenantPolicy(APIModel):
    """Policy settings of a tenant account."""

    use_account_identity_source: bool = False
    allow_platform_services: bool = False
    allow_select_object_content: bool | None = None
    allowed_grid_federation_connections: list[str] | None = None
    allow_compliance_mode: bool = False
    # None means unlimited
    quota_object_bytes: int | None = None
    max_retention_days: int | None = None
    max_retention_years: int | None = None


class Tenant(APIModel):
    """A storage tenant account.

    ``id`` is assigned by the grid on creation. ``password`` sets the root
    password and is never returned by the API.
    """

    id: str = ""
    name: str | None = None
    description: str | None = None
    # e.g. ["s3", "management"]
    capabilities: list[str] | None = None
    synchronize_rules: SynchronizeRules | None = None
    policy: TenantPolicy | None = None
    account_replica: bool | None = None
    password: str | None = Field(default=None, repr=False)


class TenantServiceProtocol(Protocol):
    def list(self) -> list[Tenant]: ...

    def get_by_id(self, tenant_id: str) -> Tenant: ...

    def create(self, tenant: Tenant) -> Tenant: ...

    def update(self, tenant: Tenant) -> Tenant: ...

    def delete(self, tenant_id: str) -> None: ...

    def get_usage(self, tenant_id: str) -> TenantUsage: ...


class TenantService:
    """Manage tenant accounts."""

    def __init__(self, client: HTTPClient):
        self._client = client

    def list(self) -> list[Tenant]:
        response = self._client.do_parsed(
            "GET", TENANT_ENDPOINT, output=Response[list[Tenant]]
        )
        return response.data

    def get_by_id(self, tenant_id: str) -> Tenant:
        response = self._client.do_parsed(
            "GET", f"{TENANT_ENDPOINT}/{tenant_id}", output=Response[Tenant]
        )
        return response.data

    def create(self, tenant: Tenant) -> Tenant:
        response = self._client.do_parsed(
            "POST", TENANT_ENDPOINT, tenant, output=Response[Tenant]
        )
        return response.data

    def update(self, tenant: Tenant) -> Tenant:
        """Replace the settings of ``tenant``, addressed by its ``id``."""
        if not tenant.id:
            msg = "tenant id is required for update"
            raise ValueError(msg)
        response = self._client.do_parsed(
            "PUT", f"{TENANT_ENDPOINT}/{tenant.id}", tenant, output=Response[Tenant]
        )
        return response.data

    def delete(self, tenant_id: str) -> None:
        self._client.do_parsed("DELETE", f"{TENANT_ENDPOINT}/{tenant_id}")

    def get_usage(self, tenant_id: str) -> TenantUsage:
        response = self._client.do_parsed(
            "GET", f"{TENANT_ENDPOINT}/{tenant_id}/usage", output=Response[TenantUsage]
        )
        return response.data
