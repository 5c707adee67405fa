"""Tenant group service (tenant management API)."""

from typing import Protocol

from pydantic import Field

from ..types import APIModel, Response
from .base import HTTPClient

GROUP_ENDPOINT = "/org/groups"
GROUP_PREFIX = "group/"


class ManagementPolicy(APIModel):
    """Tenant Manager permissions granted to a group."""

    manage_all_containers: bool | None = None
    manage_endpoints: bool | None = None
    manage_own_s3_credentials: bool | None = Field(
        default=None, alias="manageOwnS3Credentials"
    )
    manage_own_container_objects: bool | None = None
    view_all_containers: bool | None = None
    root_access: bool | None = None


class S3Statement(APIModel):
    """One statement of an S3 group policy (IAM policy syntax)."""

    sid: str | None = Field(default=None, alias="Sid")
    # "Allow" or "Deny"
    effect: str | None = Field(default=None, alias="Effect")
    action: list[str] | None = Field(default=None, alias="Action")
    not_action: list[str] | None = Field(default=None, alias="NotAction")
    resource: list[str] | None = Field(default=None, alias="Resource")
    not_resource: list[str] | None = Field(default=None, alias="NotResource")
    condition: dict[str, dict[str, str]] | None = Field(default=None, alias="Condition")


class S3Policy(APIModel):
    id: str | None = Field(default=None, alias="Id")
    version: str | None = Field(default=None, alias="Version")
    statement: list[S3Statement] | None = Field(default=None, alias="Statement")


class SwiftPolicy(APIModel):
    # e.g. ["admin"]
    roles: list[str] | None = None


class GroupPolicies(APIModel):
    management: ManagementPolicy | None = None
    s3: S3Policy | None = None
    swift: SwiftPolicy | None = None


class Group(APIModel):
    """A local or federated tenant group."""

    # "group/<name>" or "federated-group/<name>", unique within the account
    unique_name: str
    display_name: str | None = None
    management_read_only: bool | None = None
    policies: GroupPolicies | None = None
    account_id: str | None = None
    id: str | None = None
    federated: bool | None = None
    group_urn: str | None = Field(default=None, alias="groupURN")


class GroupServiceProtocol(Protocol):
    def get_by_id(self, group_id: str) -> Group: ...

    def get_by_name(self, name: str) -> Group: ...

    def create(self, group: Group) -> Group: ...

    def update(self, group: Group) -> Group: ...

    def delete(self, group_id: str) -> None: ...

    def list(self) -> list[Group]: ...


class GroupService:
    """Manage the groups of the signed-in tenant."""

    def __init__(self, client: HTTPClient):
        self._client = client

    def list(self) -> list[Group]:
        response = self._client.do_parsed(
            "GET", GROUP_ENDPOINT, output=Response[list[Group]]
        )
        return response.data

    def get_by_id(self, group_id: str) -> Group:
        response = self._client.do_parsed(
            "GET", f"{GROUP_ENDPOINT}/{group_id}", output=Response[Group]
        )
        return response.data

    def get_by_name(self, name: str) -> Group:
        """Look a local group up by name (without the group/ prefix)."""
        response = self._client.do_parsed(
            "GET", f"{GROUP_ENDPOINT}/group/{name}", output=Response[Group]
        )
        return response.data

    def create(self, group: Group) -> Group:
        """Create a local group, adding the group/ prefix to its unique name."""
        if not group.unique_name.startswith(GROUP_PREFIX):
            group = group.model_copy(
                update={"unique_name": GROUP_PREFIX + group.unique_name}
            )

        response = self._client.do_parsed(
            "POST", GROUP_ENDPOINT, group, output=Response[Group]
        )
        return response.data

    def update(self, group: Group) -> Group:
        if not group.id:
            msg = "group id is required for update"
            raise ValueError(msg)
        response = self._client.do_parsed(
            "PUT", f"{GROUP_ENDPOINT}/{group.id}", group, output=Response[Group]
        )
        return response.data

    def delete(self, group_id: str) -> None:
        self._client.do_parsed("DELETE", f"{GROUP_ENDPOINT}/{group_id}")
