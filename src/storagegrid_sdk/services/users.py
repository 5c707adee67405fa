"""Tenant user service (tenant management API)."""

from typing import Protocol

from pydantic import Field

from ..types import APIModel, Response
from .base import HTTPClient

USER_ENDPOINT = "/org/users"
USER_PREFIX = "user/"


class User(APIModel):
    """A local or federated tenant user."""

    # "user/<name>" or "federated-user/<name>", unique within the account
    unique_name: str
    full_name: str | None = None
    # Group ids the user belongs to
    member_of: list[str] | None = None
    # Local users only
    disable: bool | None = None
    account_id: str | None = None
    id: str | None = None
    federated: bool | None = None
    user_urn: str | None = Field(default=None, alias="userURN")

    @property
    def short_name(self) -> str:
        """The sign-in name, i.e. the part of ``unique_name`` after the slash."""
        return self.unique_name.rsplit("/", 1)[-1]


class UserServiceProtocol(Protocol):
    def get_by_id(self, user_id: str) -> User: ...

    def get_by_name(self, name: str) -> User: ...

    def create(self, user: User) -> User: ...

    def update(self, user: User) -> User: ...

    def delete(self, user_id: str) -> None: ...

    def set_password(self, user_id: str, password: str) -> None: ...

    def list(self) -> list[User]: ...


class UserService:
    """Manage the users of the signed-in tenant."""

    def __init__(self, client: HTTPClient):
        self._client = client

    def list(self) -> list[User]:
        response = self._client.do_parsed(
            "GET", USER_ENDPOINT, output=Response[list[User]]
        )
        return response.data

    def get_by_id(self, user_id: str) -> User:
        response = self._client.do_parsed(
            "GET", f"{USER_ENDPOINT}/{user_id}", output=Response[User]
        )
        return response.data

    def get_by_name(self, name: str) -> User:
        """Look a local user up by sign-in name (without the user/ prefix)."""
        response = self._client.do_parsed(
            "GET", f"{USER_ENDPOINT}/user/{name}", output=Response[User]
        )
        return response.data

    def create(self, user: User) -> User:
        """Create a local user, adding the user/ prefix to its unique name."""
        if not user.unique_name.startswith(USER_PREFIX):
            user = user.model_copy(
                update={"unique_name": USER_PREFIX + user.unique_name}
            )

        response = self._client.do_parsed(
            "POST", USER_ENDPOINT, user, output=Response[User]
        )
        return response.data

    def update(self, user: User) -> User:
        if not user.id:
            msg = "user id is required for update"
            raise ValueError(msg)
        response = self._client.do_parsed(
            "PUT", f"{USER_ENDPOINT}/{user.id}", user, output=Response[User]
        )
        return response.data

    def delete(self, user_id: str) -> None:
        self._client.do_parsed("DELETE", f"{USER_ENDPOINT}/{user_id}")

    def set_password(self, user_id: str, password: str) -> None:
        self._client.do_parsed(
            "POST",
            f"{USER_ENDPOINT}/{user_id}/change-password",
            {"password": password},
        )
