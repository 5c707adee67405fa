"""S3 access key service (tenant management API)."""

from datetime import datetime
from typing import Protocol

from pydantic import Field

from ..types import APIModel, Response
from .base import HTTPClient

CURRENT_USER_ENDPOINT = "/org/users/current-user/s3-access-keys"
USER_ENDPOINT = "/org/users/{user_id}/s3-access-keys"


def _user_endpoint(user_id: str) -> str:
    return USER_ENDPOINT.format(user_id=user_id)


class AccessKey(APIModel):
    """An S3 credential pair and the user/account it belongs to.

    ``access_key`` and ``secret_access_key`` are only returned by the
    create call. ``expires`` of None means the key never expires.
    """

    id: str | None = None
    account_id: str | None = None
    # Obfuscated access key
    display_name: str | None = None
    user_urn: str | None = Field(default=None, alias="userURN")
    user_uuid: str | None = Field(default=None, alias="userUUID")
    expires: datetime | None = None
    access_key: str | None = None
    secret_access_key: str | None = Field(default=None, repr=False)


class AccessKeyServiceProtocol(Protocol):
    def list_for_current_user(self) -> list[AccessKey]: ...

    def list_for_user(self, user_id: str) -> list[AccessKey]: ...

    def get_by_id_for_current_user(self, key_id: str) -> AccessKey: ...

    def get_by_id_for_user(self, user_id: str, key_id: str) -> AccessKey: ...

    def create_for_current_user(self, access_key: AccessKey) -> AccessKey: ...

    def create_for_user(self, user_id: str, access_key: AccessKey) -> AccessKey: ...

    def delete_for_current_user(self, key_id: str) -> None: ...

    def delete_for_user(self, user_id: str, key_id: str) -> None: ...


class AccessKeyService:
    """Manage S3 access keys of the signed-in user or of any tenant user."""

    def __init__(self, client: HTTPClient):
        self._client = client

    def list_for_current_user(self) -> list[AccessKey]:
        response = self._client.do_parsed(
            "GET", CURRENT_USER_ENDPOINT, output=Response[list[AccessKey]]
        )
        return response.data

    def list_for_user(self, user_id: str) -> list[AccessKey]:
        response = self._client.do_parsed(
            "GET", _user_endpoint(user_id), output=Response[list[AccessKey]]
        )
        return response.data

    def get_by_id_for_current_user(self, key_id: str) -> AccessKey:
        response = self._client.do_parsed(
            "GET", f"{CURRENT_USER_ENDPOINT}/{key_id}", output=Response[AccessKey]
        )
        return response.data

    def get_by_id_for_user(self, user_id: str, key_id: str) -> AccessKey:
        response = self._client.do_parsed(
            "GET", f"{_user_endpoint(user_id)}/{key_id}", output=Response[AccessKey]
        )
        return response.data

    def create_for_current_user(self, access_key: AccessKey) -> AccessKey:
        response = self._client.do_parsed(
            "POST", CURRENT_USER_ENDPOINT, access_key, output=Response[AccessKey]
        )
        return response.data

    def create_for_user(self, user_id: str, access_key: AccessKey) -> AccessKey:
        response = self._client.do_parsed(
            "POST", _user_endpoint(user_id), access_key, output=Response[AccessKey]
        )
        return response.data

    def delete_for_current_user(self, key_id: str) -> None:
        self._client.do_parsed("DELETE", f"{CURRENT_USER_ENDPOINT}/{key_id}")

    def delete_for_user(self, user_id: str, key_id: str) -> None:
        self._client.do_parsed("DELETE", f"{_user_endpoint(user_id)}/{key_id}")
