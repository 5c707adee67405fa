"""Wire types shared by every StorageGRID endpoint.

Pydantic models for the login credentials and the response envelope that
wraps every API payload. Resource models live next to their services.
"""

from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class APIModel(BaseModel):
    """Base model mapping snake_case attributes to the API's camelCase keys.

    Models accept both the attribute name and the wire alias on input and
    are serialized by alias, without unset optional fields.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Credentials(APIModel):
    """Login credentials posted to the authorize endpoint."""

    username: str
    password: str = Field(repr=False)
    # Required when signing in to the tenant management API
    account_id: str | None = None
    cookie: bool = False
    csrf_token: bool = False


class Response(APIModel, Generic[T]):
    """Envelope wrapped around every API payload."""

    response_time: datetime | None = None
    status: str = ""
    api_version: str = ""
    deprecated: bool | None = None
    data: T


# The authorize endpoint returns the bearer token as the envelope payload
AuthorizationToken = Response[str]
