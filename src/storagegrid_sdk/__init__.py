"""StorageGRID SDK.

Typed client for the StorageGRID grid and tenant management REST APIs with
transparent bearer token handling.

Exports:
    GridClient: Entry point for the grid management API.
    TenantClient: Entry point for the tenant management API.
    Client: Low-level HTTP client shared by the services.
    Credentials: Login credentials.
    Response: Generic response envelope.
"""

from .client import DEFAULT_TIMEOUT, Client
from .clients import GridClient, TenantClient
from .errors import (
    APIError,
    AuthenticationError,
    ConfigurationError,
    DecodeError,
    NetworkError,
    NotFoundError,
    SerializationError,
    StorageGridError,
)
from .types import Credentials, Response

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_TIMEOUT",
    "APIError",
    "AuthenticationError",
    "Client",
    "ConfigurationError",
    "Credentials",
    "DecodeError",
    "GridClient",
    "NetworkError",
    "NotFoundError",
    "Response",
    "SerializationError",
    "StorageGridError",
    "TenantClient",
]
