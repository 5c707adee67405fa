"""Exception hierarchy for the StorageGRID client.

Every error raised by the client derives from :class:`StorageGridError` so
callers can catch the whole family at once, or branch on the specific kind
(for example to tell a server rejection apart from an unexpected payload).
"""


class StorageGridError(Exception):
    """Base error for StorageGRID client failures."""


class ConfigurationError(StorageGridError, ValueError):
    """Raised when the client is constructed with an unusable configuration."""


class SerializationError(StorageGridError):
    """Raised when a request body cannot be encoded as JSON."""


class NetworkError(StorageGridError):
    """Raised when the HTTP transport fails (DNS, connect, TLS, timeout)."""


class AuthenticationError(StorageGridError):
    """Raised when a session token cannot be obtained."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class APIError(StorageGridError):
    """Raised when the API answers with a status code outside 2xx.

    The response body is kept verbatim in ``body`` but is not parsed.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        reason: str = "",
        body: str = "",
    ):
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason
        self.body = body


class DecodeError(StorageGridError):
    """Raised when a successful response does not match the expected shape."""


class NotFoundError(StorageGridError, LookupError):
    """Raised when a client-side lookup finds no matching resource."""
