"""StorageGRID REST API client.

Provides the HTTP transport shared by every resource service: endpoint
normalization, JSON request encoding, bearer authentication through the
session manager, status checking and typed decoding of the response
envelope.
"""

import threading
import time
from typing import Any, TypeVar, overload

import httpx
import pydantic
import structlog

from .errors import (
    APIError,
    AuthenticationError,
    ConfigurationError,
    DecodeError,
    NetworkError,
    SerializationError,
)
from .session import AUTHORIZE_PATH, Session, SessionManager, parse_expiry
from .types import AuthorizationToken, Credentials

logger = structlog.get_logger(__name__)

# Root of both the grid and the tenant management API.
API_PATH = "api/v4"

DEFAULT_TIMEOUT = 30.0

M = TypeVar("M", bound=pydantic.BaseModel)

_ANY_ADAPTER = pydantic.TypeAdapter(Any)


def normalize_endpoint(endpoint: str) -> str:
    """Give an endpoint an explicit scheme and a trailing slash.

    ``"example.com"`` becomes ``"https://example.com/"``.
    """
    if not endpoint.startswith(("https://", "http://")):
        endpoint = "https://" + endpoint
    if not endpoint.endswith("/"):
        endpoint += "/"
    return endpoint


def encode_body(body: Any) -> bytes:
    """Encode a request body as JSON.

    Pydantic models are dumped by alias and without unset optional fields,
    including models nested in plain lists and dicts. Non-finite floats are
    sent as null.

    Raises:
        SerializationError: If the body cannot be represented as JSON.
    """
    try:
        if isinstance(body, pydantic.BaseModel):
            return body.model_dump_json(by_alias=True, exclude_none=True).encode()
        return _ANY_ADAPTER.dump_json(body, by_alias=True, exclude_none=True)
    except (TypeError, ValueError) as exc:
        msg = f"Failed to encode request body: {exc}"
        raise SerializationError(msg) from exc


def decode_response(response: httpx.Response, output: type[M]) -> M:
    """Validate a response body into ``output``.

    Raises:
        DecodeError: If the body is not JSON or does not match the model.
    """
    try:
        return output.model_validate_json(response.content)
    except pydantic.ValidationError as exc:
        msg = f"Failed to parse response: {exc}"
        raise DecodeError(msg) from exc


class Client:
    """HTTP client for the StorageGRID management API.

    Executes single request/response round trips on behalf of the resource
    services. Requests other than the login itself carry a bearer token that
    the client obtains lazily with the configured credentials and refreshes
    once the server-provided expiry has passed.

    Thread-safe: the session token is guarded by :class:`SessionManager`
    and each thread gets its own httpx.Client. Can be used as a context
    manager for automatic cleanup.
    """

    def __init__(
        self,
        endpoint: str | None,
        credentials: Credentials | None = None,
        skip_ssl: bool = False,
        timeout: float = DEFAULT_TIMEOUT,
        api_path: str = API_PATH,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize the client.

        No network activity happens here; the first login is deferred to
        the first authenticated request.

        Args:
            endpoint: Address of the admin node, e.g. "grid.example.com" or
                "https://10.0.0.1:8443". Defaults to https when no scheme
                is given.
            credentials: Credentials used to obtain session tokens.
            skip_ssl: Disable TLS certificate verification.
            timeout: Default request timeout in seconds (default: 30.0).
            api_path: API root appended to the endpoint (default: api/v4).
            transport: Optional httpx transport, e.g. httpx.MockTransport.

        Raises:
            ConfigurationError: If endpoint is empty or timeout is not
                positive.
        """
        if not endpoint:
            msg = "No endpoint set"
            raise ConfigurationError(msg)
        if timeout <= 0:
            msg = "timeout must be positive"
            raise ConfigurationError(msg)

        self.base_url = normalize_endpoint(endpoint)
        self.skip_ssl = skip_ssl
        self._api_url = str(httpx.URL(self.base_url).join(api_path))
        self._credentials = credentials
        self._timeout = timeout
        self._transport = transport
        self._headers = {"Accept": "application/json"}

        self.session = SessionManager(self._login)

        # Use thread-local storage for httpx.Client (thread safety)
        self._local = threading.local()

    @property
    def http(self) -> httpx.Client:
        """Get or create the thread-local httpx client."""
        if not hasattr(self._local, "client") or self._local.client.is_closed:
            self._local.client = httpx.Client(
                headers=self._headers,
                timeout=self._timeout,
                verify=not self.skip_ssl,
                transport=self._transport,
            )
        return self._local.client

    def __enter__(self):
        """Enter context manager."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit context manager and cleanup resources."""
        self.close()

    def close(self):
        """Close the thread-local HTTP client if open."""
        if hasattr(self._local, "client") and not self._local.client.is_closed:
            self._local.client.close()

    def url_for(self, path: str) -> str:
        """Resolve an API path such as "/grid/accounts" to a full URL."""
        return self._api_url + path

    def authorize(self, timeout: float | None = None) -> Session:
        """Log in now unless a valid session token is already held."""
        return self.session.ensure_session(timeout)

    def _login(self, timeout: float | None) -> Session:
        if self._credentials is None:
            msg = "No credentials configured"
            raise AuthenticationError(msg)

        try:
            response = self.do_raw(
                "POST", AUTHORIZE_PATH, self._credentials, timeout=timeout
            )
        except APIError as exc:
            msg = f"Login failed: {exc}"
            raise AuthenticationError(msg, status_code=exc.status_code) from exc

        try:
            token = decode_response(response, AuthorizationToken).data
        except DecodeError as exc:
            msg = f"Login returned an unexpected body: {exc}"
            raise AuthenticationError(msg) from exc

        expires_at = parse_expiry(response.headers.get("Expires"))
        return Session(token=token, expires_at=expires_at)

    def do_raw(
        self,
        method: str,
        path: str,
        body: Any = None,
        *,
        timeout: float | None = None,
    ) -> httpx.Response:
        """Execute one request and return the successful raw response.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE).
            path: API path (e.g., "/grid/accounts").
            body: Optional request body, encoded as JSON.
            timeout: Timeout override in seconds for this call, covering a
                login the call may trigger as well.

        Returns:
            The httpx response, status already checked.

        Raises:
            SerializationError: If the body cannot be encoded.
            AuthenticationError: If a session token cannot be obtained.
            NetworkError: If the HTTP transport fails.
            APIError: If the response status is outside 2xx.
        """
        content = encode_body(body) if body is not None else None
        headers: dict[str, str] = {}
        if content is not None:
            headers["Content-Type"] = "application/json"
        headers.update(self.session.authorization_header(path, timeout))

        request_kwargs: dict[str, Any] = {}
        if timeout is not None:
            request_kwargs["timeout"] = timeout

        start_time = time.time()
        try:
            logger.debug("Making API request", method=method, path=path)
            response = self.http.request(
                method,
                self.url_for(path),
                content=content,
                headers=headers,
                **request_kwargs,
            )
        except httpx.HTTPError as exc:
            duration = time.time() - start_time
            logger.exception(
                "API request failed",
                method=method,
                path=path,
                duration_seconds=round(duration, 3),
            )
            msg = f"Failed to send {method} {path}: {exc}"
            raise NetworkError(msg) from exc

        duration = time.time() - start_time
        logger.debug(
            "API request completed",
            method=method,
            path=path,
            status_code=response.status_code,
            duration_seconds=round(duration, 3),
        )

        if not response.is_success:
            logger.error(
                "API error response",
                method=method,
                path=path,
                status_code=response.status_code,
            )
            msg = (
                f"API error: {response.status_code} {response.reason_phrase} "
                f"(code: {response.status_code})"
            )
            raise APIError(
                msg,
                status_code=response.status_code,
                reason=response.reason_phrase,
                body=response.text,
            )
        return response

    @overload
    def do_parsed(
        self,
        method: str,
        path: str,
        body: Any = ...,
        output: None = ...,
        *,
        timeout: float | None = ...,
    ) -> None: ...

    @overload
    def do_parsed(
        self,
        method: str,
        path: str,
        body: Any = ...,
        output: type[M] = ...,
        *,
        timeout: float | None = ...,
    ) -> M: ...

    def do_parsed(
        self,
        method: str,
        path: str,
        body: Any = None,
        output: type[M] | None = None,
        *,
        timeout: float | None = None,
    ) -> M | None:
        """Execute one request and decode the body into ``output``.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE).
            path: API path (e.g., "/grid/accounts").
            body: Optional request body, encoded as JSON.
            output: Model to validate the response into, typically a
                ``Response[...]`` envelope. None skips decoding.
            timeout: Timeout override in seconds for this call.

        Returns:
            The validated model, or None when no output was requested.

        Raises:
            DecodeError: If the body does not match ``output``.
            StorageGridError: Any error raised by :meth:`do_raw`.
        """
        response = self.do_raw(method, path, body, timeout=timeout)
        if output is None:
            return None
        return decode_response(response, output)
