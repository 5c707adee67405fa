"""Thread-safe bearer token management.

Holds the session token obtained from the authorize endpoint and refreshes
it once it expires. Concurrent callers that find the token missing or stale
share a single login call instead of each issuing their own.
"""

import enum
import time
from collections.abc import Callable
from concurrent import futures
from dataclasses import dataclass
from datetime import timezone
from email.utils import parsedate_to_datetime
from threading import Lock

import structlog

from .errors import AuthenticationError, NetworkError

logger = structlog.get_logger(__name__)

AUTHORIZE_PATH = "/authorize"

# Endpoints that hand out tokens; requests to them never carry one.
AUTHORIZE_PATHS = frozenset({AUTHORIZE_PATH})


class SessionState(enum.Enum):
    """Authentication state of a client."""

    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"


@dataclass(frozen=True)
class Session:
    """A bearer token and the epoch second at which it stops being valid."""

    token: str
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


Login = Callable[[float | None], Session]


def _waiter_error(error: BaseException) -> Exception:
    """Copy a login failure for a caller that waited on someone else's login."""
    if isinstance(error, AuthenticationError):
        return AuthenticationError(str(error), status_code=error.status_code)
    if isinstance(error, NetworkError):
        return NetworkError(str(error))
    return AuthenticationError(f"Login failed: {error}")


def parse_expiry(value: str | None) -> float:
    """Parse an ``Expires`` header into epoch seconds.

    The API sends RFC 1123 dates such as ``Mon, 02 Jan 2006 15:04:05 GMT``.

    Args:
        value: Raw header value, or None if the header was absent.

    Returns:
        Expiry as a Unix timestamp.

    Raises:
        AuthenticationError: If the header is missing or not a valid date.
    """
    if not value:
        msg = "Login response carries no Expires header"
        raise AuthenticationError(msg)

    try:
        expires = parsedate_to_datetime(value)
    except (TypeError, ValueError) as exc:
        msg = f"Failed to parse token expiration: {value!r}"
        raise AuthenticationError(msg) from exc

    if expires.tzinfo is None:
        expires = expires.replace(tzinfo=timezone.utc)
    return expires.timestamp()


class SessionManager:
    """Owns the session token of one client.

    All reads and writes of the token go through a single lock, and the
    token and its expiry are swapped together as one immutable
    :class:`Session`, so no caller ever sees a token paired with the wrong
    expiry.

    The login itself runs outside the lock. The first caller to find the
    token missing or expired performs it; callers arriving while it is in
    flight block on its outcome, for at most their own timeout, and either
    share the new token or raise a copy of the same error chained to it.
    """

    def __init__(self, login: Login):
        """Initialize the manager.

        Args:
            login: Performs the login round trip and returns the new session.
                Receives the timeout of the request that triggered it.
        """
        self._login = login
        self._lock = Lock()
        self._session: Session | None = None
        self._pending: futures.Future[Session] | None = None

    @property
    def state(self) -> SessionState:
        with self._lock:
            if self._pending is not None:
                return SessionState.AUTHENTICATING
            if self._session is not None and not self._session.is_expired(time.time()):
                return SessionState.AUTHENTICATED
            return SessionState.UNAUTHENTICATED

    @property
    def session(self) -> Session | None:
        """The current session, expired or not, or None before the first login."""
        with self._lock:
            return self._session

    def authorization_header(
        self,
        path: str,
        timeout: float | None = None,
    ) -> dict[str, str]:
        """Build the headers that authenticate a request to ``path``.

        Args:
            path: API path of the outgoing request.
            timeout: Timeout for a login this call may have to perform.

        Returns:
            An ``Authorization`` header, or no headers for the login path.
        """
        if path in AUTHORIZE_PATHS:
            return {}
        session = self.ensure_session(timeout)
        return {"Authorization": f"Bearer {session.token}"}

    def ensure_session(self, timeout: float | None = None) -> Session:
        """Return a valid session, logging in first if needed.

        Raises:
            AuthenticationError: If the login fails.
            NetworkError: If the login cannot be sent, or if another
                caller's login is still in flight after ``timeout`` seconds.
        """
        with self._lock:
            session = self._session
            if session is not None and not session.is_expired(time.time()):
                return session

            pending = self._pending
            leader = pending is None
            if pending is None:
                pending = self._pending = futures.Future()

        if not leader:
            return self._wait_for_login(pending, timeout)
        return self._authenticate(pending, timeout)

    def _wait_for_login(
        self,
        pending: "futures.Future[Session]",
        timeout: float | None,
    ) -> Session:
        logger.debug("Waiting for in-flight login", timeout=timeout)
        try:
            error = pending.exception(timeout)
        except futures.TimeoutError as exc:
            msg = f"Timed out after {timeout}s waiting for in-flight login"
            raise NetworkError(msg) from exc

        # Each waiter raises its own instance; the shared one stays untouched.
        if error is not None:
            raise _waiter_error(error) from error
        return pending.result()

    def _authenticate(
        self,
        pending: "futures.Future[Session]",
        timeout: float | None,
    ) -> Session:
        start_time = time.time()
        try:
            session = self._login(timeout)
        except BaseException as exc:
            with self._lock:
                self._pending = None
            pending.set_exception(exc)
            logger.warning("Login failed", error=str(exc))
            raise

        with self._lock:
            self._session = session
            self._pending = None
        pending.set_result(session)

        now = time.time()
        logger.info(
            "Obtained session token",
            expires_in_seconds=int(session.expires_at - now),
            duration_seconds=round(now - start_time, 3),
        )
        return session
