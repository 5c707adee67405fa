"""Tests for SessionManager and Expires parsing.

Covers the login decision (missing, valid and expired tokens), the state
reported while a login is in flight, single-flight behaviour under
concurrent callers for both successful and failing logins, and the
exemption of the authorize path from the Authorization header.
"""

import threading
import time
from unittest.mock import MagicMock, patch

import pytest

from storagegrid_sdk import session
from storagegrid_sdk.errors import AuthenticationError, NetworkError
from storagegrid_sdk.session import Session, SessionManager, SessionState

# Mon, 02 Jan 2006 15:04:05 GMT
REFERENCE_EXPIRY = 1136214245.0


def wait_for(predicate, timeout=5.0):
    deadline = time.monotonic() + timeout
    while not predicate():
        if time.monotonic() > deadline:
            msg = "condition not reached"
            raise AssertionError(msg)
        time.sleep(0.005)


# ---------------------------------------------------------------------------
# parse_expiry
# ---------------------------------------------------------------------------


def test_parse_expiry_rfc1123():
    """The RFC 1123 form sent by the API parses to the exact epoch second."""
    assert session.parse_expiry("Mon, 02 Jan 2006 15:04:05 GMT") == REFERENCE_EXPIRY


def test_parse_expiry_numeric_offset():
    """An explicit +0000 offset is the same instant as GMT."""
    assert session.parse_expiry("Mon, 02 Jan 2006 15:04:05 +0000") == REFERENCE_EXPIRY


def test_parse_expiry_other_timezone():
    """Offsets other than UTC are converted."""
    assert session.parse_expiry("Mon, 02 Jan 2006 17:04:05 +0200") == REFERENCE_EXPIRY


@pytest.mark.parametrize("value", [None, ""])
def test_parse_expiry_missing(value):
    """A missing Expires header is an authentication failure."""
    with pytest.raises(AuthenticationError, match="no Expires header"):
        session.parse_expiry(value)


@pytest.mark.parametrize("value", ["tomorrow", "2006-01-02", "Mon, 99 Foo 2006"])
def test_parse_expiry_invalid(value):
    """Unparseable dates are reported with the offending value."""
    with pytest.raises(AuthenticationError, match="Failed to parse token expiration"):
        session.parse_expiry(value)


def test_session_expired_at_exact_expiry():
    """A token is no longer valid at its expiry instant."""
    s = Session(token="t", expires_at=100.0)

    assert not s.is_expired(99.999)
    assert s.is_expired(100.0)
    assert s.is_expired(101.0)


# ---------------------------------------------------------------------------
# Login decision
# ---------------------------------------------------------------------------


def test_authorize_path_never_logs_in():
    """The login endpoint gets no Authorization header and triggers no login."""
    login = MagicMock()
    manager = SessionManager(login)

    assert manager.authorization_header("/authorize") == {}
    login.assert_not_called()
    assert manager.state is SessionState.UNAUTHENTICATED


def test_first_request_logs_in():
    """With no token held, the first request logs in and uses the new token."""
    login = MagicMock(return_value=Session("abc", time.time() + 3600))
    manager = SessionManager(login)

    headers = manager.authorization_header("/grid/accounts", timeout=5.0)

    assert headers == {"Authorization": "Bearer abc"}
    login.assert_called_once_with(5.0)
    assert manager.state is SessionState.AUTHENTICATED


def test_valid_token_is_reused():
    """A token that has not expired is reused without another login."""
    login = MagicMock(return_value=Session("abc", time.time() + 3600))
    manager = SessionManager(login)

    for _ in range(5):
        manager.authorization_header("/grid/health")

    login.assert_called_once()


@patch("storagegrid_sdk.session.time")
def test_expired_token_triggers_single_relogin(mock_time):
    """Once the expiry has passed exactly one new login happens."""
    login = MagicMock(
        side_effect=[
            Session("first", REFERENCE_EXPIRY),
            Session("second", REFERENCE_EXPIRY + 3600),
        ]
    )
    manager = SessionManager(login)

    mock_time.time.return_value = REFERENCE_EXPIRY - 3600
    assert manager.authorization_header("/x") == {"Authorization": "Bearer first"}

    mock_time.time.return_value = REFERENCE_EXPIRY - 1
    assert manager.authorization_header("/x") == {"Authorization": "Bearer first"}
    login.assert_called_once()

    mock_time.time.return_value = REFERENCE_EXPIRY + 1
    assert manager.authorization_header("/x") == {"Authorization": "Bearer second"}
    assert manager.authorization_header("/x") == {"Authorization": "Bearer second"}
    assert login.call_count == 2


@patch("storagegrid_sdk.session.time")
def test_state_follows_expiry(mock_time):
    """The reported state drops back to unauthenticated once the token expires."""
    manager = SessionManager(MagicMock(return_value=Session("t", 200.0)))
    mock_time.time.return_value = 100.0

    assert manager.state is SessionState.UNAUTHENTICATED
    manager.ensure_session()
    assert manager.state is SessionState.AUTHENTICATED

    mock_time.time.return_value = 200.0
    assert manager.state is SessionState.UNAUTHENTICATED
    assert manager.session == Session("t", 200.0)


def test_failed_login_keeps_previous_session():
    """A failing refresh neither clears nor replaces the stale session."""
    stale = Session("old", time.time() - 10)
    login = MagicMock(side_effect=[stale, AuthenticationError("denied", 401)])
    manager = SessionManager(login)

    manager.ensure_session()
    with pytest.raises(AuthenticationError, match="denied"):
        manager.ensure_session()

    assert manager.session is stale
    assert manager.state is SessionState.UNAUTHENTICATED


def test_failed_login_is_retried_by_next_call():
    """A failed login is not cached; the next request tries again."""
    login = MagicMock(
        side_effect=[AuthenticationError("denied"), Session("ok", time.time() + 60)]
    )
    manager = SessionManager(login)

    with pytest.raises(AuthenticationError):
        manager.ensure_session()
    assert manager.ensure_session().token == "ok"
    assert login.call_count == 2


# ---------------------------------------------------------------------------
# Concurrency
# ---------------------------------------------------------------------------


def test_concurrent_callers_share_one_login():
    """Threads racing on an empty session produce a single login and one token."""
    thread_count = 20
    barrier = threading.Barrier(thread_count)

    def slow_login(_timeout):
        time.sleep(0.05)
        return Session("shared", time.time() + 3600)

    login = MagicMock(side_effect=slow_login)
    manager = SessionManager(login)
    headers = []

    def worker():
        barrier.wait()
        headers.append(manager.authorization_header("/grid/health"))

    threads = [threading.Thread(target=worker) for _ in range(thread_count)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    login.assert_called_once()
    assert headers == [{"Authorization": "Bearer shared"}] * thread_count


def test_state_is_authenticating_during_login():
    """While a login is in flight the state reports it, then settles."""
    release = threading.Event()

    def blocking_login(_timeout):
        release.wait(5)
        return Session("t", time.time() + 3600)

    manager = SessionManager(blocking_login)
    leader = threading.Thread(target=manager.ensure_session)
    leader.start()

    wait_for(lambda: manager.state is SessionState.AUTHENTICATING)
    release.set()
    leader.join()

    assert manager.state is SessionState.AUTHENTICATED


def test_waiters_receive_login_failure():
    """Callers waiting on a failing login all see that login's error."""
    release = threading.Event()
    error = AuthenticationError("Login failed: 401", status_code=401)
    calls = []

    def failing_login(timeout):
        calls.append(timeout)
        release.wait(5)
        raise error

    manager = SessionManager(failing_login)
    raised = []

    def worker():
        try:
            manager.ensure_session()
        except AuthenticationError as exc:
            raised.append(exc)

    leader = threading.Thread(target=worker)
    leader.start()
    wait_for(lambda: manager.state is SessionState.AUTHENTICATING)

    waiters = [threading.Thread(target=worker) for _ in range(5)]
    for t in waiters:
        t.start()
    time.sleep(0.1)
    release.set()
    for t in [leader, *waiters]:
        t.join()

    assert len(calls) == 1
    assert len(raised) == 6
    assert sum(exc is error for exc in raised) == 1
    waiter_errors = [exc for exc in raised if exc is not error]
    assert len({id(exc) for exc in waiter_errors}) == 5
    for exc in waiter_errors:
        assert exc.__cause__ is error
        assert str(exc) == str(error)
        assert exc.status_code == 401
    assert manager.state is SessionState.UNAUTHENTICATED
    assert manager.session is None


def test_waiters_receive_network_failure():
    """A transport failure during the shared login reaches waiters as NetworkError."""
    release = threading.Event()
    error = NetworkError("Failed to send POST /authorize: connection refused")

    def failing_login(_timeout):
        release.wait(5)
        raise error

    manager = SessionManager(failing_login)
    raised = []

    def worker():
        try:
            manager.ensure_session()
        except NetworkError as exc:
            raised.append(exc)

    leader = threading.Thread(target=worker)
    leader.start()
    wait_for(lambda: manager.state is SessionState.AUTHENTICATING)
    waiter = threading.Thread(target=worker)
    waiter.start()
    time.sleep(0.1)
    release.set()
    leader.join()
    waiter.join()

    assert len(raised) == 2
    copied = [exc for exc in raised if exc is not error]
    assert len(copied) == 1
    assert copied[0].__cause__ is error
    assert str(copied[0]) == str(error)


def test_waiter_gives_up_after_its_timeout():
    """A caller waiting on another caller's login stops waiting after its timeout."""
    release = threading.Event()

    def blocking_login(_timeout):
        release.wait(5)
        return Session("late", time.time() + 3600)

    manager = SessionManager(blocking_login)
    leader = threading.Thread(target=manager.ensure_session)
    leader.start()
    wait_for(lambda: manager.state is SessionState.AUTHENTICATING)

    try:
        start = time.monotonic()
        with pytest.raises(NetworkError, match="waiting for in-flight login"):
            manager.authorization_header("/grid/health", timeout=0.1)
        elapsed = time.monotonic() - start
    finally:
        release.set()
        leader.join()

    assert elapsed < 1.0
    assert manager.ensure_session(timeout=0.1).token == "late"
