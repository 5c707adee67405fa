"""Tests for the grid health model helpers and HealthService."""

import pytest

from storagegrid_sdk.services.health import Alarms, Alerts, Health, HealthService, Nodes
from storagegrid_sdk.testing import MockHTTPClient

# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


def test_get_decodes_hyphenated_keys():
    mock = MockHTTPClient()
    mock.add(
        "GET",
        "/grid/health",
        {
            "alarms": {"critical": 0, "major": 1, "minor": 0, "notice": 2},
            "alerts": {"critical": 0, "major": 0, "minor": 3},
            "nodes": {"connected": 5, "administratively-down": 1, "unknown": 0},
        },
    )

    health = HealthService(mock).get()

    assert health.nodes.administratively_down == 1
    assert health.alarms.notice == 2
    assert mock.calls[0].path == "/grid/health"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def test_empty_health_is_green():
    """Missing sections count as zero."""
    health = Health()

    assert health.no_alarms()
    assert health.no_alerts()
    assert health.all_connected()
    assert health.all_green()
    assert health.operative(max_unavailable=0)


def test_all_green():
    health = Health(
        alarms=Alarms(critical=0, major=0, minor=0, notice=0),
        alerts=Alerts(critical=0, major=0, minor=0),
        nodes=Nodes(connected=5, administratively_down=0, unknown=0),
    )

    assert health.all_green()


@pytest.mark.parametrize(
    "health",
    [
        Health(alarms=Alarms(notice=1)),
        Health(alerts=Alerts(minor=1)),
        Health(nodes=Nodes(connected=4, unknown=1)),
        Health(nodes=Nodes(connected=4, administratively_down=1)),
    ],
    ids=["alarm", "alert", "unknown-node", "down-node"],
)
def test_not_green(health):
    assert not health.all_green()


def test_operative_tolerates_minor_alerts():
    assert Health(alerts=Alerts(critical=0, major=0, minor=4)).operative(0)


def test_operative_fails_on_major_alert():
    assert not Health(alerts=Alerts(major=1)).operative(10)


@pytest.mark.parametrize(
    ("down", "unknown", "max_unavailable", "expected"),
    [
        (0, 0, 0, True),
        (1, 0, 1, True),
        (1, 1, 1, False),
        (1, 1, 2, True),
        (None, 3, 2, False),
    ],
)
def test_operative_counts_unavailable_nodes(down, unknown, max_unavailable, expected):
    nodes = Nodes(connected=3, administratively_down=down, unknown=unknown)
    health = Health(nodes=nodes)

    assert health.operative(max_unavailable) is expected
