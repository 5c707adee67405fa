"""Grid health service (grid management API)."""

from typing import Protocol

from pydantic import Field

from ..types import APIModel, Response
from .base import HTTPClient

HEALTH_ENDPOINT = "/grid/health"


class Alarms(APIModel):
    """Legacy alarm counts by severity."""

    critical: int | None = None
    major: int | None = None
    minor: int | None = None
    notice: int | None = None


class Alerts(APIModel):
    """Alert counts by severity."""

    critical: int | None = None
    major: int | None = None
    minor: int | None = None


class Nodes(APIModel):
    """Node counts by connection state."""

    connected: int | None = None
    administratively_down: int | None = Field(
        default=None, alias="administratively-down"
    )
    unknown: int | None = None


class Health(APIModel):
    """Summary of grid health.

    Missing sections and missing counts are treated as zero by the helper
    methods.
    """

    alarms: Alarms | None = None
    alerts: Alerts | None = None
    nodes: Nodes | None = None

    def no_alarms(self) -> bool:
        if self.alarms is None:
            return True
        alarms = self.alarms
        return not any((alarms.critical, alarms.major, alarms.minor, alarms.notice))

    def no_alerts(self) -> bool:
        if self.alerts is None:
            return True
        return not any((self.alerts.critical, self.alerts.major, self.alerts.minor))

    def all_connected(self) -> bool:
        """True if no node is administratively down or in an unknown state."""
        if self.nodes is None:
            return True
        return not (self.nodes.administratively_down or self.nodes.unknown)

    def all_green(self) -> bool:
        """True if all nodes are connected and no alerts or alarms are raised."""
        return self.all_connected() and self.no_alarms() and self.no_alerts()

    def operative(self, max_unavailable: int) -> bool:
        """Check whether the grid is operational.

        The grid counts as operational when no major alert is raised and at
        most ``max_unavailable`` nodes are administratively down or unknown.
        """
        if self.alerts is not None and self.alerts.major:
            return False

        if self.nodes is not None:
            down = self.nodes.administratively_down or 0
            if down + (self.nodes.unknown or 0) > max_unavailable:
                return False

        return True


class HealthServiceProtocol(Protocol):
    def get(self) -> Health: ...


class HealthService:
    def __init__(self, client: HTTPClient):
        self._client = client

    def get(self) -> Health:
        response = self._client.do_parsed(
            "GET", HEALTH_ENDPOINT, output=Response[Health]
        )
        return response.data
