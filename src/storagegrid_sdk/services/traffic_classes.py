"""Traffic classification policy service (grid management API)."""

import enum
from typing import Protocol

from ..types import APIModel, Response
from .base import HTTPClient

POLICY_ENDPOINT = "/grid/traffic-classes/policies"


class LimitType(str, enum.Enum):
    AGGREGATE_BANDWIDTH_IN = "aggregateBandwidthIn"
    AGGREGATE_BANDWIDTH_OUT = "aggregateBandwidthOut"
    CONCURRENT_READ_REQUESTS = "concurrentReadRequests"
    CONCURRENT_WRITE_REQUESTS = "concurrentWriteRequests"
    READ_REQUEST_RATE = "readRequestRate"
    WRITE_REQUEST_RATE = "writeRequestRate"
    PER_REQUEST_BANDWIDTH_IN = "perRequestBandwidthIn"
    PER_REQUEST_BANDWIDTH_OUT = "perRequestBandwidthOut"


class TrafficClass(APIModel):
    """Summary entry returned when listing policies."""

    id: str
    name: str
    description: str | None = None


class Matcher(APIModel):
    """Selects the traffic a policy applies to, e.g. by bucket or tenant."""

    type: str
    inverse: bool | None = None
    members: list[str] = []


class Limit(APIModel):
    type: LimitType
    value: int


class Policy(APIModel):
    """A traffic classification policy with its matchers and limits."""

    id: str = ""
    name: str
    description: str | None = None
    matchers: list[Matcher] = []
    limits: list[Limit] = []


class TrafficClassServiceProtocol(Protocol):
    def get_policy_by_id(self, policy_id: str) -> Policy: ...

    def create_policy(self, policy: Policy) -> Policy: ...

    def update_policy(self, policy: Policy) -> Policy: ...

    def delete_policy(self, policy_id: str) -> None: ...

    def list(self) -> list[TrafficClass]: ...


class TrafficClassService:
    """Manage traffic classification policies."""

    def __init__(self, client: HTTPClient):
        self._client = client

    def list(self) -> list[TrafficClass]:
        response = self._client.do_parsed(
            "GET", POLICY_ENDPOINT, output=Response[list[TrafficClass]]
        )
        return response.data

    def get_policy_by_id(self, policy_id: str) -> Policy:
        response = self._client.do_parsed(
            "GET", f"{POLICY_ENDPOINT}/{policy_id}", output=Response[Policy]
        )
        return response.data

    def create_policy(self, policy: Policy) -> Policy:
        response = self._client.do_parsed(
            "POST", POLICY_ENDPOINT, policy, output=Response[Policy]
        )
        return response.data

    def update_policy(self, policy: Policy) -> Policy:
        if not policy.id:
            msg = "policy id is required for update"
            raise ValueError(msg)
        response = self._client.do_parsed(
            "PUT", f"{POLICY_ENDPOINT}/{policy.id}", policy, output=Response[Policy]
        )
        return response.data

    def delete_policy(self, policy_id: str) -> None:
        self._client.do_parsed("DELETE", f"{POLICY_ENDPOINT}/{policy_id}")
