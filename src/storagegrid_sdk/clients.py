"""Grid and tenant entry points.

Both facades own one :class:`Client` and hand it to the services of their
API, so all services of a facade share one session token.
"""

import httpx
import structlog

from .client import DEFAULT_TIMEOUT, Client
from .config import ClientConfig
from .services import (
    AccessKeyService,
    BucketService,
    GatewayConfigService,
    GroupService,
    HAGroupService,
    HealthService,
    RegionService,
    TenantService,
    TrafficClassService,
    UserService,
)
from .types import Credentials

logger = structlog.get_logger(__name__)


class _Facade:
    def __init__(
        self,
        endpoint: str | None,
        credentials: Credentials | None = None,
        skip_ssl: bool = False,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ):
        self.client = Client(
            endpoint=endpoint,
            credentials=credentials,
            skip_ssl=skip_ssl,
            timeout=timeout,
            transport=transport,
        )
        logger.info(
            "Created client",
            api=type(self).__name__,
            base_url=self.client.base_url,
            skip_ssl=skip_ssl,
        )

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        transport: httpx.BaseTransport | None = None,
    ):
        """Construct the facade from validated configuration."""
        return cls(
            endpoint=config.endpoint,
            credentials=config.credentials,
            skip_ssl=config.skip_ssl,
            timeout=config.timeout,
            transport=transport,
        )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        self.client.close()


class GridClient(_Facade):
    """Client for the grid management API (administrator scope)."""

    def __init__(
        self,
        endpoint: str | None,
        credentials: Credentials | None = None,
        skip_ssl: bool = False,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ):
        super().__init__(endpoint, credentials, skip_ssl, timeout, transport)
        self.tenants = TenantService(self.client)
        self.health = HealthService(self.client)
        self.regions = RegionService.for_grid(self.client)
        self.ha_groups = HAGroupService(self.client)
        self.gateway = GatewayConfigService(self.client)
        self.traffic_classes = TrafficClassService(self.client)


class TenantClient(_Facade):
    """Client for the tenant management API.

    The credentials must name the tenant's ``account_id``.
    """

    def __init__(
        self,
        endpoint: str | None,
        credentials: Credentials | None = None,
        skip_ssl: bool = False,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ):
        super().__init__(endpoint, credentials, skip_ssl, timeout, transport)
        self.buckets = BucketService(self.client)
        self.access_keys = AccessKeyService(self.client)
        self.users = UserService(self.client)
        self.groups = GroupService(self.client)
        self.regions = RegionService.for_tenant(self.client)
