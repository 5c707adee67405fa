"""Resource services for the StorageGRID management API.

Each module holds the pydantic models of one resource kind, a Protocol
listing its operations and the HTTP-backed service implementing it. Every
service is a thin adapter over :class:`HTTPClient`.
"""

from .access_keys import AccessKey, AccessKeyService, AccessKeyServiceProtocol
from .base import HTTPClient
from .buckets import Bucket, BucketService, BucketServiceProtocol, DeleteObjectStatus
from .gateway import (
    GatewayConfig,
    GatewayConfigService,
    GatewayConfigServiceProtocol,
    ServerConfig,
)
from .groups import Group, GroupService, GroupServiceProtocol
from .ha_groups import HAGroup, HAGroupService, HAGroupServiceProtocol
from .health import Health, HealthService, HealthServiceProtocol
from .regions import RegionService, RegionServiceProtocol
from .tenants import Tenant, TenantService, TenantServiceProtocol
from .traffic_classes import (
    Policy,
    TrafficClass,
    TrafficClassService,
    TrafficClassServiceProtocol,
)
from .usage import BucketStats, TenantUsage
from .users import User, UserService, UserServiceProtocol

__all__ = [
    "AccessKey",
    "AccessKeyService",
    "AccessKeyServiceProtocol",
    "Bucket",
    "BucketService",
    "BucketServiceProtocol",
    "BucketStats",
    "DeleteObjectStatus",
    "GatewayConfig",
    "GatewayConfigService",
    "GatewayConfigServiceProtocol",
    "Group",
    "GroupService",
    "GroupServiceProtocol",
    "HAGroup",
    "HAGroupService",
    "HAGroupServiceProtocol",
    "HTTPClient",
    "Health",
    "HealthService",
    "HealthServiceProtocol",
    "Policy",
    "RegionService",
    "RegionServiceProtocol",
    "ServerConfig",
    "Tenant",
    "TenantService",
    "TenantServiceProtocol",
    "TenantUsage",
    "TrafficClass",
    "TrafficClassService",
    "TrafficClassServiceProtocol",
    "User",
    "UserService",
    "UserServiceProtocol",
]
