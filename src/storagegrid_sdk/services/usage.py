"""Storage usage models shared by the tenant and bucket services."""

from datetime import datetime

from ..types import APIModel


class BucketStats(APIModel):
    """Usage statistics of a single bucket."""

    name: str | None = None
    object_count: int | None = None
    data_bytes: int | None = None
    # e.g. "available"
    consistency: str | None = None
    # e.g. "AES256"
    encryption: str | None = None
    versioning_enabled: bool | None = None
    versioning_suspended: bool | None = None
    region: str | None = None


class TenantUsage(APIModel):
    """Usage statistics of a tenant account."""

    calculation_time: datetime | None = None
    object_count: int | None = None
    data_bytes: int | None = None
    buckets: list[BucketStats] = []
