"""Bucket service (tenant management API)."""

from datetime import datetime
from typing import Protocol

from ..errors import NotFoundError
from ..types import APIModel, Response
from .base import HTTPClient
from .usage import BucketStats, TenantUsage

BUCKET_ENDPOINT = "/org/containers"
TENANT_USAGE_ENDPOINT = "/org/usage"


class DefaultRetentionSettings(APIModel):
    """Default S3 Object Lock retention applied to new objects.

    ``days`` or ``years`` must be paired with ``mode``.
    """

    mode: str = "compliance"
    days: int | None = None
    years: int | None = None


class S3ObjectLockSettings(APIModel):
    """S3 Object Lock settings. Cannot be combined with legacy compliance."""

    enabled: bool | None = None
    default_retention_setting: DefaultRetentionSettings | None = None


class ComplianceSettings(APIModel):
    """Legacy compliance settings."""

    auto_delete: bool | None = None
    legal_hold: bool | None = None
    retention_period_minutes: int | None = None


class DeleteObjectStatus(APIModel):
    """Progress of a bucket drain."""

    is_deleting_objects: bool | None = None
    initial_object_count: int | None = None
    initial_object_bytes: int | None = None


class Bucket(APIModel):
    """An S3 bucket.

    ``name`` must be unique across the grid and DNS compliant; ``region``
    defaults to us-east-1 on the server when omitted.
    """

    name: str
    region: str | None = None
    enable_versioning: bool | None = None
    s3_object_lock: S3ObjectLockSettings | None = None
    creation_time: datetime | None = None
    compliance: ComplianceSettings | None = None
    delete_object_status: DeleteObjectStatus | None = None


class BucketServiceProtocol(Protocol):
    def get_by_name(self, name: str) -> Bucket: ...

    def create(self, bucket: Bucket) -> Bucket: ...

    def get_usage(self, name: str) -> BucketStats: ...

    def delete(self, name: str) -> None: ...

    def drain(self, name: str) -> DeleteObjectStatus: ...

    def drain_status(self, name: str) -> DeleteObjectStatus: ...

    def list(self) -> list[Bucket]: ...


class BucketService:
    """Manage the buckets of the signed-in tenant."""

    def __init__(self, client: HTTPClient):
        self._client = client

    def list(self) -> list[Bucket]:
        response = self._client.do_parsed(
            "GET", BUCKET_ENDPOINT, output=Response[list[Bucket]]
        )
        return response.data

    def get_by_name(self, name: str) -> Bucket:
        """Find a bucket by name.

        The API has no single-bucket endpoint, so this lists all buckets
        and filters client-side.

        Raises:
            NotFoundError: If no bucket has that name.
        """
        for bucket in self.list():
            if bucket.name == name:
                return bucket

        msg = f"bucket with name {name} not found"
        raise NotFoundError(msg)

    def create(self, bucket: Bucket) -> Bucket:
        response = self._client.do_parsed(
            "POST", BUCKET_ENDPOINT, bucket, output=Response[Bucket]
        )
        return response.data

    def get_usage(self, name: str) -> BucketStats:
        """Return the usage of one bucket from the tenant usage report.

        Raises:
            NotFoundError: If the report has no entry for that bucket.
        """
        response = self._client.do_parsed(
            "GET", TENANT_USAGE_ENDPOINT, output=Response[TenantUsage]
        )
        for stats in response.data.buckets:
            if stats.name == name:
                return stats

        msg = f"usage for bucket with name {name} not found"
        raise NotFoundError(msg)

    def delete(self, name: str) -> None:
        self._client.do_parsed("DELETE", f"{BUCKET_ENDPOINT}/{name}")

    def drain(self, name: str) -> DeleteObjectStatus:
        """Delete every object in the bucket, keeping the bucket itself."""
        response = self._client.do_parsed(
            "POST",
            f"{BUCKET_ENDPOINT}/{name}/delete-objects",
            {"deleteObjects": "true"},
            output=Response[DeleteObjectStatus],
        )
        return response.data

    def drain_status(self, name: str) -> DeleteObjectStatus:
        response = self._client.do_parsed(
            "GET",
            f"{BUCKET_ENDPOINT}/{name}/delete-objects",
            output=Response[DeleteObjectStatus],
        )
        return response.data
