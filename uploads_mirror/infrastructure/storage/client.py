"""
Object storage client for mirrored uploads.

Talks to S3 or any S3-compatible store (MinIO, R2, ...) through boto3.
A custom endpoint switches to path-style addressing, which is what most
self-hosted S3 servers expect.

Mock mode keeps objects in memory, so the webhook flow can be exercised
without provisioning a bucket.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from ...core.mirror.engine import ObjectStore

logger = logging.getLogger(__name__)

DEFAULT_REGION = "us-west-1"


class StorageError(Exception):
    """Raised when storage operations fail."""
    pass


@dataclass
class StorageConfig:
    """
    Connection settings for the object store.

    Credentials are optional: unless both halves are given, boto3's
    default credential chain (env, profile, instance role) is used.
    """
    region: str = DEFAULT_REGION
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None
    endpoint_url: Optional[str] = None
    max_pool_connections: int = 10

    @property
    def has_static_credentials(self) -> bool:
        return bool(self.access_key_id and self.secret_access_key)


class S3ObjectStore:
    """
    boto3-backed object store.

    boto3 is synchronous, so each call is pushed onto a worker thread.
    A single client is shared across those threads; boto3 clients are
    thread-safe and max_pool_connections caps how many requests are in
    flight at once.
    """

    def __init__(self, config: StorageConfig) -> None:
        import boto3
        from botocore.config import Config

        self._config = config

        s3_options = {}
        if config.endpoint_url:
            s3_options["addressing_style"] = "path"

        boto_config = Config(
            signature_version="s3v4",
            max_pool_connections=config.max_pool_connections,
            s3=s3_options or None,
        )

        params = {
            "region_name": config.region,
            "config": boto_config,
        }
        if config.endpoint_url:
            params["endpoint_url"] = config.endpoint_url
        if config.has_static_credentials:
            params["aws_access_key_id"] = config.access_key_id
            params["aws_secret_access_key"] = config.secret_access_key

        self._s3_client = boto3.client("s3", **params)

        logger.info(
            "Initialized S3 object store",
            extra={
                "region": config.region,
                "endpoint": config.endpoint_url,
                "static_credentials": config.has_static_credentials,
            },
        )

    async def put_object(self, bucket: str, key: str, body: bytes, acl: str) -> None:
        """Upload body under bucket/key."""
        try:
            await asyncio.to_thread(
                self._s3_client.put_object,
                Bucket=bucket,
                Key=key,
                Body=body,
                ACL=acl,
            )
        except Exception as e:
            raise StorageError(f"Upload of {key} failed: {e}") from e

        logger.debug(
            "Uploaded object",
            extra={"bucket": bucket, "key": key, "size_bytes": len(body)},
        )

    async def delete_object(self, bucket: str, key: str) -> None:
        """
        Delete bucket/key.

        S3 answers a delete of a missing key with success, so repeated
        deletes are harmless.
        """
        try:
            await asyncio.to_thread(
                self._s3_client.delete_object,
                Bucket=bucket,
                Key=key,
            )
        except Exception as e:
            raise StorageError(f"Delete of {key} failed: {e}") from e

        logger.debug("Deleted object", extra={"bucket": bucket, "key": key})


# ---------------------------------------------------------------------------
# Mock Storage for Local Development
# ---------------------------------------------------------------------------

class MockObjectStore:
    """
    In-memory object store.

    Objects live in a dict keyed by (bucket, key). Useful for running
    the service locally and for inspecting what the engine wrote.
    """

    def __init__(self) -> None:
        self._objects: dict[tuple[str, str], tuple[bytes, str]] = {}
        logger.info("Initialized mock object store (in-memory)")

    async def put_object(self, bucket: str, key: str, body: bytes, acl: str) -> None:
        if not bucket:
            raise StorageError("Bucket name must not be empty")
        self._objects[(bucket, key)] = (body, acl)
        logger.debug(
            "Stored object in mock store",
            extra={"bucket": bucket, "key": key, "size_bytes": len(body)},
        )

    async def delete_object(self, bucket: str, key: str) -> None:
        if not bucket:
            raise StorageError("Bucket name must not be empty")
        self._objects.pop((bucket, key), None)

    def get(self, bucket: str, key: str) -> Optional[bytes]:
        """Return stored bytes, or None if nothing is there."""
        entry = self._objects.get((bucket, key))
        return entry[0] if entry else None

    def acl_for(self, bucket: str, key: str) -> Optional[str]:
        entry = self._objects.get((bucket, key))
        return entry[1] if entry else None

    def keys(self, bucket: str) -> list[str]:
        return sorted(key for (b, key) in self._objects if b == bucket)


# ---------------------------------------------------------------------------
# Factory Function
# ---------------------------------------------------------------------------

def create_object_store(
    config: Optional[StorageConfig] = None,
    mock_mode: bool = False,
) -> ObjectStore:
    """
    Create an object store for the given configuration.

    Args:
        config: Connection settings (required if not mock_mode)
        mock_mode: If True, return the in-memory store

    Returns:
        ObjectStore implementation (S3 or Mock)
    """
    if mock_mode:
        return MockObjectStore()

    if config is None:
        raise ValueError("config is required when not in mock mode")

    return S3ObjectStore(config)
