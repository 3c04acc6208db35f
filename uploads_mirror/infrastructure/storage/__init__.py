"""
Object storage integration for mirrored uploads.

Supports AWS S3 and S3-compatible servers through boto3.
Includes mock mode for local development without credentials.
"""

from .client import (
    MockObjectStore,
    S3ObjectStore,
    StorageConfig,
    StorageError,
    create_object_store,
)

__all__ = [
    "MockObjectStore",
    "S3ObjectStore",
    "StorageConfig",
    "StorageError",
    "create_object_store",
]
