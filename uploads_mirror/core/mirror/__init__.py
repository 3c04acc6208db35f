"""
Uploads mirror logic.

Key mapping, path enumeration, URL override, and the engine that ties
them to an object store.
"""

from .engine import (
    DEFAULT_ACL,
    MirrorEngine,
    MirrorState,
    ObjectStore,
    TransferOutcome,
)
from .keys import map_to_key, resolve_bucket_target
from .models import (
    AssetMetadata,
    BucketTarget,
    MirrorFailure,
    MirrorFile,
    MirrorResult,
    SizeVariant,
    UploadDirs,
    UploadRoot,
)
from .paths import (
    InvalidAssetPathError,
    InvalidVariantPathError,
    enumerate_files,
    resolve_delete_target,
)
from .urls import rewrite_upload_dirs

__all__ = [
    "DEFAULT_ACL",
    "MirrorEngine",
    "MirrorState",
    "ObjectStore",
    "TransferOutcome",
    "map_to_key",
    "resolve_bucket_target",
    "AssetMetadata",
    "BucketTarget",
    "MirrorFailure",
    "MirrorFile",
    "MirrorResult",
    "SizeVariant",
    "UploadDirs",
    "UploadRoot",
    "InvalidAssetPathError",
    "InvalidVariantPathError",
    "enumerate_files",
    "resolve_delete_target",
    "rewrite_upload_dirs",
]
