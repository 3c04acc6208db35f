"""
The mirror engine.

Reacts to asset lifecycle events by uploading or deleting objects.
Neither entry point raises: every remote failure ends up in the returned
MirrorResult and in one structured log entry, and the host's own
operation (saving metadata, deleting a file) carries on untouched.

Within one asset-create, every file is submitted at once and the engine
waits for the whole batch to settle. Actual parallelism is bounded by
the store's connection pool, not here.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Protocol

from .models import (
    AssetMetadata,
    BucketTarget,
    MirrorFailure,
    MirrorFile,
    MirrorResult,
    UploadRoot,
)
from .paths import InvalidAssetPathError, enumerate_files, resolve_delete_target

logger = logging.getLogger(__name__)

DEFAULT_ACL = "public-read"

UPLOAD_FAILED_MESSAGE = "Could not upload files to S3 via command pool"
DELETE_FAILED_MESSAGE = "Could not delete file from S3"


# ---------------------------------------------------------------------------
# Protocols (interfaces)
# ---------------------------------------------------------------------------

class ObjectStore(Protocol):
    """
    The object-store capability the engine needs.

    Implementations raise on failure; the engine turns that into a
    TransferOutcome. Must be safe for several in-flight calls at once.
    """

    async def put_object(self, bucket: str, key: str, body: bytes, acl: str) -> None:
        """Store body under bucket/key with the given canned ACL."""
        ...

    async def delete_object(self, bucket: str, key: str) -> None:
        """Remove bucket/key. Deleting a missing key is not an error."""
        ...


@dataclass(frozen=True)
class TransferOutcome:
    """Result of a single put or delete: either ok, or an error message."""
    file: MirrorFile
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class MirrorState(Enum):
    """Stages of an asset-create operation."""
    IDLE = "idle"
    RESOLVING = "resolving"
    UPLOADING = "uploading"
    DONE = "done"


def _read_bytes(path: str) -> bytes:
    return Path(path).read_bytes()


def _collect(outcomes: list[TransferOutcome]) -> MirrorResult:
    result = MirrorResult.empty()
    for outcome in outcomes:
        if outcome.ok:
            result.succeeded.add(outcome.file)
        else:
            result.failed.append(MirrorFailure(file=outcome.file, error=outcome.error))
    return result


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

class MirrorEngine:
    """
    Mirrors asset files into an object store.

    bucket_target and store may be None when mirroring isn't configured;
    every operation is then a silent no-op.
    """

    def __init__(
        self,
        upload_root: UploadRoot,
        bucket_target: Optional[BucketTarget],
        store: Optional[ObjectStore],
        acl: str = DEFAULT_ACL,
    ) -> None:
        self._upload_root = upload_root
        self._bucket_target = bucket_target
        self._store = store
        self._acl = acl or DEFAULT_ACL

    @property
    def enabled(self) -> bool:
        return self._store is not None and self._bucket_target is not None

    @property
    def upload_root(self) -> UploadRoot:
        return self._upload_root

    @property
    def bucket_target(self) -> Optional[BucketTarget]:
        return self._bucket_target

    async def on_asset_created(self, asset: AssetMetadata) -> MirrorResult:
        """
        Upload an asset's primary file and all its size variants.

        Each file is tried exactly once; one failing file never stops
        the others. Returns once every upload has settled.
        """
        if not self.enabled:
            return MirrorResult.empty()

        self._trace(MirrorState.RESOLVING, asset.primary_relative_path)
        try:
            files = enumerate_files(self._upload_root, self._bucket_target, asset)
        except InvalidAssetPathError as e:
            logger.error(
                "Rejected asset with invalid path",
                extra={"error": str(e), "file": asset.primary_relative_path},
            )
            return MirrorResult.empty()

        if not files:
            self._trace(MirrorState.DONE, asset.primary_relative_path)
            return MirrorResult.empty()

        self._trace(MirrorState.UPLOADING, asset.primary_relative_path)
        outcomes = await asyncio.gather(*(self._put(file) for file in files))
        result = _collect(list(outcomes))

        if result.failed:
            logger.error(
                UPLOAD_FAILED_MESSAGE,
                extra={
                    "error": "; ".join(failure.error for failure in result.failed),
                    "files": [file.local_path for file in files],
                    "failed": [failure.file.local_path for failure in result.failed],
                },
            )
        else:
            logger.info(
                "Mirrored asset",
                extra={
                    "bucket": self._bucket_target.bucket,
                    "keys": [file.remote_key for file in files],
                },
            )

        self._trace(MirrorState.DONE, asset.primary_relative_path)
        return result

    async def on_asset_deleted(self, local_path: str) -> MirrorResult:
        """
        Remove the mirrored copy of a deleted local file.

        Paths outside the uploads root were never mirrored and are
        ignored. At most one delete is issued.
        """
        if not self.enabled:
            return MirrorResult.empty()

        target = resolve_delete_target(self._upload_root, self._bucket_target, local_path)
        if target is None:
            logger.debug("Skipping delete outside uploads root", extra={"file": local_path})
            return MirrorResult.empty()

        outcome = await self._delete(target)
        if not outcome.ok:
            logger.error(
                DELETE_FAILED_MESSAGE,
                extra={"error": outcome.error, "file": local_path},
            )
        else:
            logger.info(
                "Deleted mirrored file",
                extra={"bucket": self._bucket_target.bucket, "key": target.remote_key},
            )

        return _collect([outcome])

    async def _put(self, file: MirrorFile) -> TransferOutcome:
        try:
            body = await asyncio.to_thread(_read_bytes, file.local_path)
            await self._store.put_object(
                self._bucket_target.bucket, file.remote_key, body, self._acl
            )
        except Exception as e:
            return TransferOutcome(file=file, error=str(e) or type(e).__name__)
        return TransferOutcome(file=file)

    async def _delete(self, file: MirrorFile) -> TransferOutcome:
        try:
            await self._store.delete_object(self._bucket_target.bucket, file.remote_key)
        except Exception as e:
            return TransferOutcome(file=file, error=str(e) or type(e).__name__)
        return TransferOutcome(file=file)

    def _trace(self, state: MirrorState, file: Optional[str]) -> None:
        logger.debug("Mirror state", extra={"state": state.value, "file": file})
