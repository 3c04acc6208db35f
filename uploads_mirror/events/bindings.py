"""
Wires the mirror engine into the host's lifecycle hooks.

The forwarders return exactly what the host passed in. Mirroring is a
side effect of the host's operation and never changes its outcome.
"""

import logging
from typing import Any, Mapping, Optional

from ..core.mirror.engine import MirrorEngine
from ..core.mirror.models import AssetMetadata, UploadDirs
from ..core.mirror.urls import rewrite_upload_dirs
from .registry import ASSET_DELETED, ASSET_GENERATED, UPLOAD_DIR, HookRegistry

logger = logging.getLogger(__name__)


def register_mirror_hooks(
    registry: HookRegistry,
    engine: MirrorEngine,
    override_base_url: Optional[str] = None,
) -> None:
    """
    Subscribe the engine to upload-dir, asset-generated and asset-deleted.

    The upload-dir override is only registered when an override URL is
    configured; otherwise the host's URLs pass through untouched.
    """

    def filter_upload_dir(dirs: UploadDirs) -> UploadDirs:
        return rewrite_upload_dirs(dirs, override_base_url)

    async def on_asset_generated(metadata: Mapping[str, Any], *args: Any) -> Mapping[str, Any]:
        result = await engine.on_asset_created(AssetMetadata.from_host(metadata))
        if result.attempted:
            logger.info(
                "Asset mirror finished",
                extra={
                    "file": metadata.get("file"),
                    "succeeded": len(result.succeeded),
                    "failed": len(result.failed),
                },
            )
        return metadata

    async def on_asset_deleted(file: str, *args: Any) -> str:
        await engine.on_asset_deleted(file)
        return file

    if override_base_url:
        registry.add(UPLOAD_DIR, filter_upload_dir)
    registry.add(ASSET_GENERATED, on_asset_generated)
    registry.add(ASSET_DELETED, on_asset_deleted)

    logger.info(
        "Registered mirror hooks",
        extra={"enabled": engine.enabled, "url_override": bool(override_base_url)},
    )
