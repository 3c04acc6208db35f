"""
Builds the mirror engine and hook registry from settings.

Everything the engine depends on (upload root, bucket target, store) is
constructed here once and passed in, so the engine itself holds no
lazily-initialized state.
"""

import logging
from typing import Optional

from .config.settings import Settings
from .core.mirror.engine import MirrorEngine, ObjectStore
from .core.mirror.keys import resolve_bucket_target
from .core.mirror.models import UploadRoot
from .events.bindings import register_mirror_hooks
from .events.registry import HookRegistry
from .infrastructure.storage.client import StorageConfig, create_object_store

logger = logging.getLogger(__name__)


def build_upload_root(settings: Settings) -> UploadRoot:
    return UploadRoot(
        base_dir=settings.uploads_basedir,
        base_url=settings.uploads_baseurl,
        override_base_url=settings.s3_uploads_bucket_url,
    )


def build_object_store(settings: Settings) -> Optional[ObjectStore]:
    """Return a store, or None when no bucket is configured."""
    if not settings.mirroring_enabled:
        return None

    config = StorageConfig(
        region=settings.s3_uploads_region,
        access_key_id=settings.s3_uploads_key,
        secret_access_key=settings.s3_uploads_secret,
        endpoint_url=settings.s3_uploads_endpoint,
        max_pool_connections=settings.s3_uploads_max_pool_connections,
    )
    return create_object_store(config=config, mock_mode=settings.s3_uploads_mock_mode)


def build_engine(
    settings: Settings,
    store: Optional[ObjectStore] = None,
) -> MirrorEngine:
    """
    Assemble a MirrorEngine.

    Pass store to override the one settings would create (tests,
    alternative backends). Without a configured bucket the engine is
    built disabled.
    """
    bucket_target = None
    if settings.mirroring_enabled:
        bucket_target = resolve_bucket_target(settings.s3_uploads_bucket)
        if store is None:
            store = build_object_store(settings)
    else:
        store = None

    engine = MirrorEngine(
        upload_root=build_upload_root(settings),
        bucket_target=bucket_target,
        store=store,
        acl=settings.s3_uploads_object_acl,
    )

    logger.info(
        "Mirror engine ready",
        extra={
            "enabled": engine.enabled,
            "bucket": bucket_target.bucket if bucket_target else None,
            "key_prefix": bucket_target.key_prefix if bucket_target else None,
            "mock_mode": settings.s3_uploads_mock_mode,
        },
    )
    return engine


def build_registry(engine: MirrorEngine, settings: Settings) -> HookRegistry:
    registry = HookRegistry()
    register_mirror_hooks(registry, engine, override_base_url=settings.s3_uploads_bucket_url)
    return registry
