"""
Webhook endpoints the host calls on its lifecycle events.

Each endpoint dispatches the host's payload through the hook registry
and hands back whatever the handlers return. The mirror handlers return
the payload unchanged, so a failing bucket never shows up here; it only
shows up in the logs.
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from ...core.mirror.models import UploadDirs
from ...events.registry import ASSET_DELETED, ASSET_GENERATED, UPLOAD_DIR
from ..dependencies import AuthenticatedHost, HookRegistryDep

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Request/Response Models
# ---------------------------------------------------------------------------

class UploadDirsPayload(BaseModel):
    """The host's upload-location tuple."""
    path: Optional[str] = None
    basedir: Optional[str] = None
    baseurl: Optional[str] = None
    url: Optional[str] = None


class AssetGeneratedRequest(BaseModel):
    """Attachment metadata for a freshly generated asset."""
    metadata: dict[str, Any] = Field(description="Host attachment metadata: file, sizes, ...")
    attachment_id: Optional[int] = Field(default=None, description="Host attachment id")
    context: str = Field(default="create", description="Why the metadata was generated")


class AssetGeneratedResponse(BaseModel):
    metadata: dict[str, Any]


class AssetDeletedRequest(BaseModel):
    file: str = Field(description="Absolute local path of the deleted file")


class AssetDeletedResponse(BaseModel):
    file: str


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post(
    "/upload-dir",
    response_model=UploadDirsPayload,
    summary="Resolve upload location",
    description="Returns the upload-location tuple, with public URLs pointed at the mirror when configured.",
)
async def upload_dir(
    payload: UploadDirsPayload,
    registry: HookRegistryDep,
    api_key: AuthenticatedHost,
) -> UploadDirsPayload:
    dirs = await registry.dispatch(UPLOAD_DIR, UploadDirs(**payload.model_dump()))
    return UploadDirsPayload(
        path=dirs.path,
        basedir=dirs.basedir,
        baseurl=dirs.baseurl,
        url=dirs.url,
    )


@router.post(
    "/asset-generated",
    response_model=AssetGeneratedResponse,
    summary="Asset generated",
    description="Mirrors the asset and its size variants. Returns the metadata unchanged.",
)
async def asset_generated(
    payload: AssetGeneratedRequest,
    registry: HookRegistryDep,
    api_key: AuthenticatedHost,
) -> AssetGeneratedResponse:
    metadata = await registry.dispatch(
        ASSET_GENERATED, payload.metadata, payload.attachment_id, payload.context
    )
    return AssetGeneratedResponse(metadata=metadata)


@router.post(
    "/asset-deleted",
    response_model=AssetDeletedResponse,
    summary="Asset deleted",
    description="Removes the mirrored copy of a deleted file. Returns the path unchanged.",
)
async def asset_deleted(
    payload: AssetDeletedRequest,
    registry: HookRegistryDep,
    api_key: AuthenticatedHost,
) -> AssetDeletedResponse:
    file = await registry.dispatch(ASSET_DELETED, payload.file)
    return AssetDeletedResponse(file=file)
