"""
Health check endpoints.

- /health: liveness, is the process running?
- /health/ready: readiness, is the configuration usable?

Mirroring being switched off is reported but is not a readiness
failure: the hooks still answer, they just don't mirror anything.
"""

import logging
from typing import Any

from fastapi import APIRouter, Response, status
from pydantic import BaseModel

from ... import __version__
from ..dependencies import MirrorEngineDep, SettingsDep

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    details: dict[str, Any] = {}


class ReadinessCheck(BaseModel):
    """Individual readiness check result."""
    name: str
    status: str  # "ok" or "error"
    error: str | None = None
    detail: str | None = None


class ReadinessResponse(BaseModel):
    """Readiness check response with details."""
    status: str  # "ready" or "not_ready"
    version: str
    checks: list[ReadinessCheck]


@router.get(
    "",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Basic health check",
    description="Returns 200 if the service is running. Does not check dependencies.",
)
async def health_check(settings: SettingsDep) -> HealthResponse:
    """Liveness check. Fast, touches nothing external."""
    return HealthResponse(
        status="ok",
        version=__version__,
        details={
            "mirroring_enabled": settings.mirroring_enabled,
            "mock_mode": settings.s3_uploads_mock_mode,
        },
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    status_code=status.HTTP_200_OK,
    summary="Readiness check",
    description="Returns 200 if the configuration is usable, 503 otherwise.",
    responses={
        503: {
            "description": "Service not ready",
            "model": ReadinessResponse,
        }
    },
)
async def readiness_check(
    settings: SettingsDep,
    engine: MirrorEngineDep,
    response: Response,
) -> ReadinessResponse:
    """
    Readiness check.

    Reports configuration problems and where objects will be written.
    Returns 503 when the configuration is inconsistent.
    """
    checks: list[ReadinessCheck] = []
    all_ok = True

    missing_fields = settings.validate_required_fields()
    if missing_fields:
        checks.append(ReadinessCheck(
            name="configuration",
            status="error",
            error=f"Missing required fields: {', '.join(missing_fields)}"
        ))
        all_ok = False
    else:
        checks.append(ReadinessCheck(name="configuration", status="ok"))

    target = engine.bucket_target
    if engine.enabled and target is not None:
        checks.append(ReadinessCheck(
            name="mirror",
            status="ok",
            detail=f"bucket={target.bucket} prefix={target.key_prefix or '/'}",
        ))
    else:
        checks.append(ReadinessCheck(
            name="mirror",
            status="ok",
            detail="mirroring disabled",
        ))

    if not all_ok:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        logger.warning(
            "Readiness check failed",
            extra={
                "checks": [
                    {"name": c.name, "status": c.status, "error": c.error}
                    for c in checks
                ]
            }
        )

    return ReadinessResponse(
        status="ready" if all_ok else "not_ready",
        version=__version__,
        checks=checks,
    )
