"""
FastAPI dependency injection.

The engine and hook registry are built once in the application lifespan
and kept on app.state; these dependencies hand them to route handlers.
Tests swap them through app.dependency_overrides or by setting
app.state directly.
"""

import logging
from typing import Annotated

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import APIKeyHeader

from ..config.settings import Settings, get_settings
from ..core.mirror.engine import MirrorEngine
from ..events.registry import HookRegistry

logger = logging.getLogger(__name__)

# API Key security scheme
api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


# ---------------------------------------------------------------------------
# Authentication
# ---------------------------------------------------------------------------

async def verify_api_key(
    settings: Annotated[Settings, Depends(get_settings)],
    api_key: str = Security(api_key_header),
) -> str:
    """
    Validate API key from request header.

    The host calls the hook endpoints with a shared key. Raises 403 if
    the key is invalid or missing.
    """
    if not api_key:
        logger.warning("Request missing API key")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="API key required. Provide X-API-Key header.",
        )

    if api_key not in settings.api_keys_list:
        logger.warning(
            "Invalid API key attempt",
            extra={"key_prefix": api_key[:8]}
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid API key",
        )

    return api_key


# ---------------------------------------------------------------------------
# Service Dependencies
# ---------------------------------------------------------------------------

def get_hook_registry(request: Request) -> HookRegistry:
    """Provide the registry the mirror hooks were subscribed to at startup."""
    return request.app.state.hook_registry


def get_mirror_engine(request: Request) -> MirrorEngine:
    return request.app.state.mirror_engine


# ---------------------------------------------------------------------------
# Convenience Type Aliases
# ---------------------------------------------------------------------------

AuthenticatedHost = Annotated[str, Depends(verify_api_key)]
HookRegistryDep = Annotated[HookRegistry, Depends(get_hook_registry)]
MirrorEngineDep = Annotated[MirrorEngine, Depends(get_mirror_engine)]
SettingsDep = Annotated[Settings, Depends(get_settings)]
