"""
FastAPI application entry point.

The host content system calls the hook endpoints on its lifecycle
events; this service mirrors the affected files into the object store.

For local development:
    uvicorn uploads_mirror.main:app --reload

For production:
    gunicorn uploads_mirror.main:app -w 4 -k uvicorn.workers.UvicornWorker
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from . import __version__
from .api.routes import health, hooks
from .bootstrap import build_engine, build_registry
from .config.settings import Settings, get_settings
from .core.mirror.engine import ObjectStore
from .logging_config import configure_logging

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[ObjectStore] = None,
) -> FastAPI:
    """
    Application factory.

    settings and store default to the environment-derived ones; tests
    pass their own.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Build the engine and subscribe it to the hooks, once per process."""
        missing_fields = settings.validate_required_fields()
        if missing_fields:
            logger.error(
                "Incomplete configuration",
                extra={"missing_fields": missing_fields}
            )

        engine = build_engine(settings, store=store)
        app.state.mirror_engine = engine
        app.state.hook_registry = build_registry(engine, settings)

        logger.info(
            "Uploads mirror starting",
            extra={
                "version": __version__,
                "mirroring_enabled": engine.enabled,
                "mock_mode": settings.s3_uploads_mock_mode,
            }
        )

        yield

        logger.info("Uploads mirror shutting down")

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        description="""
        Mirrors a local media library into an S3-compatible object store.

        The host calls these hooks:

        - `POST /api/v1/hooks/upload-dir` when resolving public upload URLs
        - `POST /api/v1/hooks/asset-generated` after an asset and its sizes are written
        - `POST /api/v1/hooks/asset-deleted` when a file is removed

        All hook endpoints require an `X-API-Key` header. Responses always
        echo the host's payload; mirror failures only appear in the logs.
        """,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.include_router(
        health.router,
        prefix="/health",
        tags=["Health"],
    )

    app.include_router(
        hooks.router,
        prefix="/api/v1/hooks",
        tags=["Hooks"],
    )

    @app.get("/", include_in_schema=False)
    async def root():
        return {
            "message": settings.api_title,
            "version": settings.api_version,
            "docs": "/docs",
            "health": "/health",
        }

    @app.exception_handler(Exception)
    async def global_exception_handler(request, exc):
        """
        Catch-all exception handler.

        Logs the full error server-side and returns a generic message.
        """
        logger.error(
            "Unhandled exception",
            extra={
                "path": request.url.path,
                "method": request.method,
                "error": str(exc),
            },
            exc_info=exc,
        )

        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error."}
        )

    return app


def _create_default_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level, json_format=settings.log_json)
    return create_app(settings)


# This is what uvicorn/gunicorn will import
app = _create_default_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "uploads_mirror.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level=settings.log_level.lower(),
    )
