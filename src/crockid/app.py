"""Application factory."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from pydantic import BaseModel, Field

from crockid.api.router import router as codec_router
from crockid.config import Settings
from crockid.obs.setup import init_observability
from crockid.version import __version__ as CROCKID_VERSION

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create a FastAPI application exposing the codec over HTTP."""
    if settings is None:
        settings = Settings()

    app = FastAPI(
        title="crockid",
        description="Crockford Base32 identifiers with CRC-10 checksums",
        version=CROCKID_VERSION,
    )

    # Store on app.state for route access.
    app.state.settings = settings

    init_observability(app, settings)
    app.include_router(codec_router)

    class HealthResponse(BaseModel):
        status: str = Field(..., description="Health status string.")
        version: str = Field(..., description="Installed crockid version.")

    @app.get(
        "/health",
        response_model=HealthResponse,
        summary="Health",
        description="Basic health check for the app.",
    )
    def health() -> HealthResponse:
        return HealthResponse(status="healthy", version=CROCKID_VERSION)

    logger.info("crockid app created (env=%s)", settings.env)
    return app
