"""FastAPI application factory for errorgen."""

from __future__ import annotations

import logging

import uvicorn
from fastapi import FastAPI

from errorgen import __version__
from errorgen.api.middleware import RequestBodyLimitMiddleware, RequestTimingMiddleware
from errorgen.api.routers import expand
from errorgen.api.schemas import HealthResponse
from errorgen.settings import Settings


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if settings is None:
        settings = Settings()

    app = FastAPI(
        title="errorgen",
        description="Expands error declaration lists into an error-code enum and constructors.",
        version=__version__,
    )
    app.state.settings = settings

    # Middleware; JSON escaping can grow the body up to ~6x the source length.
    app.add_middleware(RequestBodyLimitMiddleware, max_bytes=settings.max_source_chars * 6)
    app.add_middleware(RequestTimingMiddleware)

    app.include_router(expand.router, tags=["expand"])

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", version=__version__)

    return app


def main() -> None:
    """Run the REST API server using settings from environment / .env file."""
    settings = Settings()

    logging.basicConfig(level=settings.log_level.upper())
    logger = logging.getLogger("errorgen.api")
    logger.info(
        "errorgen API Server v%s starting (host=%s, port=%d)",
        __version__, settings.api_server_host, settings.effective_port,
    )

    uvicorn.run(
        "errorgen.api.app:create_app",
        factory=True,
        host=settings.api_server_host,
        port=settings.effective_port,
        log_level=settings.log_level.lower(),
    )
