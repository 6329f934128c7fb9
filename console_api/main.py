"""Console API — FastAPI application entry point.

Invariants:
    - Service endpoints registered explicitly (no auto-discovery — ExMA anti-pattern)
    - Global error handlers map ConsoleError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Logging configured on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - create_app() factory: feature packages and tests mount their own
      ServiceEndpoint subclasses; the module-level `app` carries the health probe only
"""

import logging
from collections.abc import Sequence
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from console_api.api.error_handlers import register_error_handlers
from console_api.api.routes import health
from console_api.api.service_endpoint import ServiceEndpoint
from console_api.config import Settings, get_settings
from console_api.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


def create_app(
    endpoints: Sequence[ServiceEndpoint] = (),
    settings: Settings | None = None,
) -> FastAPI:
    """Assemble the API with the given service endpoints mounted under /bin."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle."""
        setup_logging(settings.log_level, settings.log_format)
        logger.info(
            f"Console API started with {len(endpoints)} service(s)",
        )
        yield
        logger.info("Console API shutting down")

    app = FastAPI(title="Console API", version=health.SERVICE_VERSION, lifespan=lifespan)

    # CORS — configured from settings, not hardcoded
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routes — explicit registration (ExMA: no convention-over-config)
    app.include_router(health.router)
    for endpoint in endpoints:
        app.include_router(endpoint.router())
    app.state.service_endpoints = list(endpoints)

    register_error_handlers(app)
    return app


app = create_app()
