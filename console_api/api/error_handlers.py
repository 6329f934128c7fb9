"""Error Handlers — global exception handlers for the console API.

Invariants:
    - Exception (catch-all) → never leaks internal details (500)
    - The 500 answer carries the same no-cache headers as service answers
    - ConsoleError raised by an operation never reaches these handlers:
      ServiceEndpoint.handle() answers it on the service response
    - Parameter validation of service operations never reaches these handlers:
      ParameterValidator.reject() answers 400 in place

Design Decisions:
    - Registered from main.create_app so test apps get the same mapping
    - Body decode failures (pydantic.ValidationError) land here unless the
      operation catches them itself
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from console_api.api.service_endpoint import set_no_cache_headers
from console_api.core.errors import ErrorCategory, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_generic_error_handler(app)


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"path": request.url.path, "status_code": 500},
        )
        response = JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": ErrorCategory.INTERNAL.value,
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )
        set_no_cache_headers(response)
        return response
