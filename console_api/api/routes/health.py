"""Health Probe — liveness endpoint for container orchestration.

Invariants:
    - GET /api/v1/health/ always returns 200 if the process is up
    - Lists every mounted service with its enablement state

Design Decisions:
    - No readiness probe: the kernel holds no connections of its own, the
      content repository is owned by the resolver implementation
"""

import logging

from fastapi import APIRouter, Request, status

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])

SERVICE_VERSION = "1.0.0"


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check(request: Request):
    """Basic liveness probe. Returns 200 if the process is up."""
    endpoints = getattr(request.app.state, "service_endpoints", [])
    return {
        "status": "healthy",
        "service": "console-api",
        "version": SERVICE_VERSION,
        "services": {
            endpoint.service_name: endpoint.is_enabled()
            for endpoint in endpoints
        },
    }
