"""
Notes API — Health Check Routes
===============================

What:  /health, /ping and the API info document at /api/v1.
Who:   Docker health checks, load balancers, monitoring systems.

/health and /ping are mounted at the root, outside the versioned prefix,
and are exempt from rate limiting and access logging.
"""

from fastapi import APIRouter, Depends
from starlette.responses import Response

from notes_api.config import settings
from notes_api.controllers import HealthController
from notes_api.dependencies import get_health_controller
from notes_api.schemas.common import ApiResponse

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    responses={200: {"description": "Service status", "model": ApiResponse}},
    summary="Service health check",
    description=(
        "Reports uptime, environment, version and database connectivity. "
        "`status` is DEGRADED when the database cannot be reached."
    ),
)
async def health_check(
    controller: HealthController = Depends(get_health_controller),
) -> Response:
    return await controller.health()


@router.get("/ping", summary="Liveness probe")
async def ping(controller: HealthController = Depends(get_health_controller)) -> Response:
    return await controller.ping()


@router.get(settings.api_base_path, summary="API information")
async def api_info(controller: HealthController = Depends(get_health_controller)) -> Response:
    return await controller.api_info()
