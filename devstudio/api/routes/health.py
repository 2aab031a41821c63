"""
Health Check Routes - System health and monitoring endpoints.

These endpoints are used for:
1. Load balancer health checks
2. Container liveness/readiness checks

They are not rate limited.
"""
from fastapi import APIRouter, Depends

from devstudio import __version__
from devstudio.api.dependencies import get_assistant_service
from devstudio.core.logging_config import get_logger
from devstudio.models.responses import HealthResponse
from devstudio.services.assistant_service import AssistantService

logger = get_logger(__name__)

router = APIRouter(
    prefix="/health",
    tags=["Health"],
)


@router.get(
    "",
    response_model=HealthResponse,
    summary="Health check endpoint",
    description="Returns 200 OK while the process is up and serving requests."
)
async def health_check() -> HealthResponse:
    logger.debug("Health check requested")
    return HealthResponse(status="ok", version=__version__)


@router.get(
    "/ready",
    response_model=HealthResponse,
    summary="Readiness check endpoint",
    description="""
    Reports `ready` when at least one AI provider has credentials and
    `degraded` otherwise. AI operations fail with a configuration error
    while degraded; project endpoints keep working.
    """
)
async def readiness_check(
    service: AssistantService = Depends(get_assistant_service)
) -> HealthResponse:
    providers = service.llm_client.providers
    if not providers:
        logger.warning("Readiness check: no AI provider configured")
    return HealthResponse(
        status="ready" if providers else "degraded",
        version=__version__,
    )
