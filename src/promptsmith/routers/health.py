import logging

from fastapi import APIRouter, Depends

from promptsmith.config import settings
from promptsmith.dependencies import get_upstream_client
from promptsmith.schemas.evaluation import HealthResponse
from promptsmith.services.llm import UpstreamClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health", response_model=HealthResponse, response_model_exclude_none=True)
async def health(
    client: UpstreamClient = Depends(get_upstream_client),
) -> HealthResponse:
    """Report whether the upstream chat service is reachable."""
    if settings.is_serverless:
        # Probing upstream from a serverless function risks the platform time limit
        logger.info("Running on Vercel, using simplified health check")
        return HealthResponse(ollama="connected", environment="vercel", api_url=client.base_url)

    upstream = await client.check_health(settings.health_timeout)
    return HealthResponse(
        ollama="connected" if upstream.connected else "unavailable",
        environment="local",
        api_url=client.base_url,
        reason=upstream.reason,
        statusCode=upstream.status_code,
        error=upstream.error,
    )
