"""Health check endpoint for API monitoring.

Example:
    GET /health
    Response: {"status": "healthy", "service": "mapper"}
"""

from fastapi import APIRouter, Request

from crawlrelay.api.models.responses import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Return API health status.

    Returns:
        HealthResponse naming the pipeline stage this process serves.

    Example:
        >>> response = client.get("/health")
        >>> response.json()
        {"status": "healthy", "service": "processor"}
    """
    return HealthResponse(status="healthy", service=request.app.state.service_name)
