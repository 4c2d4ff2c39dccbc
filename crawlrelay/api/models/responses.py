"""Response models for API endpoints.

Pydantic models defining the structure of API responses.

Example:
    from crawlrelay.api.models.responses import HealthResponse

    response = HealthResponse(status="healthy", service="mapper")
"""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response model.

    Attributes:
        status: Current health status ('healthy' or 'unhealthy')
        service: Pipeline stage served by this process ('mapper' or 'processor')

    Example:
        >>> response = HealthResponse(status="healthy", service="mapper")
        >>> response.model_dump()
        {"status": "healthy", "service": "mapper"}
    """

    status: str
    service: str
