"""Health check endpoint handler."""

from datetime import UTC, datetime

from fastapi.responses import JSONResponse

from src.config import get_config
from src.models.health import HealthCheckResponse

VERSION = "0.1.0"


async def health_check() -> JSONResponse:
    """
    Handles the health check request.
    Returns a JSON response with the server's health status.
    """
    response_model = HealthCheckResponse(
        status="healthy",
        version=VERSION,
        environment=get_config().environment,
        timestamp=datetime.now(UTC),
    )

    return JSONResponse(content=response_model.model_dump(mode="json"))
