from datetime import datetime

from pydantic import BaseModel, Field


class HealthCheckResponse(BaseModel):
    """
    Response model for the health check endpoint.
    """

    status: str = Field(..., description="Status of the server")
    version: str = Field(..., description="Version of the server")
    environment: str = Field(..., description="Deployment environment name")
    timestamp: datetime = Field(..., description="Current server timestamp in ISO 8601 format")
