"""
Health API Schemas - Response model for the healthcheck endpoint
"""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Service status, operating environment and version"""

    status: str = Field("available", description="Service status")
    environment: str = Field(..., description="Operating environment (development, staging, production)")
    version: str = Field(..., description="Application version")
