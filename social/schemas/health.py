"""Health check schemas."""

from pydantic import BaseModel, Field

from social.enums import HealthStatus
from social.schemas.base_schema_model import BaseSchemaModel


class DependencyHealth(BaseSchemaModel):
    """Health status for a single dependency."""

    healthy: bool = Field(..., description="Whether the dependency is healthy")
    status: HealthStatus = Field(..., description="Health status of the dependency")
    message: str = Field(..., description="Human-readable health message")
    response_time_ms: float | None = Field(
        None, description="Response time in milliseconds"
    )


class LivenessResponse(BaseModel):
    """Response model for liveness checks."""

    status: str = Field(..., description="Liveness status")


class ReadinessResponse(BaseModel):
    """Response model for readiness checks."""

    ready: bool = Field(..., description="Service is ready to serve requests")
    status: str = Field(..., description="Overall status: 'ready' or 'degraded'")
    degraded: bool = Field(
        ..., description="Whether service is running in degraded mode"
    )
    dependencies: dict[str, DependencyHealth] = Field(
        ..., description="Status of each dependency"
    )
