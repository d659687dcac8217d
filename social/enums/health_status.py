"""Health status of a probed dependency (database, cache)."""

from enum import Enum


class HealthStatus(str, Enum):
    """Outcome of a single dependency probe."""

    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    ERROR = "error"
