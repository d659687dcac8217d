"""Health check service with cached dependency probes."""

import logging
import time

from django.core.cache import cache
from django.db import connection
from django.db.utils import OperationalError

from social.enums import HealthStatus
from social.schemas.health import (
    DependencyHealth,
    LivenessResponse,
    ReadinessResponse,
)

logger = logging.getLogger(__name__)


class HealthService:
    """Service for performing health checks with caching."""

    def __init__(self, cache_ttl_seconds: float = 5.0) -> None:
        """Initialize the health service.

        Args:
            cache_ttl_seconds: Time to live for cached health check results
        """
        self.cache_ttl_seconds = cache_ttl_seconds
        self._db_health_cache: DependencyHealth | None = None
        self._db_health_cache_time: float = 0.0
        self._cache_health_cache: DependencyHealth | None = None
        self._cache_health_cache_time: float = 0.0

    def get_liveness_status(self) -> LivenessResponse:
        """Get liveness status (always returns alive)."""
        return LivenessResponse(status="alive")

    def get_readiness_status(self) -> ReadinessResponse:
        """Get readiness status with database and cache health checks.

        Returns degraded (ready=True, degraded=True) when a dependency is
        down so the instance stays in rotation while it reconnects.
        """
        db_health = self.check_database_health()
        cache_health = self.check_cache_health()
        all_healthy = db_health.healthy and cache_health.healthy

        return ReadinessResponse(
            ready=True,
            status="ready" if all_healthy else "degraded",
            degraded=not all_healthy,
            dependencies={"database": db_health, "cache": cache_health},
        )

    def check_database_health(self) -> DependencyHealth:
        """Check database connectivity, cached for cache_ttl_seconds.

        Uses ensure_connection() so no query is executed.
        """
        current_time = time.time()
        if (
            self._db_health_cache is not None
            and (current_time - self._db_health_cache_time) < self.cache_ttl_seconds
        ):
            return self._db_health_cache

        start_time = time.perf_counter()
        try:
            connection.ensure_connection()
            new_health = DependencyHealth(
                healthy=True,
                status=HealthStatus.HEALTHY,
                message="Database connection successful",
                response_time_ms=(time.perf_counter() - start_time) * 1000,
            )
            if self._db_health_cache is not None and not self._db_health_cache.healthy:
                logger.info("Database connection recovered")
        except OperationalError as e:
            new_health = DependencyHealth(
                healthy=False,
                status=HealthStatus.UNHEALTHY,
                message=f"Database connection failed: {e!s}",
                response_time_ms=(time.perf_counter() - start_time) * 1000,
            )
            logger.warning(f"Database health check failed: {e}")
        except Exception as e:
            new_health = DependencyHealth(
                healthy=False,
                status=HealthStatus.ERROR,
                message=f"Unexpected error checking database: {e!s}",
                response_time_ms=(time.perf_counter() - start_time) * 1000,
            )
            logger.error(f"Unexpected error checking database: {e}")

        self._db_health_cache = new_health
        self._db_health_cache_time = current_time
        return new_health

    def check_cache_health(self) -> DependencyHealth:
        """Check the cache backend with a set/get round trip."""
        current_time = time.time()
        if (
            self._cache_health_cache is not None
            and (current_time - self._cache_health_cache_time)
            < self.cache_ttl_seconds
        ):
            return self._cache_health_cache

        start_time = time.perf_counter()
        try:
            test_key = "__health_check__"
            cache.set(test_key, "ok", timeout=1)
            if cache.get(test_key) == "ok":
                new_health = DependencyHealth(
                    healthy=True,
                    status=HealthStatus.HEALTHY,
                    message="Cache connection successful",
                    response_time_ms=(time.perf_counter() - start_time) * 1000,
                )
            else:
                new_health = DependencyHealth(
                    healthy=False,
                    status=HealthStatus.UNHEALTHY,
                    message="Cache health check failed: unexpected result",
                    response_time_ms=(time.perf_counter() - start_time) * 1000,
                )
        except Exception as e:
            new_health = DependencyHealth(
                healthy=False,
                status=HealthStatus.ERROR,
                message=f"Cache connection failed: {e!s}",
                response_time_ms=(time.perf_counter() - start_time) * 1000,
            )
            logger.warning(f"Cache health check failed: {e}")

        self._cache_health_cache = new_health
        self._cache_health_cache_time = current_time
        return new_health


# Global health service instance
health_service = HealthService()
