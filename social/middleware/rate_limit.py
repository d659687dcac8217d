"""Rate limiting middleware using a token bucket stored in the Django cache."""

import logging
import time
from collections.abc import Callable

from django.conf import settings
from django.core.cache import cache
from django.http import HttpRequest, HttpResponse, JsonResponse

from social.constants import DEFAULT_RATE_LIMIT_REQUESTS, DEFAULT_RATE_LIMIT_WINDOW

logger = logging.getLogger(__name__)

EXEMPT_PATH_PREFIXES = ("/health/",)


class RateLimitMiddleware:
    """Middleware to enforce per-client-IP rate limiting.

    Uses a token bucket kept in the shared cache (Redis in production) so the
    limit holds across gunicorn workers and instances. Health probes are
    exempt. If the cache is unavailable the request is allowed through.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        """Initialize the middleware.

        Args:
            get_response: The next middleware or view in the chain.
        """
        self.get_response = get_response
        self.max_requests = getattr(
            settings, "RATE_LIMIT_REQUESTS", DEFAULT_RATE_LIMIT_REQUESTS
        )
        self.window = getattr(settings, "RATE_LIMIT_WINDOW", DEFAULT_RATE_LIMIT_WINDOW)

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """Process the request and enforce rate limiting.

        Args:
            request: The incoming HTTP request.

        Returns:
            The HTTP response, or a 429 response if rate limit exceeded.
        """
        if request.path.startswith(EXEMPT_PATH_PREFIXES):
            return self.get_response(request)

        client_ip = self._get_client_ip(request)
        allowed, retry_after = self._check_rate_limit(client_ip)

        if not allowed:
            logger.warning(f"Rate limit exceeded for IP: {client_ip}")
            return JsonResponse(
                {
                    "status": 429,
                    "error": "too_many_requests",
                    "message": "Rate limit exceeded. Please try again later.",
                    "request_id": getattr(request, "request_id", None),
                    "retry_after": retry_after,
                },
                status=429,
                headers={"Retry-After": str(retry_after)},
            )

        return self.get_response(request)

    def _get_client_ip(self, request: HttpRequest) -> str:
        """Extract the client IP, preferring the first X-Forwarded-For hop."""
        x_forwarded_for = request.headers.get("x-forwarded-for")
        if x_forwarded_for:
            return x_forwarded_for.split(",")[0].strip()
        return str(request.META.get("REMOTE_ADDR", "unknown"))

    def _check_rate_limit(self, client_ip: str) -> tuple[bool, int]:
        """Check if the client has exceeded the rate limit.

        Each client gets a bucket of max_requests tokens refilled at
        max_requests per window; each request consumes one token.

        Args:
            client_ip: The client IP address.

        Returns:
            Tuple of (allowed, retry_after_seconds).
        """
        cache_key = f"rate_limit:{client_ip}"

        try:
            rate_limit_data = cache.get(cache_key)
            current_time = time.time()

            if rate_limit_data is None:
                tokens = self.max_requests - 1
            else:
                tokens, last_refill = rate_limit_data
                elapsed = current_time - last_refill
                tokens = min(
                    self.max_requests,
                    tokens + (elapsed / self.window) * self.max_requests,
                )

                if tokens < 1:
                    retry_after = int(((1 - tokens) / self.max_requests) * self.window)
                    return False, max(1, retry_after)

                tokens -= 1

            cache.set(cache_key, (tokens, current_time), timeout=self.window * 2)
            return True, 0

        except Exception as e:
            logger.error(f"Rate limit check failed for {client_ip}: {e}")
            return True, 0
