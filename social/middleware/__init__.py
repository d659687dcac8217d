"""Middleware components for the social service."""

from social.middleware.process_time import ProcessTimeMiddleware
from social.middleware.rate_limit import RateLimitMiddleware
from social.middleware.request_id import RequestIDMiddleware
from social.middleware.security_context import SecurityContextMiddleware
from social.middleware.security_headers import SecurityHeadersMiddleware

__all__ = [
    "ProcessTimeMiddleware",
    "RateLimitMiddleware",
    "RequestIDMiddleware",
    "SecurityContextMiddleware",
    "SecurityHeadersMiddleware",
]
