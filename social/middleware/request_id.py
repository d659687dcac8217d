"""Request ID middleware for distributed tracing."""

import uuid
from collections.abc import Callable

from django.http import HttpRequest, HttpResponse

from social.constants import REQUEST_ID_HEADER
from social.logging.context import clear_request_id, set_request_id


class RequestIDMiddleware:
    """Middleware to handle request ID for distributed tracing.

    Reuses the incoming X-Request-ID header or generates a UUID, exposes it
    to loggers through thread-local storage and echoes it on the response.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        """Initialize the middleware.

        Args:
            get_response: The next middleware or view in the chain.
        """
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """Process the request and add request ID tracking.

        Args:
            request: The incoming HTTP request.

        Returns:
            The HTTP response with request ID header added.
        """
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())

        set_request_id(request_id)
        request.request_id = request_id  # type: ignore[attr-defined]

        try:
            response = self.get_response(request)
            response[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            clear_request_id()
