"""Security context middleware for the authenticated caller."""

import logging
from collections.abc import Callable

from django.http import HttpRequest, HttpResponse

from social.auth.context import clear_current_user, get_current_user

logger = logging.getLogger(__name__)


class SecurityContextMiddleware:
    """Middleware bounding the lifetime of the thread-local security context.

    BearerTokenAuthentication stores the principal when DRF authenticates the
    request inside the view. This middleware guarantees the principal is
    removed once the response has been produced, including on errors, so a
    worker thread never serves a request with a previous caller's identity.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        """Initialize the middleware.

        Args:
            get_response: The next middleware or view in the chain.
        """
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """Process the request and clear the security context afterwards.

        Args:
            request: The incoming HTTP request.

        Returns:
            The HTTP response.
        """
        # A stale principal here means an earlier request skipped cleanup
        if get_current_user() is not None:
            logger.warning("Clearing stale security context before request")
            clear_current_user()

        try:
            return self.get_response(request)
        finally:
            clear_current_user()
