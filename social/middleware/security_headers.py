"""Security headers middleware."""

from collections.abc import Callable

from django.http import HttpRequest, HttpResponse

from social.constants import SECURITY_HEADERS


class SecurityHeadersMiddleware:
    """Middleware to add the standard security headers to all responses.

    The API only serves JSON, so the headers lock framing, sniffing and
    resource loading down completely.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        """Initialize the middleware.

        Args:
            get_response: The next middleware or view in the chain.
        """
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """Process the request and add security headers to the response."""
        response = self.get_response(request)

        for header, value in SECURITY_HEADERS.items():
            response[header] = value

        return response
