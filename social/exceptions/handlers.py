"""Global exception handlers for the social service."""

import logging
import traceback
from datetime import UTC, datetime
from typing import Any

from django.conf import settings
from django.core.exceptions import PermissionDenied
from django.http import Http404

from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

from social.exceptions.social_exceptions import SocialServiceError
from social.logging.context import get_request_id

logger = logging.getLogger(__name__)


def custom_exception_handler(
    exc: Exception, context: dict[str, Any]
) -> Response | None:
    """Custom exception handler for Django REST Framework.

    Handles DRF, Django and domain exceptions, providing:
    - Standard response format for clients:
      {status, error, message, request_id, timestamp}
    - Detailed logging for troubleshooting: error type, path, stack trace

    Args:
        exc: The exception that was raised.
        context: Context dictionary containing request and view information.

    Returns:
        A Response object with the error details.
    """
    view = context.get("view")
    request = view.request if view else context.get("request")
    request_id = get_request_id()

    # Let DRF handle its own exceptions first
    response = exception_handler(exc, context)

    if response is not None:
        response.data = _create_error_response(
            status_code=response.status_code,
            error=_error_code_for(response.status_code),
            message=_drf_message(exc, response),
            request_id=request_id,
        )
    elif isinstance(exc, SocialServiceError):
        response_data = _create_error_response(
            status_code=exc.status_code,
            error=exc.error,
            message=str(exc),
            request_id=request_id,
        )
        if exc.detail:
            response_data["detail"] = exc.detail
        response = Response(response_data, status=exc.status_code)
    elif isinstance(exc, Http404):
        response = Response(
            _create_error_response(
                status_code=status.HTTP_404_NOT_FOUND,
                error="not_found",
                message="The requested resource was not found.",
                request_id=request_id,
            ),
            status=status.HTTP_404_NOT_FOUND,
        )
    elif isinstance(exc, PermissionDenied):
        response = Response(
            _create_error_response(
                status_code=status.HTTP_403_FORBIDDEN,
                error="forbidden",
                message="You do not have permission to perform this action.",
                request_id=request_id,
            ),
            status=status.HTTP_403_FORBIDDEN,
        )
    else:
        response = Response(
            _create_error_response(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                error="internal_error",
                message="An internal server error occurred.",
                request_id=request_id,
            ),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if request_id:
        response["X-Request-ID"] = request_id

    _log_exception(exc, request, response)

    return response


def _create_error_response(
    status_code: int, error: str, message: str, request_id: str | None
) -> dict[str, Any]:
    """Create a standardized error response.

    Args:
        status_code: The HTTP status code.
        error: Short machine-readable error code.
        message: The error message to return to the client.
        request_id: The request ID for tracing.

    Returns:
        Dictionary with standard error response format.
    """
    return {
        "status": status_code,
        "error": error,
        "message": message,
        "request_id": request_id,
        "timestamp": datetime.now(UTC).isoformat(),
    }


def _error_code_for(status_code: int) -> str:
    """Map an HTTP status code to the error code used in responses."""
    return {
        400: "bad_request",
        401: "unauthorized",
        403: "forbidden",
        404: "not_found",
        405: "method_not_allowed",
        409: "conflict",
        429: "too_many_requests",
    }.get(status_code, "internal_error" if status_code >= 500 else "error")


def _drf_message(exc: Exception, response: Response) -> str:
    """Extract a readable message from a DRF exception response."""
    data = response.data
    if isinstance(data, dict) and "detail" in data:
        return str(data["detail"])
    if isinstance(exc, APIException):
        return str(exc.detail)
    return str(exc)


def _log_exception(
    exc: Exception,
    request: Any,
    response: Response,
) -> None:
    """Log detailed exception information for troubleshooting.

    Client errors (4xx) are logged as warnings, everything else as errors.
    In DEBUG mode, logs include stack traces and request details.

    Args:
        exc: The exception that was raised.
        request: The HTTP request object.
        response: The response object.
    """
    log_level = logging.WARNING if response.status_code < 500 else logging.ERROR

    error_type = type(exc).__name__
    request_path = request.path if request else "unknown"
    request_method = request.method if request else "unknown"

    log_message = (
        f"Exception occurred: {error_type}: {exc} | "
        f"Path: {request_method} {request_path} | "
        f"Status: {response.status_code}"
    )

    if settings.DEBUG:
        stack_trace = "".join(
            traceback.format_exception(type(exc), exc, exc.__traceback__)
        )
        log_message += f"\nStack trace:\n{stack_trace}"
        if request:
            log_message += f"\nRequest details: {_get_request_details(request)}"

    logger.log(log_level, log_message)


def _get_request_details(request: Any) -> str:
    """Extract relevant request details for logging.

    Args:
        request: The HTTP request object.

    Returns:
        String with formatted request details.
    """
    details = {
        "method": request.method,
        "path": request.path,
        "user": getattr(request, "user", "anonymous"),
        "ip": request.META.get("REMOTE_ADDR", "unknown"),
    }

    if request.GET:
        details["query_params"] = dict(request.GET)

    return str(details)
