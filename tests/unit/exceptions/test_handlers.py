"""Unit tests for exception handlers."""

import unittest
from unittest.mock import Mock, patch
from uuid import uuid4

from django.core.exceptions import PermissionDenied
from django.http import Http404

from rest_framework import status
from rest_framework.exceptions import NotAuthenticated, NotFound
from rest_framework.views import APIView

from social.exceptions import (
    DuplicateFollowError,
    FollowNotFoundError,
    InvalidActionError,
    ProfileNotFoundError,
    SelfFollowError,
)
from social.exceptions.handlers import custom_exception_handler


@patch("social.exceptions.handlers.get_request_id", return_value="test-request-id")
class TestCustomExceptionHandler(unittest.TestCase):
    """Test cases for custom exception handler."""

    def setUp(self):
        """Set up test fixtures."""
        self.mock_request = Mock()
        self.mock_request.path = "/api/follow"
        self.mock_request.method = "POST"
        self.mock_request.META = {"REMOTE_ADDR": "127.0.0.1"}
        self.mock_request.GET = {}

        self.mock_view = Mock(spec=APIView)
        self.mock_view.request = self.mock_request

        self.context = {"view": self.mock_view, "request": self.mock_request}

    def test_response_body_has_standard_shape(self, _mock_request_id):
        """Every error body carries status, error, message, id and timestamp."""
        response = custom_exception_handler(SelfFollowError(), self.context)

        self.assertEqual(
            set(response.data),
            {"status", "error", "message", "request_id", "timestamp"},
        )
        self.assertEqual(response.data["request_id"], "test-request-id")
        self.assertEqual(response["X-Request-ID"], "test-request-id")

    def test_self_follow_maps_to_400(self, _mock_request_id):
        """Following yourself is a bad request."""
        response = custom_exception_handler(SelfFollowError(), self.context)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "bad_request")
        self.assertEqual(response.data["message"], "You cannot follow yourself")

    def test_invalid_action_maps_to_400(self, _mock_request_id):
        """Invalid actions are bad requests."""
        response = custom_exception_handler(
            InvalidActionError("Not a follow request"), self.context
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_not_found_errors_map_to_404(self, _mock_request_id):
        """Missing profiles and follow edges are 404s."""
        for exc in (ProfileNotFoundError(uuid4()), FollowNotFoundError()):
            response = custom_exception_handler(exc, self.context)
            self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
            self.assertEqual(response.data["error"], "not_found")

    def test_duplicate_follow_maps_to_409_with_detail(self, _mock_request_id):
        """A duplicate follow is a conflict naming the existing status."""
        response = custom_exception_handler(
            DuplicateFollowError("pending"), self.context
        )

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["error"], "conflict")
        self.assertEqual(response.data["message"], "Follow request already sent")
        self.assertEqual(response.data["detail"], "Existing follow status: pending")

    def test_handles_drf_exceptions(self, _mock_request_id):
        """DRF exceptions keep their status and are rewritten to the shape."""
        response = custom_exception_handler(NotAuthenticated(), self.context)

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data["error"], "unauthorized")

        response = custom_exception_handler(NotFound("gone"), self.context)
        self.assertEqual(response.data["message"], "gone")

    def test_handles_django_exceptions(self, _mock_request_id):
        """Django Http404 and PermissionDenied map to 404 and 403."""
        response = custom_exception_handler(Http404("missing"), self.context)
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

        response = custom_exception_handler(PermissionDenied(), self.context)
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    @patch("social.exceptions.handlers.logger")
    def test_unexpected_exception_is_500_and_logged_as_error(
        self, mock_logger, _mock_request_id
    ):
        """Unknown exceptions become a generic 500 logged at ERROR."""
        response = custom_exception_handler(RuntimeError("db exploded"), self.context)

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data["message"], "An internal server error occurred.")
        self.assertEqual(mock_logger.log.call_args[0][0], 40)

    @patch("social.exceptions.handlers.logger")
    def test_client_errors_logged_as_warning(self, mock_logger, _mock_request_id):
        """4xx responses are logged at WARNING."""
        custom_exception_handler(FollowNotFoundError(), self.context)

        self.assertEqual(mock_logger.log.call_args[0][0], 30)
