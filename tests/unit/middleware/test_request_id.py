"""Unit tests for RequestIDMiddleware."""

import unittest
import uuid

from django.http import HttpRequest, HttpResponse

from social.constants import REQUEST_ID_HEADER
from social.logging.context import get_request_id
from social.middleware.request_id import RequestIDMiddleware


class TestRequestIDMiddleware(unittest.TestCase):
    """Test cases for RequestIDMiddleware."""

    def setUp(self):
        """Set up test fixtures."""
        self.seen_ids = []

        def get_response(request):
            self.seen_ids.append(get_request_id())
            return HttpResponse("OK")

        self.middleware = RequestIDMiddleware(get_response)

    def _create_request(self, headers=None):
        request = HttpRequest()
        request.method = "GET"
        request.path = "/api/notifications"
        for key, value in (headers or {}).items():
            request.META[f"HTTP_{key.upper().replace('-', '_')}"] = value
        return request

    def test_generates_uuid_when_header_missing(self):
        """A missing header gets a fresh UUID on request and response."""
        request = self._create_request()
        response = self.middleware(request)

        uuid.UUID(request.request_id)
        self.assertEqual(response[REQUEST_ID_HEADER], request.request_id)

    def test_reuses_incoming_request_id(self):
        """An incoming X-Request-ID is propagated unchanged."""
        existing_id = str(uuid.uuid4())
        request = self._create_request(headers={REQUEST_ID_HEADER: existing_id})

        response = self.middleware(request)

        self.assertEqual(request.request_id, existing_id)
        self.assertEqual(response[REQUEST_ID_HEADER], existing_id)

    def test_request_id_visible_to_loggers_during_request(self):
        """The id is in thread-local storage while the view runs."""
        request = self._create_request()
        self.middleware(request)

        self.assertEqual(self.seen_ids, [request.request_id])

    def test_thread_local_cleared_after_request(self):
        """The id does not outlive the request."""
        self.middleware(self._create_request())
        self.assertIsNone(get_request_id())
