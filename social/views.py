"""API views for the social application."""

from uuid import UUID

from django.conf import settings

import structlog
from pydantic import ValidationError
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from social.auth import BearerTokenAuthentication
from social.enums import FollowEventKind
from social.schemas.follow import (
    FollowCreateRequest,
    FollowCreateResponse,
    FollowEdge,
    FollowListQuery,
    FollowRespondRequest,
    FollowRespondResponse,
    ProfileQuery,
)
from social.schemas.notification import (
    MarkReadRequest,
    NotificationActionRequest,
    NotificationListQuery,
    NotificationReadStateRequest,
)
from social.schemas.preference import NotificationPreferencesUpdate
from social.schemas.privacy import PrivacyCheckQuery
from social.services import health_service, privacy_service
from social.services.follow_service import follow_service
from social.services.notification_preference_service import (
    notification_preference_service,
)
from social.services.user_notification_service import user_notification_service

logger = structlog.get_logger(__name__)


def _bad_request(e: ValidationError) -> Response:
    """Render a pydantic validation failure as a 400 response."""
    logger.warning("Invalid request parameters", validation_errors=e.errors())
    return Response(
        {
            "error": "bad_request",
            "message": "Invalid request parameters",
            "errors": e.errors(include_url=False, include_context=False),
        },
        status=status.HTTP_400_BAD_REQUEST,
    )


class LivenessCheckView(APIView):
    """Liveness probe endpoint for Kubernetes.

    Returns 200 if the process is alive. Dependencies are not checked.
    """

    authentication_classes = ()
    permission_classes = (AllowAny,)

    def get(self, _request):
        """Handle GET request for liveness check."""
        liveness = health_service.get_liveness_status()
        return Response(liveness.model_dump(), status=status.HTTP_200_OK)


class ReadinessCheckView(APIView):
    """Readiness probe endpoint for Kubernetes.

    Returns 200 with a degraded status when the database or cache is down
    so the instance stays in rotation while it reconnects.
    """

    authentication_classes = ()
    permission_classes = (AllowAny,)

    def get(self, _request):
        """Handle GET request for readiness check."""
        readiness = health_service.get_readiness_status()
        return Response(readiness.model_dump(mode="json"), status=status.HTTP_200_OK)


class FollowView(APIView):
    """Follow a profile, or request to follow a private one.

    POST: 201 with the stored edge. A private target yields a pending edge.
    """

    authentication_classes = (BearerTokenAuthentication,)
    permission_classes = (IsAuthenticated,)

    def post(self, request):
        """Handle POST request to follow a profile.

        Args:
            request: HTTP request with followingId and optional message

        Returns:
            201 Created with FollowCreateResponse
            400 Bad Request if validation fails or the caller targets itself
            404 Not Found if the target profile does not exist
            409 Conflict if a pending or accepted edge already exists
        """
        try:
            follow_request = FollowCreateRequest(**request.data)
        except ValidationError as e:
            return _bad_request(e)

        follow, event = follow_service.follow(
            follow_request.following_id, follow_request.message
        )
        is_pending = event.kind == FollowEventKind.REQUESTED
        response = FollowCreateResponse(
            action=event.kind.value,
            is_pending=is_pending,
            message="Follow request sent" if is_pending else "Now following",
            follow=FollowEdge.model_validate(follow),
        )
        return Response(response.to_response(), status=status.HTTP_201_CREATED)


class UnfollowView(APIView):
    """Unfollow a profile or cancel a pending request."""

    authentication_classes = (BearerTokenAuthentication,)
    permission_classes = (IsAuthenticated,)

    def delete(self, _request, profile_id: UUID):
        """Handle DELETE request removing the caller's edge to profile_id."""
        follow_service.unfollow(profile_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class FollowStatsView(APIView):
    """Follower and following counts of a profile."""

    authentication_classes = (BearerTokenAuthentication,)
    permission_classes = (IsAuthenticated,)

    def get(self, request):
        """Handle GET request for follow stats; profileId defaults to caller."""
        try:
            query = ProfileQuery(**request.query_params.dict())
        except ValidationError as e:
            return _bad_request(e)

        stats = follow_service.get_follow_stats(query.profile_id)
        return Response(stats.to_response(), status=status.HTTP_200_OK)


class FollowersView(APIView):
    """Follow lists and follow request resolution.

    GET: followers, following or pending requests of a profile
    POST: accept or reject a pending request addressed to the caller
    """

    authentication_classes = (BearerTokenAuthentication,)
    permission_classes = (IsAuthenticated,)

    def get(self, request):
        """Handle GET request for a follow list.

        Query parameters:
        - type: followers (default), following or requests
        - profileId: Profile whose list to read (default: caller)

        Returns:
            200 OK with FollowListResponse
            403 Forbidden for a private profile the caller may not view, or
                for another profile's requests
            404 Not Found if the profile does not exist
        """
        try:
            query = FollowListQuery(**request.query_params.dict())
        except ValidationError as e:
            return _bad_request(e)

        if query.type == "following":
            result = follow_service.list_following(query.profile_id)
        elif query.type == "requests":
            result = follow_service.list_requests(query.profile_id)
        else:
            result = follow_service.list_followers(query.profile_id)
        return Response(result.to_response(), status=status.HTTP_200_OK)

    def post(self, request):
        """Handle POST request accepting or rejecting a follow request.

        Returns:
            200 OK with FollowRespondResponse; changed is false when the
                request had already been resolved the same way
            404 Not Found if the request does not exist, is not addressed to
                the caller, or was resolved the other way
        """
        try:
            respond_request = FollowRespondRequest(**request.data)
        except ValidationError as e:
            return _bad_request(e)

        follow, event = follow_service.respond_to_request(
            respond_request.follow_id, respond_request.action
        )
        response = FollowRespondResponse(
            action=respond_request.action,
            changed=event is not None,
            follow=FollowEdge.model_validate(follow),
        )
        return Response(response.to_response(), status=status.HTTP_200_OK)


class NotificationListView(APIView):
    """The caller's notification feed.

    GET: paginated list, newest first
    PUT/PATCH: mark selected or all notifications read
    DELETE: clear every notification
    """

    authentication_classes = (BearerTokenAuthentication,)
    permission_classes = (IsAuthenticated,)

    def get(self, request):
        """Handle GET request for the caller's notifications.

        Query parameters:
        - limit: Page size (default from NOTIFICATION_PAGE_SIZE)
        - offset: Rows to skip (default: 0)
        - unreadOnly: Only unread notifications (default: false)
        """
        params = request.query_params.dict()
        params.setdefault("limit", settings.NOTIFICATION_PAGE_SIZE)
        try:
            query = NotificationListQuery(**params)
        except ValidationError as e:
            return _bad_request(e)

        result = user_notification_service.get_notifications(
            limit=min(query.limit, settings.NOTIFICATION_MAX_PAGE_SIZE),
            offset=query.offset,
            unread_only=query.unread_only,
        )
        return Response(result.to_response(), status=status.HTTP_200_OK)

    def put(self, request):
        """Handle PUT request marking notifications read."""
        return self._mark_read(request)

    def patch(self, request):
        """Handle PATCH request marking notifications read."""
        return self._mark_read(request)

    def delete(self, _request):
        """Handle DELETE request clearing all of the caller's notifications."""
        result = user_notification_service.clear_all()
        return Response(result.to_response(), status=status.HTTP_200_OK)

    def _mark_read(self, request):
        try:
            mark_request = MarkReadRequest(**request.data)
        except ValidationError as e:
            return _bad_request(e)

        if mark_request.mark_all_as_read:
            result = user_notification_service.mark_all_as_read()
        else:
            result = user_notification_service.mark_as_read(
                mark_request.notification_ids
            )
        return Response(result.to_response(), status=status.HTTP_200_OK)


class UnreadCountView(APIView):
    """Unread badge count of the caller."""

    authentication_classes = (BearerTokenAuthentication,)
    permission_classes = (IsAuthenticated,)

    def get(self, _request):
        """Handle GET request for the unread count."""
        result = user_notification_service.get_unread_count()
        return Response(result.to_response(), status=status.HTTP_200_OK)


class NotificationDetailView(APIView):
    """A single notification of the caller.

    PATCH: mark read or unread
    DELETE: delete it
    """

    authentication_classes = (BearerTokenAuthentication,)
    permission_classes = (IsAuthenticated,)

    def patch(self, request, notification_id: UUID):
        """Handle PATCH request setting the read state."""
        try:
            read_request = NotificationReadStateRequest(**request.data)
        except ValidationError as e:
            return _bad_request(e)

        notification = user_notification_service.set_read_state(
            notification_id, read_request.read
        )
        return Response(notification.to_response(), status=status.HTTP_200_OK)

    def delete(self, _request, notification_id: UUID):
        """Handle DELETE request for one notification."""
        user_notification_service.delete_notification(notification_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class NotificationActionView(APIView):
    """Accept or decline a follow request from its notification."""

    authentication_classes = (BearerTokenAuthentication,)
    permission_classes = (IsAuthenticated,)

    def post(self, request, notification_id: UUID):
        """Handle POST request with action accept or decline.

        Returns:
            200 OK with FollowRespondResponse
            400 Bad Request if the notification is not a follow request
            404 Not Found if the notification or its request is gone
        """
        try:
            action_request = NotificationActionRequest(**request.data)
        except ValidationError as e:
            return _bad_request(e)

        result = user_notification_service.respond_to_follow_request(
            notification_id, action_request.action
        )
        return Response(result.to_response(), status=status.HTTP_200_OK)


class NotificationPreferencesView(APIView):
    """The caller's notification preferences."""

    authentication_classes = (BearerTokenAuthentication,)
    permission_classes = (IsAuthenticated,)

    def get(self, _request):
        """Handle GET request for preferences."""
        preferences = notification_preference_service.get_preferences()
        return Response(preferences.to_response(), status=status.HTTP_200_OK)

    def patch(self, request):
        """Handle PATCH request updating the given switches only."""
        try:
            update = NotificationPreferencesUpdate(**request.data)
        except ValidationError as e:
            return _bad_request(e)

        preferences = notification_preference_service.update_preferences(update)
        return Response(preferences.to_response(), status=status.HTTP_200_OK)


class PrivacyCheckView(APIView):
    """Whether the caller may view a profile."""

    authentication_classes = (BearerTokenAuthentication,)
    permission_classes = (IsAuthenticated,)

    def get(self, request):
        """Handle GET request with a required profileId query parameter."""
        try:
            query = PrivacyCheckQuery(**request.query_params.dict())
        except ValidationError as e:
            return _bad_request(e)

        decision = privacy_service.can_view_profile(query.profile_id)
        return Response(decision.to_response(), status=status.HTTP_200_OK)
