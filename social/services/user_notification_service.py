"""Service for the recipient-facing notification feed.

Handles listing notifications with pagination, read-state changes, deletion
and responding to follow requests straight from a notification.
"""

from uuid import UUID

from django.utils import timezone

import structlog

from social.auth.context import require_current_user
from social.constants import REQUEST_UNAVAILABLE_MESSAGE
from social.enums import FollowAction, NotificationAction, NotificationType
from social.exceptions import InvalidActionError, NotificationNotFoundError
from social.models import Follow, Notification
from social.schemas.follow import FollowRespondResponse
from social.schemas.follow.response import FollowEdge
from social.schemas.notification import (
    ClearNotificationsResponse,
    FollowRequestState,
    MarkReadResponse,
    NotificationListResponse,
    UnreadCountResponse,
    UserNotification,
)
from social.schemas.profile import ProfileSummary
from social.services.follow_service import follow_service

logger = structlog.get_logger(__name__)

# Edge status rendered when a follow notification outlives its edge
UNAVAILABLE_FOLLOW_STATUS = "unavailable"

FOLLOW_NOTIFICATION_TYPES = (
    NotificationType.FOLLOW_REQUEST.value,
    NotificationType.FOLLOW_ACCEPTED.value,
    NotificationType.NEW_FOLLOWER.value,
)

NOTIFICATION_TO_FOLLOW_ACTION = {
    NotificationAction.ACCEPT.value: FollowAction.ACCEPT,
    NotificationAction.DECLINE.value: FollowAction.REJECT,
}


class UserNotificationService:
    """Service for the authenticated recipient's notifications.

    Every query is scoped to the caller; a notification id owned by someone
    else behaves exactly like an unknown id.
    """

    def get_notifications(
        self,
        limit: int = 20,
        offset: int = 0,
        unread_only: bool = False,
    ) -> NotificationListResponse:
        """Get a page of the caller's notifications, newest first.

        Args:
            limit: Maximum number of results to return (1-100).
            offset: Number of results to skip.
            unread_only: Only return notifications that are still unread.

        Returns:
            NotificationListResponse with the page and the unread count.
        """
        current_user = require_current_user()
        logger.info(
            "get_notifications",
            user_id=str(current_user.user_id),
            limit=limit,
            offset=offset,
            unread_only=unread_only,
        )

        queryset = (
            Notification.objects.filter(recipient_id=current_user.profile_id)
            .select_related("actor")
            .order_by("-created_at", "-id")
        )
        if unread_only:
            queryset = queryset.filter(is_read=False)

        notifications = list(queryset[offset : offset + limit])
        follows = self._load_follows(notifications)

        return NotificationListResponse(
            notifications=[self._render(n, follows) for n in notifications],
            unread_count=self._unread_count(current_user.profile_id),
            limit=limit,
            offset=offset,
            has_more=len(notifications) == limit,
        )

    def get_unread_count(self) -> UnreadCountResponse:
        """Count the caller's unread notifications."""
        current_user = require_current_user()
        return UnreadCountResponse(count=self._unread_count(current_user.profile_id))

    def mark_as_read(self, notification_ids: list[UUID]) -> MarkReadResponse:
        """Mark the given notifications read.

        Ids that are unknown, owned by someone else or already read are
        ignored, and read_at keeps the time of the first read.
        """
        current_user = require_current_user()
        updated = Notification.objects.filter(
            id__in=notification_ids,
            recipient_id=current_user.profile_id,
            is_read=False,
        ).update(is_read=True, read_at=timezone.now(), updated_at=timezone.now())

        logger.info(
            "notifications_marked_as_read",
            user_id=str(current_user.user_id),
            requested_count=len(notification_ids),
            updated_count=updated,
        )
        return MarkReadResponse(
            updated_count=updated,
            unread_count=self._unread_count(current_user.profile_id),
        )

    def mark_all_as_read(self) -> MarkReadResponse:
        """Mark every unread notification of the caller read."""
        current_user = require_current_user()
        updated = Notification.objects.filter(
            recipient_id=current_user.profile_id, is_read=False
        ).update(is_read=True, read_at=timezone.now(), updated_at=timezone.now())

        logger.info(
            "all_notifications_marked_as_read",
            user_id=str(current_user.user_id),
            updated_count=updated,
        )
        return MarkReadResponse(updated_count=updated, unread_count=0)

    def set_read_state(self, notification_id: UUID, read: bool) -> UserNotification:
        """Mark a single notification read or unread.

        Raises:
            NotificationNotFoundError: If the caller has no such notification.
        """
        notification = self._get_owned(notification_id)

        if notification.is_read != read:
            notification.is_read = read
            notification.read_at = timezone.now() if read else None
            notification.save(update_fields=["is_read", "read_at", "updated_at"])
            logger.info(
                "notification_read_state_changed",
                notification_id=str(notification_id),
                read=read,
            )

        return self._render(notification, self._load_follows([notification]))

    def delete_notification(self, notification_id: UUID) -> None:
        """Delete one of the caller's notifications.

        Raises:
            NotificationNotFoundError: If the caller has no such notification.
        """
        notification = self._get_owned(notification_id)
        notification.delete()
        logger.info("notification_deleted", notification_id=str(notification_id))

    def clear_all(self) -> ClearNotificationsResponse:
        """Delete every notification of the caller."""
        current_user = require_current_user()
        deleted, _ = Notification.objects.filter(
            recipient_id=current_user.profile_id
        ).delete()

        logger.info(
            "notifications_cleared",
            user_id=str(current_user.user_id),
            deleted_count=deleted,
        )
        return ClearNotificationsResponse(deleted_count=deleted)

    def respond_to_follow_request(
        self, notification_id: UUID, action: NotificationAction | str
    ) -> FollowRespondResponse:
        """Accept or decline the follow request a notification refers to.

        The notification is marked read once the request has been resolved.

        Raises:
            NotificationNotFoundError: If the caller has no such notification.
            InvalidActionError: If the notification is not a follow request.
            FollowNotFoundError: If the request was cancelled or resolved
                the other way.
        """
        notification = self._get_owned(notification_id)
        if (
            notification.notification_type != NotificationType.FOLLOW_REQUEST.value
            or notification.related_follow_id is None
        ):
            raise InvalidActionError(
                "Only follow request notifications can be accepted or declined"
            )

        action_value = (
            action.value if isinstance(action, NotificationAction) else action
        )
        follow_action = NOTIFICATION_TO_FOLLOW_ACTION.get(action_value)
        if follow_action is None:
            raise InvalidActionError(f"Unsupported notification action: {action_value}")

        follow, event = follow_service.respond_to_request(
            notification.related_follow_id, follow_action
        )

        if not notification.is_read:
            notification.is_read = True
            notification.read_at = timezone.now()
            notification.save(update_fields=["is_read", "read_at", "updated_at"])

        return FollowRespondResponse(
            action=follow_action.value,
            changed=event is not None,
            follow=FollowEdge.model_validate(follow),
        )

    def _get_owned(self, notification_id: UUID) -> Notification:
        current_user = require_current_user()
        notification = (
            Notification.objects.filter(
                id=notification_id, recipient_id=current_user.profile_id
            )
            .select_related("actor")
            .first()
        )
        if notification is None:
            logger.warning(
                "notification_not_found",
                notification_id=str(notification_id),
                user_id=str(current_user.user_id),
            )
            raise NotificationNotFoundError(notification_id)
        return notification

    def _unread_count(self, profile_id: UUID) -> int:
        return Notification.objects.filter(
            recipient_id=profile_id, is_read=False
        ).count()

    def _load_follows(self, notifications: list[Notification]) -> dict[UUID, Follow]:
        """Fetch the follow edges referenced by a page in a single query."""
        follow_ids = {
            n.related_follow_id
            for n in notifications
            if n.related_follow_id is not None
            and n.notification_type in FOLLOW_NOTIFICATION_TYPES
        }
        if not follow_ids:
            return {}
        return Follow.objects.in_bulk(follow_ids)

    def _render(
        self, notification: Notification, follows: dict[UUID, Follow]
    ) -> UserNotification:
        """Render a notification with its actor and live follow state.

        A follow notification whose edge has been deleted renders with status
        "unavailable" instead of failing.
        """
        follow_request = None
        if (
            notification.related_follow_id is not None
            and notification.notification_type in FOLLOW_NOTIFICATION_TYPES
        ):
            follow = follows.get(notification.related_follow_id)
            follow_request = FollowRequestState(
                follow_id=notification.related_follow_id,
                status=follow.status if follow else UNAVAILABLE_FOLLOW_STATUS,
                message=follow.message if follow else REQUEST_UNAVAILABLE_MESSAGE,
            )

        actor = notification.actor
        return UserNotification(
            id=notification.id,
            type=notification.notification_type,
            title=notification.title,
            message=notification.message,
            read=notification.is_read,
            read_at=notification.read_at,
            created_at=notification.created_at,
            actor=ProfileSummary.model_validate(actor) if actor else None,
            related_post_id=notification.related_post_id,
            related_comment_id=notification.related_comment_id,
            related_follow_id=notification.related_follow_id,
            action_url=notification.action_url,
            metadata=notification.metadata,
            follow_request=follow_request,
        )


# Singleton instance for use throughout the application
user_notification_service = UserNotificationService()
