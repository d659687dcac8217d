"""Notification schemas."""

from social.schemas.notification.request import (
    MarkReadRequest,
    NotificationActionRequest,
    NotificationListQuery,
    NotificationReadStateRequest,
)
from social.schemas.notification.response import (
    ClearNotificationsResponse,
    FollowRequestState,
    MarkReadResponse,
    NotificationListResponse,
    UnreadCountResponse,
    UserNotification,
)

__all__ = [
    "ClearNotificationsResponse",
    "FollowRequestState",
    "MarkReadRequest",
    "MarkReadResponse",
    "NotificationActionRequest",
    "NotificationListQuery",
    "NotificationListResponse",
    "NotificationReadStateRequest",
    "UnreadCountResponse",
    "UserNotification",
]
