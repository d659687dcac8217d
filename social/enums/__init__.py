"""Enumerations for the social app."""

from social.enums.follow import FollowAction, FollowEventKind, FollowStatus
from social.enums.health_status import HealthStatus
from social.enums.notification import NotificationAction, NotificationType
from social.enums.profile import PrivacyReason, ProfileVisibility

__all__ = [
    "FollowAction",
    "FollowEventKind",
    "FollowStatus",
    "HealthStatus",
    "NotificationAction",
    "NotificationType",
    "PrivacyReason",
    "ProfileVisibility",
]
