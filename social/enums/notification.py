"""Notification-related enumerations."""

from enum import Enum


class NotificationType(str, Enum):
    """Kinds of in-app notifications stored in the notifications table."""

    FOLLOW_REQUEST = "follow_request"
    FOLLOW_ACCEPTED = "follow_accepted"
    NEW_FOLLOWER = "new_follower"
    LIKE = "like"
    COMMENT = "comment"
    MENTION = "mention"
    SYSTEM = "system"


class NotificationAction(str, Enum):
    """Actions available on a follow_request notification."""

    ACCEPT = "accept"
    DECLINE = "decline"
