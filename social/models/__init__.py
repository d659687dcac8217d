"""Database models for the social application."""

from social.models.follow import Follow
from social.models.notification import Notification
from social.models.notification_preference import NotificationPreference
from social.models.post import Post, PostComment, PostLike
from social.models.profile import Profile

__all__ = [
    "Follow",
    "Notification",
    "NotificationPreference",
    "Post",
    "PostComment",
    "PostLike",
    "Profile",
]
