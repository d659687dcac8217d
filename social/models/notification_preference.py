"""NotificationPreference model."""

import uuid

from django.db import models

from social.enums import NotificationType

# Preference column governing each notification type
PREFERENCE_FIELDS: dict[str, str] = {
    NotificationType.FOLLOW_REQUEST.value: "follow_requests_enabled",
    NotificationType.FOLLOW_ACCEPTED.value: "follow_accepted_enabled",
    NotificationType.NEW_FOLLOWER.value: "new_followers_enabled",
    NotificationType.LIKE.value: "likes_enabled",
    NotificationType.COMMENT.value: "comments_enabled",
    NotificationType.MENTION.value: "mentions_enabled",
    NotificationType.SYSTEM.value: "system_announcements_enabled",
}


class NotificationPreference(models.Model):
    """Per-profile opt-outs for notification categories.

    A missing row means every category is enabled.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    profile = models.OneToOneField(
        "social.Profile",
        on_delete=models.CASCADE,
        related_name="notification_preferences",
        db_column="user_id",
    )
    follow_requests_enabled = models.BooleanField(default=True)
    follow_accepted_enabled = models.BooleanField(default=True)
    new_followers_enabled = models.BooleanField(default=True)
    likes_enabled = models.BooleanField(default=True)
    comments_enabled = models.BooleanField(default=True)
    mentions_enabled = models.BooleanField(default=True)
    system_announcements_enabled = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Django model metadata."""

        db_table = "notification_preferences"
        managed = False  # Schema is managed externally

    def allows(self, notification_type: str) -> bool:
        """Return whether the given notification type may be delivered."""
        field = PREFERENCE_FIELDS.get(notification_type)
        if field is None:
            return True
        return bool(getattr(self, field))

    def __str__(self) -> str:
        """Return string representation of preferences."""
        return f"Notification preferences for {self.profile_id}"
