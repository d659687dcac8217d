"""Notification model for in-app notification records.

Each row is a fan-out record for one recipient. Rows reference the follow
edge, post or comment that caused them by id only, so deleting the source
leaves a dangling reference that readers must tolerate.
"""

import uuid
from typing import ClassVar

from django.db import models

from social.enums import NotificationType


class Notification(models.Model):
    """In-app notification addressed to a single profile.

    Attributes:
        id: Unique identifier for the notification.
        recipient: The profile receiving this notification.
        actor: The profile whose action caused it (None for system messages).
        notification_type: One of NotificationType.
        title: Rendered headline.
        message: Optional body (follow request message, comment preview).
        related_post_id: Post the notification is about, if any.
        related_comment_id: Comment the notification is about, if any.
        related_follow_id: Follow edge the notification is about, if any.
        action_url: Client route to open when the notification is tapped.
        metadata: Free-form JSON carried to the client.
        is_read: Whether the recipient has read it.
        read_at: When it was first marked as read.
        created_at: When the notification was created.
        updated_at: When the notification was last updated.
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        help_text="Unique identifier for the notification",
    )
    recipient = models.ForeignKey(
        "social.Profile",
        on_delete=models.CASCADE,
        related_name="notifications",
        db_column="user_id",
        help_text="Profile receiving the notification",
    )
    actor = models.ForeignKey(
        "social.Profile",
        on_delete=models.CASCADE,
        related_name="+",
        db_column="actor_id",
        null=True,
        blank=True,
        help_text="Profile that triggered the notification",
    )
    notification_type = models.CharField(
        max_length=30,
        db_column="type",
        choices=[(t.value, t.value) for t in NotificationType],
    )
    title = models.TextField()
    message = models.TextField(null=True, blank=True)
    related_post_id = models.UUIDField(null=True, blank=True, db_column="post_id")
    related_comment_id = models.UUIDField(
        null=True, blank=True, db_column="comment_id"
    )
    related_follow_id = models.UUIDField(null=True, blank=True, db_column="follow_id")
    action_url = models.TextField(null=True, blank=True)
    metadata = models.JSONField(null=True, blank=True)
    is_read = models.BooleanField(default=False)
    read_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Django model metadata."""

        db_table = "notifications"
        managed = False
        ordering: ClassVar[list[str]] = ["-created_at"]
        indexes: ClassVar[list] = [
            models.Index(fields=["recipient", "-created_at"]),
            models.Index(fields=["recipient", "is_read"]),
            models.Index(fields=["notification_type"]),
        ]

    def __str__(self) -> str:
        """Return string representation of notification."""
        return f"{self.notification_type} for {self.recipient_id}"

    def __repr__(self) -> str:
        """Return detailed representation of notification."""
        return (
            f"<Notification(id={self.id}, "
            f"type={self.notification_type}, "
            f"recipient={self.recipient_id}, "
            f"is_read={self.is_read})>"
        )
