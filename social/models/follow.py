"""Follow model."""

import uuid
from typing import ClassVar

from django.db import models

from social.enums import FollowStatus


class Follow(models.Model):
    """Directed follow edge matching the platform follows table.

    At most one edge exists per ordered (follower, following) pair. Private
    targets receive the edge as pending; public targets as accepted. Declined
    requests stay in the table as rejected; unfollowing deletes the row.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    follower = models.ForeignKey(
        "social.Profile",
        on_delete=models.CASCADE,
        related_name="following_edges",
        db_column="follower_id",
    )
    following = models.ForeignKey(
        "social.Profile",
        on_delete=models.CASCADE,
        related_name="follower_edges",
        db_column="following_id",
    )
    status = models.CharField(
        max_length=10,
        choices=[(s.value, s.value) for s in FollowStatus],
        default=FollowStatus.ACCEPTED.value,
    )
    message = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Django model metadata."""

        db_table = "follows"
        managed = False  # Schema is managed externally
        ordering: ClassVar[list[str]] = ["-created_at"]
        constraints: ClassVar[list] = [
            models.UniqueConstraint(
                fields=["follower", "following"],
                name="follows_follower_id_following_id_key",
            ),
        ]
        indexes: ClassVar[list] = [
            models.Index(fields=["follower"]),
            models.Index(fields=["following"]),
            models.Index(fields=["following", "status"]),
        ]

    @property
    def is_pending(self) -> bool:
        """Whether the edge still awaits the target's decision."""
        return self.status == FollowStatus.PENDING.value

    def __str__(self) -> str:
        """Return string representation of follow edge."""
        return f"{self.follower_id} -> {self.following_id} ({self.status})"

    def __repr__(self) -> str:
        """Return detailed representation of follow edge."""
        return (
            f"<Follow(id={self.id}, follower={self.follower_id}, "
            f"following={self.following_id}, status={self.status})>"
        )
