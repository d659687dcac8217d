"""Post, like and comment models.

Only the columns needed to route like/comment/mention notifications are
mapped here; the feed itself is served elsewhere.
"""

import uuid
from typing import ClassVar

from django.db import models


class Post(models.Model):
    """Feed post authored by a profile."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    author = models.ForeignKey(
        "social.Profile",
        on_delete=models.CASCADE,
        related_name="posts",
        db_column="profile_id",
    )
    caption = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Django model metadata."""

        db_table = "posts"
        managed = False  # Schema is managed externally
        ordering: ClassVar[list[str]] = ["-created_at"]

    def __str__(self) -> str:
        """Return string representation of post."""
        return f"Post {self.id} by {self.author_id}"


class PostLike(models.Model):
    """A profile liking a post."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    post = models.ForeignKey(
        "social.Post",
        on_delete=models.CASCADE,
        related_name="likes",
        db_column="post_id",
    )
    profile = models.ForeignKey(
        "social.Profile",
        on_delete=models.CASCADE,
        related_name="+",
        db_column="profile_id",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Django model metadata."""

        db_table = "post_likes"
        managed = False  # Schema is managed externally
        constraints: ClassVar[list] = [
            models.UniqueConstraint(
                fields=["post", "profile"], name="post_likes_post_id_profile_id_key"
            ),
        ]

    def __str__(self) -> str:
        """Return string representation of like."""
        return f"{self.profile_id} likes {self.post_id}"


class PostComment(models.Model):
    """A comment left on a post."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    post = models.ForeignKey(
        "social.Post",
        on_delete=models.CASCADE,
        related_name="comments",
        db_column="post_id",
    )
    profile = models.ForeignKey(
        "social.Profile",
        on_delete=models.CASCADE,
        related_name="+",
        db_column="profile_id",
    )
    content = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Django model metadata."""

        db_table = "post_comments"
        managed = False  # Schema is managed externally
        ordering: ClassVar[list[str]] = ["created_at"]

    def __str__(self) -> str:
        """Return string representation of comment."""
        return f"Comment {self.id} on {self.post_id}"
