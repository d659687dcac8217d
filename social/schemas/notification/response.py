"""Notification response schemas."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import Field

from social.schemas.base_schema_model import BaseSchemaModel
from social.schemas.profile import ProfileSummary


class FollowRequestState(BaseSchemaModel):
    """Live state of the follow edge a notification refers to.

    status is the edge status, or "unavailable" when the edge no longer
    exists (the follower unfollowed or cancelled the request).
    """

    follow_id: UUID
    status: str
    message: str | None = None


class UserNotification(BaseSchemaModel):
    """A notification rendered for its recipient."""

    id: UUID
    type: str
    title: str
    message: str | None = None
    read: bool
    read_at: datetime | None = None
    created_at: datetime
    actor: ProfileSummary | None = None
    related_post_id: UUID | None = None
    related_comment_id: UUID | None = None
    related_follow_id: UUID | None = None
    action_url: str | None = None
    metadata: dict[str, Any] | None = None
    follow_request: FollowRequestState | None = None


class NotificationListResponse(BaseSchemaModel):
    """Page of notifications plus the caller's unread badge count."""

    notifications: list[UserNotification]
    unread_count: int
    limit: int
    offset: int
    has_more: bool = Field(
        ..., description="True when the page is full; more rows may follow"
    )


class UnreadCountResponse(BaseSchemaModel):
    """Unread notification count."""

    count: int


class MarkReadResponse(BaseSchemaModel):
    """Result of a mark-as-read call."""

    updated_count: int = Field(..., description="Rows that flipped from unread")
    unread_count: int


class ClearNotificationsResponse(BaseSchemaModel):
    """Result of clearing notifications."""

    deleted_count: int
