"""Notification request schemas."""

from uuid import UUID

from pydantic import Field, model_validator

from social.constants import DEFAULT_NOTIFICATION_LIMIT, MAX_NOTIFICATION_LIMIT
from social.enums import NotificationAction
from social.schemas.base_schema_model import BaseSchemaModel


class NotificationListQuery(BaseSchemaModel):
    """Query string of GET /api/notifications."""

    limit: int = Field(
        DEFAULT_NOTIFICATION_LIMIT, ge=1, le=MAX_NOTIFICATION_LIMIT
    )
    offset: int = Field(0, ge=0)
    unread_only: bool = Field(False, description="Only return unread notifications")


class MarkReadRequest(BaseSchemaModel):
    """Body of PUT/PATCH /api/notifications.

    Either a list of ids or markAllAsRead=true must be given.
    """

    notification_ids: list[UUID] | None = Field(None, max_length=100)
    mark_all_as_read: bool = False

    @model_validator(mode="after")
    def check_target(self) -> "MarkReadRequest":
        """Reject bodies that name neither ids nor markAllAsRead."""
        if not self.mark_all_as_read and not self.notification_ids:
            raise ValueError("Provide notificationIds or markAllAsRead")
        return self


class NotificationReadStateRequest(BaseSchemaModel):
    """Body of PATCH /api/notifications/<id>."""

    read: bool = True


class NotificationActionRequest(BaseSchemaModel):
    """Body of POST /api/notifications/<id>/action."""

    action: NotificationAction
