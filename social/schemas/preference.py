"""Notification preference schemas."""

from social.schemas.base_schema_model import BaseSchemaModel


class NotificationPreferences(BaseSchemaModel):
    """Per-category notification switches of the caller."""

    follow_requests_enabled: bool
    follow_accepted_enabled: bool
    new_followers_enabled: bool
    likes_enabled: bool
    comments_enabled: bool
    mentions_enabled: bool
    system_announcements_enabled: bool


class NotificationPreferencesUpdate(BaseSchemaModel):
    """Partial update of notification switches; omitted fields are unchanged."""

    follow_requests_enabled: bool | None = None
    follow_accepted_enabled: bool | None = None
    new_followers_enabled: bool | None = None
    likes_enabled: bool | None = None
    comments_enabled: bool | None = None
    mentions_enabled: bool | None = None
    system_announcements_enabled: bool | None = None
