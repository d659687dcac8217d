"""Service for per-profile notification preferences."""

import structlog

from social.auth.context import require_current_user
from social.exceptions import ProfileNotFoundError
from social.models import NotificationPreference, Profile
from social.schemas.preference import (
    NotificationPreferences,
    NotificationPreferencesUpdate,
)

logger = structlog.get_logger(__name__)


class NotificationPreferenceService:
    """Reads and updates the caller's notification switches."""

    def get_preferences(self) -> NotificationPreferences:
        """Return the caller's preferences, creating the all-enabled default."""
        preferences = self._get_or_create()
        return NotificationPreferences.model_validate(preferences)

    def update_preferences(
        self, update: NotificationPreferencesUpdate
    ) -> NotificationPreferences:
        """Apply a partial update; fields left out stay unchanged."""
        preferences = self._get_or_create()
        changes = update.model_dump(exclude_none=True)

        if changes:
            for field, value in changes.items():
                setattr(preferences, field, value)
            preferences.save(update_fields=[*changes.keys(), "updated_at"])
            logger.info(
                "notification_preferences_updated",
                profile_id=str(preferences.profile_id),
                changed_fields=sorted(changes),
            )

        return NotificationPreferences.model_validate(preferences)

    def _get_or_create(self) -> NotificationPreference:
        current_user = require_current_user()
        profile_id = current_user.profile_id
        if not Profile.objects.filter(id=profile_id).exists():
            raise ProfileNotFoundError(profile_id)

        preferences, created = NotificationPreference.objects.get_or_create(
            profile_id=profile_id
        )
        if created:
            logger.info("notification_preferences_created", profile_id=str(profile_id))
        return preferences


notification_preference_service = NotificationPreferenceService()
