"""Django application configuration for social."""

import logging

from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger(__name__)


class SocialConfig(AppConfig):
    """Configuration class for the social application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "social"

    def ready(self) -> None:
        """Connect signal receivers and configure logging."""
        from social import signals  # noqa: F401, PLC0415

        if not getattr(settings, "TEST_MODE", False):
            from social.logging import setup_logging  # noqa: PLC0415

            setup_logging()
            logger.info("Social service logging initialized")
