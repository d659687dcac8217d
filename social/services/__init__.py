"""Services for the social app."""

from social.services.health_service import HealthService, health_service
from social.services.privacy_service import PrivacyService, privacy_service

# Services that touch other services are imported directly from their modules
# to keep app initialization free of import cycles.

__all__ = [
    "HealthService",
    "PrivacyService",
    "health_service",
    "privacy_service",
]
