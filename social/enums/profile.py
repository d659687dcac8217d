"""Profile visibility and privacy decision enumerations."""

from enum import Enum


class ProfileVisibility(str, Enum):
    """Who may see a profile's content."""

    PUBLIC = "public"
    PRIVATE = "private"


class PrivacyReason(str, Enum):
    """Reason attached to a profile visibility decision."""

    OWN_PROFILE = "own_profile"
    PUBLIC = "public"
    FOLLOWING = "following"
    NOT_FOLLOWING = "not_following"
    NOT_FOUND = "not_found"
