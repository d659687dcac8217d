"""Exception handling utilities for the social service."""

from social.exceptions.handlers import custom_exception_handler
from social.exceptions.social_exceptions import (
    ConflictError,
    DuplicateFollowError,
    FollowNotFoundError,
    InvalidActionError,
    NotificationNotFoundError,
    ProfileAccessDeniedError,
    ProfileNotFoundError,
    SelfFollowError,
    SocialServiceError,
)

__all__ = [
    "ConflictError",
    "DuplicateFollowError",
    "FollowNotFoundError",
    "InvalidActionError",
    "NotificationNotFoundError",
    "ProfileAccessDeniedError",
    "ProfileNotFoundError",
    "SelfFollowError",
    "SocialServiceError",
    "custom_exception_handler",
]
