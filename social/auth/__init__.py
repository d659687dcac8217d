"""Authentication for the social service API."""

from social.auth.bearer import AuthenticatedUser, BearerTokenAuthentication
from social.auth.context import (
    clear_current_user,
    get_current_user,
    require_current_user,
    set_current_user,
)

__all__ = [
    "AuthenticatedUser",
    "BearerTokenAuthentication",
    "clear_current_user",
    "get_current_user",
    "require_current_user",
    "set_current_user",
]
