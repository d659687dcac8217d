"""Thread-local context management for the authenticated caller.

Services read the caller from here instead of receiving it as a parameter,
so every follow-graph and notification query is scoped to the caller.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from rest_framework.exceptions import AuthenticationFailed

if TYPE_CHECKING:
    from social.auth.bearer import AuthenticatedUser

_security_context = threading.local()


def set_current_user(user: AuthenticatedUser) -> None:
    """Store the authenticated user in thread-local storage.

    Args:
        user: The authenticated principal to store.
    """
    _security_context.user = user


def get_current_user() -> AuthenticatedUser | None:
    """Retrieve the authenticated user from thread-local storage.

    Returns:
        The current authenticated user, or None if not set.
    """
    return getattr(_security_context, "user", None)


def require_current_user() -> AuthenticatedUser:
    """Retrieve the authenticated user or raise an exception.

    Returns:
        The current authenticated user.

    Raises:
        AuthenticationFailed: If no user is set in the security context.
    """
    user = get_current_user()
    if user is None:
        raise AuthenticationFailed("Authentication required")
    return user


def clear_current_user() -> None:
    """Clear the authenticated user from thread-local storage.

    Called after request processing so the principal never leaks into the
    next request served by the same thread.
    """
    if hasattr(_security_context, "user"):
        delattr(_security_context, "user")
