"""Domain exceptions raised by the follow graph and notification services."""

from uuid import UUID


class SocialServiceError(Exception):
    """Base exception for errors surfaced to API clients."""

    status_code = 500
    error = "internal_error"

    def __init__(self, message: str, detail: str | None = None):
        """Initialize social service error.

        Args:
            message: Error message
            detail: Additional details about the error
        """
        self.detail = detail
        super().__init__(message)


class SelfFollowError(SocialServiceError):
    """A profile attempted to follow itself (400)."""

    status_code = 400
    error = "bad_request"

    def __init__(self):
        """Initialize self follow error."""
        super().__init__("You cannot follow yourself")


class InvalidActionError(SocialServiceError):
    """An action is not valid for the targeted resource (400)."""

    status_code = 400
    error = "bad_request"


class ProfileAccessDeniedError(SocialServiceError):
    """The caller is not a participant allowed to see the resource (403)."""

    status_code = 403
    error = "forbidden"


class ProfileNotFoundError(SocialServiceError):
    """Profile not found (404)."""

    status_code = 404
    error = "not_found"

    def __init__(self, profile_id: UUID | str):
        """Initialize profile not found error.

        Args:
            profile_id: ID of the profile that was not found
        """
        self.profile_id = profile_id
        super().__init__(f"Profile with ID {profile_id} not found")


class FollowNotFoundError(SocialServiceError):
    """Follow edge missing, not owned by the caller or already resolved (404)."""

    status_code = 404
    error = "not_found"

    def __init__(self, message: str = "Follow request not found"):
        """Initialize follow not found error.

        Args:
            message: Error message
        """
        super().__init__(message)


class NotificationNotFoundError(SocialServiceError):
    """Notification not found for the caller (404)."""

    status_code = 404
    error = "not_found"

    def __init__(self, notification_id: UUID | str):
        """Initialize notification not found error.

        Args:
            notification_id: ID of the notification that was not found
        """
        self.notification_id = notification_id
        super().__init__(f"Notification with ID {notification_id} not found")


class ConflictError(SocialServiceError):
    """Conflict error for operations that cannot be performed (409)."""

    status_code = 409
    error = "conflict"


class DuplicateFollowError(ConflictError):
    """A pending or accepted edge already exists for the pair (409)."""

    def __init__(self, status: str):
        """Initialize duplicate follow error.

        Args:
            status: Status of the existing edge
        """
        self.existing_status = status
        message = (
            "Follow request already sent"
            if status == "pending"
            else "Already following this user"
        )
        super().__init__(message, detail=f"Existing follow status: {status}")
