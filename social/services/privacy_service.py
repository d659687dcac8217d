"""Profile visibility decisions.

Private profiles are visible to their owner and to accepted followers only.
Public profiles are visible to everyone.
"""

from uuid import UUID

import structlog

from social.auth.context import require_current_user
from social.enums import FollowStatus, PrivacyReason
from social.exceptions import ProfileAccessDeniedError, ProfileNotFoundError
from social.models import Follow, Profile
from social.schemas.privacy import PrivacyCheckResponse

logger = structlog.get_logger(__name__)


class PrivacyService:
    """Service answering "may the caller see this profile?"."""

    def can_view_profile(self, profile_id: UUID) -> PrivacyCheckResponse:
        """Evaluate whether the authenticated caller may view a profile.

        Args:
            profile_id: Profile being viewed.

        Returns:
            PrivacyCheckResponse with the decision and its reason.
        """
        current_user = require_current_user()
        return self.evaluate(current_user.profile_id, profile_id)

    def evaluate(self, viewer_id: UUID, profile_id: UUID) -> PrivacyCheckResponse:
        """Evaluate whether viewer_id may view profile_id."""
        if viewer_id == profile_id:
            return self._decision(profile_id, True, PrivacyReason.OWN_PROFILE)

        profile = Profile.objects.filter(id=profile_id).only("id", "visibility").first()
        if profile is None:
            return self._decision(profile_id, False, PrivacyReason.NOT_FOUND)

        if not profile.is_private:
            return self._decision(profile_id, True, PrivacyReason.PUBLIC)

        is_follower = Follow.objects.filter(
            follower_id=viewer_id,
            following_id=profile_id,
            status=FollowStatus.ACCEPTED.value,
        ).exists()
        if is_follower:
            return self._decision(profile_id, True, PrivacyReason.FOLLOWING)

        return self._decision(
            profile_id, False, PrivacyReason.NOT_FOLLOWING, limited_access=True
        )

    def ensure_can_view(self, profile_id: UUID) -> None:
        """Raise unless the caller may view the profile.

        Raises:
            ProfileNotFoundError: If the profile does not exist.
            ProfileAccessDeniedError: If the profile is private and the
                caller is not an accepted follower.
        """
        decision = self.can_view_profile(profile_id)
        if decision.can_view:
            return
        if decision.reason == PrivacyReason.NOT_FOUND.value:
            raise ProfileNotFoundError(profile_id)
        logger.info("private_profile_access_denied", profile_id=str(profile_id))
        raise ProfileAccessDeniedError("This profile is private")

    def _decision(
        self,
        profile_id: UUID,
        can_view: bool,
        reason: PrivacyReason,
        limited_access: bool = False,
    ) -> PrivacyCheckResponse:
        return PrivacyCheckResponse(
            profile_id=profile_id,
            can_view=can_view,
            limited_access=limited_access,
            reason=reason,
        )


privacy_service = PrivacyService()
