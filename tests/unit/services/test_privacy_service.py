"""Tests for PrivacyService."""

from uuid import uuid4

from social.enums import FollowStatus, PrivacyReason
from social.exceptions import ProfileAccessDeniedError, ProfileNotFoundError
from social.services.privacy_service import PrivacyService
from tests.base import BaseUnitTest
from tests.factories import create_follow, create_profile


class TestPrivacyService(BaseUnitTest):
    """Test suite for PrivacyService."""

    def setUp(self):
        """Set up test fixtures."""
        self.service = PrivacyService()
        self.viewer = create_profile()
        self.private = create_profile(private=True)
        self.public = create_profile()
        self.act_as(self.viewer)

    def test_own_profile(self):
        """Everyone can view themselves."""
        decision = self.service.can_view_profile(self.viewer.id)

        self.assertTrue(decision.can_view)
        self.assertEqual(decision.reason, PrivacyReason.OWN_PROFILE.value)

    def test_public_profile(self):
        """Public profiles are visible to everyone."""
        decision = self.service.can_view_profile(self.public.id)

        self.assertTrue(decision.can_view)
        self.assertFalse(decision.limited_access)
        self.assertEqual(decision.reason, PrivacyReason.PUBLIC.value)

    def test_private_profile_for_stranger(self):
        """Strangers get limited access to private profiles."""
        decision = self.service.can_view_profile(self.private.id)

        self.assertFalse(decision.can_view)
        self.assertTrue(decision.limited_access)
        self.assertEqual(decision.reason, PrivacyReason.NOT_FOLLOWING.value)

    def test_pending_request_does_not_grant_access(self):
        """Only accepted edges unlock a private profile."""
        create_follow(self.viewer, self.private, status=FollowStatus.PENDING)

        self.assertFalse(self.service.can_view_profile(self.private.id).can_view)

    def test_private_profile_for_accepted_follower(self):
        """Accepted followers see private profiles."""
        create_follow(self.viewer, self.private)

        decision = self.service.can_view_profile(self.private.id)

        self.assertTrue(decision.can_view)
        self.assertEqual(decision.reason, PrivacyReason.FOLLOWING.value)

    def test_missing_profile(self):
        """Unknown profiles are reported as not found."""
        decision = self.service.can_view_profile(uuid4())

        self.assertFalse(decision.can_view)
        self.assertEqual(decision.reason, PrivacyReason.NOT_FOUND.value)

    def test_ensure_can_view_raises(self):
        """ensure_can_view turns denials into exceptions."""
        self.service.ensure_can_view(self.public.id)

        with self.assertRaises(ProfileAccessDeniedError):
            self.service.ensure_can_view(self.private.id)
        with self.assertRaises(ProfileNotFoundError):
            self.service.ensure_can_view(uuid4())
