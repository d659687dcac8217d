"""Tests for FollowService."""

from unittest.mock import patch
from uuid import uuid4

from django.db import IntegrityError

from rest_framework.exceptions import AuthenticationFailed

from social.auth.context import clear_current_user
from social.enums import FollowEventKind, FollowStatus, NotificationType
from social.exceptions import (
    DuplicateFollowError,
    FollowNotFoundError,
    InvalidActionError,
    ProfileAccessDeniedError,
    ProfileNotFoundError,
    SelfFollowError,
)
from social.models import Follow, Notification
from social.services.follow_service import FollowService
from tests.base import BaseUnitTest
from tests.factories import create_follow, create_profile


class TestFollow(BaseUnitTest):
    """Tests for FollowService.follow."""

    def setUp(self):
        """Set up test fixtures."""
        self.service = FollowService()
        self.follower = create_profile()
        self.act_as(self.follower)

    def test_follow_private_profile_creates_pending_request(self):
        """A private target gets a pending edge and one follow_request."""
        target = create_profile(private=True)

        follow, event = self.service.follow(target.id, "Let's train together")

        self.assertEqual(follow.status, FollowStatus.PENDING.value)
        self.assertEqual(follow.message, "Let's train together")
        self.assertEqual(event.kind, FollowEventKind.REQUESTED)

        notifications = Notification.objects.filter(recipient=target)
        self.assertEqual(notifications.count(), 1)
        notification = notifications.get()
        self.assertEqual(
            notification.notification_type, NotificationType.FOLLOW_REQUEST.value
        )
        self.assertEqual(notification.message, "Let's train together")
        self.assertEqual(notification.related_follow_id, follow.id)
        self.assertEqual(notification.actor_id, self.follower.id)

    def test_follow_public_profile_is_accepted_immediately(self):
        """A public target is followed directly and gets new_follower only."""
        target = create_profile()

        follow, event = self.service.follow(target.id)

        self.assertEqual(follow.status, FollowStatus.ACCEPTED.value)
        self.assertEqual(event.kind, FollowEventKind.FOLLOWED)
        types = list(
            Notification.objects.filter(recipient=target).values_list(
                "notification_type", flat=True
            )
        )
        self.assertEqual(types, [NotificationType.NEW_FOLLOWER.value])

    def test_follow_self_rejected(self):
        """Nobody can follow themselves."""
        with self.assertRaises(SelfFollowError):
            self.service.follow(self.follower.id)
        self.assertFalse(Follow.objects.exists())

    def test_follow_unknown_profile(self):
        """Following a profile that does not exist is a 404."""
        with self.assertRaises(ProfileNotFoundError):
            self.service.follow(uuid4())

    def test_duplicate_pending_request_conflicts(self):
        """A second request while one is pending is rejected."""
        target = create_profile(private=True)
        self.service.follow(target.id)

        with self.assertRaisesMessage(
            DuplicateFollowError, "Follow request already sent"
        ):
            self.service.follow(target.id)

        self.assertEqual(Notification.objects.filter(recipient=target).count(), 1)

    def test_duplicate_accepted_follow_conflicts(self):
        """Following someone already followed is rejected."""
        target = create_profile()
        self.service.follow(target.id)

        with self.assertRaisesMessage(
            DuplicateFollowError, "Already following this user"
        ):
            self.service.follow(target.id)

    def test_request_again_after_rejection(self):
        """A rejected edge goes back to pending and notifies again."""
        target = create_profile(private=True)
        create_follow(self.follower, target, status=FollowStatus.REJECTED)

        follow, event = self.service.follow(target.id, "Second try")

        self.assertEqual(follow.status, FollowStatus.PENDING.value)
        self.assertEqual(follow.message, "Second try")
        self.assertEqual(event.kind, FollowEventKind.REQUESTED)
        self.assertEqual(Follow.objects.count(), 1)
        self.assertEqual(Notification.objects.filter(recipient=target).count(), 1)

    def test_request_again_replaces_earlier_request_notification(self):
        """Only the newest request notification stays actionable."""
        target = create_profile(private=True)
        follow, _ = self.service.follow(target.id, "First try")
        first = Notification.objects.get(recipient=target)
        Follow.objects.filter(id=follow.id).update(status=FollowStatus.REJECTED.value)

        self.service.follow(target.id, "Second try")

        notifications = Notification.objects.filter(
            recipient=target,
            notification_type=NotificationType.FOLLOW_REQUEST.value,
        )
        self.assertEqual(notifications.count(), 1)
        self.assertNotEqual(notifications.get().id, first.id)
        self.assertEqual(notifications.get().message, "Second try")
        self.assertEqual(notifications.get().related_follow_id, follow.id)

    @patch("social.services.follow_service.Follow.objects.create")
    def test_concurrent_insert_maps_to_conflict(self, mock_create):
        """Losing the unique-constraint race is reported as a duplicate."""
        target = create_profile(private=True)
        mock_create.side_effect = IntegrityError("duplicate key")

        with self.assertRaises(DuplicateFollowError):
            self.service.follow(target.id)

    @patch("social.services.follow_service.notification_fanout_service")
    def test_notification_failure_keeps_edge(self, mock_fanout):
        """The edge is stored even when the fan-out blows up."""
        target = create_profile(private=True)
        mock_fanout.dispatch_follow_event.side_effect = RuntimeError("boom")

        follow, _ = self.service.follow(target.id)

        self.assertTrue(Follow.objects.filter(id=follow.id).exists())

    def test_requires_authenticated_caller(self):
        """Service calls without a principal are refused."""
        clear_current_user()
        with self.assertRaises(AuthenticationFailed):
            self.service.follow(uuid4())


class TestRespondToRequest(BaseUnitTest):
    """Tests for accepting and rejecting follow requests."""

    def setUp(self):
        """Set up test fixtures."""
        self.service = FollowService()
        self.requester = create_profile()
        self.target = create_profile(private=True)
        self.follow = create_follow(
            self.requester, self.target, status=FollowStatus.PENDING
        )
        self.act_as(self.target)

    def _accepted_notifications(self):
        return Notification.objects.filter(
            recipient=self.requester,
            notification_type=NotificationType.FOLLOW_ACCEPTED.value,
        )

    def test_accept_notifies_requester_once(self):
        """Accepting flips the edge and sends one follow_accepted."""
        follow, event = self.service.accept_request(self.follow.id)

        self.assertEqual(follow.status, FollowStatus.ACCEPTED.value)
        self.assertEqual(event.kind, FollowEventKind.ACCEPTED)
        notification = self._accepted_notifications().get()
        self.assertEqual(notification.actor_id, self.target.id)
        self.assertEqual(notification.action_url, f"/athlete/{self.target.id}")

    def test_accepting_twice_is_a_no_op(self):
        """A repeated accept neither fails nor notifies again."""
        self.service.accept_request(self.follow.id)

        follow, event = self.service.accept_request(self.follow.id)

        self.assertIsNone(event)
        self.assertEqual(follow.status, FollowStatus.ACCEPTED.value)
        self.assertEqual(self._accepted_notifications().count(), 1)

    def test_reject_sends_no_notification(self):
        """Rejecting keeps the edge as rejected and tells nobody."""
        follow, event = self.service.reject_request(self.follow.id)

        self.assertEqual(follow.status, FollowStatus.REJECTED.value)
        self.assertEqual(event.kind, FollowEventKind.REJECTED)
        self.assertFalse(Notification.objects.filter(recipient=self.requester).exists())

    def test_rejecting_twice_is_a_no_op(self):
        """A repeated reject returns the edge without an event."""
        self.service.reject_request(self.follow.id)

        _, event = self.service.reject_request(self.follow.id)

        self.assertIsNone(event)

    def test_accept_after_reject_is_not_found(self):
        """A rejected request can no longer be accepted."""
        self.service.reject_request(self.follow.id)

        with self.assertRaises(FollowNotFoundError):
            self.service.accept_request(self.follow.id)
        self.assertEqual(self._accepted_notifications().count(), 0)

    def test_only_the_target_can_respond(self):
        """The requester cannot accept their own request."""
        self.act_as(self.requester)

        with self.assertRaises(FollowNotFoundError):
            self.service.accept_request(self.follow.id)

        self.follow.refresh_from_db()
        self.assertEqual(self.follow.status, FollowStatus.PENDING.value)

    def test_unknown_request(self):
        """Unknown follow ids are not found."""
        with self.assertRaises(FollowNotFoundError):
            self.service.reject_request(uuid4())

    def test_respond_dispatches_by_action(self):
        """respond_to_request maps accept and reject to the right transition."""
        _, event = self.service.respond_to_request(self.follow.id, "accept")
        self.assertEqual(event.kind, FollowEventKind.ACCEPTED)

        with self.assertRaises(InvalidActionError):
            self.service.respond_to_request(self.follow.id, "ignore")


class TestUnfollow(BaseUnitTest):
    """Tests for FollowService.unfollow."""

    def setUp(self):
        """Set up test fixtures."""
        self.service = FollowService()
        self.follower = create_profile()
        self.act_as(self.follower)

    def test_unfollow_deletes_edge(self):
        """Unfollowing removes the edge and emits REMOVED."""
        target = create_profile()
        follow = create_follow(self.follower, target)

        event = self.service.unfollow(target.id)

        self.assertEqual(event.kind, FollowEventKind.REMOVED)
        self.assertEqual(event.follow_id, follow.id)
        self.assertFalse(Follow.objects.exists())

    def test_cancel_pending_request(self):
        """Unfollowing also withdraws a pending request without notifying."""
        target = create_profile(private=True)
        self.service.follow(target.id)

        self.service.unfollow(target.id)

        self.assertFalse(Follow.objects.exists())
        self.assertEqual(Notification.objects.filter(recipient=target).count(), 1)

    def test_unfollow_without_edge(self):
        """There is nothing to remove."""
        with self.assertRaisesMessage(
            FollowNotFoundError, "You are not following this user"
        ):
            self.service.unfollow(create_profile().id)


class TestFollowLists(BaseUnitTest):
    """Tests for follower, following and request lists."""

    def setUp(self):
        """Set up test fixtures."""
        self.service = FollowService()
        self.viewer = create_profile()
        self.athlete = create_profile(private=True)
        self.fan = create_profile()
        self.requester = create_profile()
        create_follow(self.fan, self.athlete)
        create_follow(self.requester, self.athlete, status=FollowStatus.PENDING)
        create_follow(self.athlete, self.fan)
        self.act_as(self.viewer)

    def test_private_lists_hidden_from_strangers(self):
        """Non-followers cannot list a private profile's graph."""
        with self.assertRaises(ProfileAccessDeniedError):
            self.service.list_followers(self.athlete.id)
        with self.assertRaises(ProfileAccessDeniedError):
            self.service.list_following(self.athlete.id)

    def test_accepted_follower_can_list(self):
        """Accepted followers see accepted edges only."""
        self.act_as(self.fan)

        result = self.service.list_followers(self.athlete.id)

        self.assertEqual(result.count, 1)
        self.assertEqual(result.items[0].profile.id, self.fan.id)
        self.assertEqual(result.items[0].profile.name, self.fan.name)

    def test_list_following(self):
        """Following lists show the followed profile."""
        result = self.service.list_following(self.fan.id)

        self.assertEqual(result.type, "following")
        self.assertEqual([item.profile.id for item in result.items], [self.athlete.id])

        self.act_as(self.athlete)
        own = self.service.list_following()
        self.assertEqual([item.profile.id for item in own.items], [self.fan.id])

    def test_list_unknown_profile(self):
        """Lists of missing profiles are 404s."""
        with self.assertRaises(ProfileNotFoundError):
            self.service.list_followers(uuid4())

    def test_requests_listed_for_owner(self):
        """The owner sees pending requests with the requester's summary."""
        self.act_as(self.athlete)

        result = self.service.list_requests()

        self.assertEqual(result.type, "requests")
        self.assertEqual([item.profile.id for item in result.items], [self.requester.id])
        self.assertEqual(result.items[0].status, FollowStatus.PENDING.value)

    def test_requests_of_others_forbidden(self):
        """Nobody can read someone else's requests."""
        with self.assertRaises(ProfileAccessDeniedError):
            self.service.list_requests(self.athlete.id)

    def test_accepted_request_leaves_request_list(self):
        """Accepting moves the requester from requests to followers."""
        self.act_as(self.athlete)
        follow = Follow.objects.get(follower=self.requester)

        self.service.accept_request(follow.id)

        self.assertEqual(self.service.list_requests().count, 0)
        self.assertEqual(self.service.list_followers().count, 2)


class TestFollowStats(BaseUnitTest):
    """Tests for FollowService.get_follow_stats."""

    def setUp(self):
        """Set up test fixtures."""
        self.service = FollowService()
        self.athlete = create_profile(private=True)
        self.viewer = create_profile()
        create_follow(create_profile(), self.athlete)
        create_follow(create_profile(), self.athlete)
        create_follow(self.viewer, self.athlete, status=FollowStatus.PENDING)

    def test_own_stats_include_pending_count(self):
        """Owners see their pending request count."""
        self.act_as(self.athlete)

        stats = self.service.get_follow_stats()

        self.assertTrue(stats.is_own_profile)
        self.assertEqual(stats.followers_count, 2)
        self.assertEqual(stats.following_count, 0)
        self.assertEqual(stats.pending_requests_count, 1)
        self.assertIsNone(stats.follow_status)

    def test_viewer_stats_include_relationship(self):
        """Other viewers see their own edge status and no pending count."""
        self.act_as(self.viewer)

        stats = self.service.get_follow_stats(self.athlete.id)

        self.assertFalse(stats.is_own_profile)
        self.assertIsNone(stats.pending_requests_count)
        self.assertEqual(stats.follow_status, FollowStatus.PENDING.value)
        self.assertTrue(stats.is_pending)
        self.assertFalse(stats.is_following)

    def test_stats_of_unknown_profile(self):
        """Stats of a missing profile are a 404."""
        self.act_as(self.viewer)
        with self.assertRaises(ProfileNotFoundError):
            self.service.get_follow_stats(uuid4())
