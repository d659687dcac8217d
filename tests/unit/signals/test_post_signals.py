"""Tests for the post activity signal receivers."""

from unittest.mock import patch

from social.enums import NotificationType
from social.models import Notification, PostComment, PostLike
from tests.base import BaseUnitTest
from tests.factories import create_post, create_profile


class TestPostSignals(BaseUnitTest):
    """Likes and comments notify through post_save receivers."""

    def setUp(self):
        """Set up test fixtures."""
        self.author = create_profile()
        self.fan = create_profile()
        self.post = create_post(self.author)

    def test_new_like_notifies_author(self):
        """Saving a new like creates a like notification."""
        PostLike.objects.create(post=self.post, profile=self.fan)

        notification = Notification.objects.get(recipient=self.author)
        self.assertEqual(notification.notification_type, NotificationType.LIKE.value)

    def test_new_comment_notifies_author(self):
        """Saving a new comment creates a comment notification."""
        PostComment.objects.create(post=self.post, profile=self.fan, content="Fast!")

        notification = Notification.objects.get(recipient=self.author)
        self.assertEqual(notification.message, "Fast!")

    def test_updates_do_not_notify(self):
        """Editing a comment does not notify again."""
        comment = PostComment.objects.create(
            post=self.post, profile=self.fan, content="Fast!"
        )
        comment.content = "Very fast!"
        comment.save()

        self.assertEqual(Notification.objects.filter(recipient=self.author).count(), 1)

    @patch("social.signals.post_signals.notification_fanout_service")
    def test_fanout_failure_does_not_break_save(self, mock_fanout):
        """The like is stored even if notifying fails."""
        mock_fanout.notify_post_liked.side_effect = RuntimeError("boom")

        like = PostLike.objects.create(post=self.post, profile=self.fan)

        self.assertTrue(PostLike.objects.filter(id=like.id).exists())
