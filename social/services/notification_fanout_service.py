"""Service turning follow events and post activity into notifications.

Every notification is a best-effort side effect: it is written in its own
savepoint after the primary change has been stored, and a failure is logged
without being raised to the caller.
"""

import re
from collections.abc import Iterable
from typing import Any
from uuid import UUID

from django.db import transaction
from django.db.models import Q

import structlog

from social.constants import COMMENT_PREVIEW_LENGTH, DEFAULT_ACTOR_NAME
from social.enums import FollowEventKind, NotificationType
from social.models import (
    Notification,
    NotificationPreference,
    PostComment,
    PostLike,
    Profile,
)
from social.schemas.follow import FollowEvent

logger = structlog.get_logger(__name__)


# Title and client route per notification type
NOTIFICATION_TEMPLATES: dict[str, dict[str, str]] = {
    NotificationType.FOLLOW_REQUEST.value: {
        "title": "{actor_name} sent you a follow request",
        "action_url": "/app/followers?tab=requests",
    },
    NotificationType.FOLLOW_ACCEPTED.value: {
        "title": "{actor_name} accepted your follow request",
        "action_url": "/athlete/{actor_id}",
    },
    NotificationType.NEW_FOLLOWER.value: {
        "title": "{actor_name} started following you",
        "action_url": "/athlete/{actor_id}",
    },
    NotificationType.LIKE.value: {
        "title": "{actor_name} liked your post",
        "action_url": "/feed?post={post_id}",
    },
    NotificationType.COMMENT.value: {
        "title": "{actor_name} commented on your post",
        "action_url": "/feed?post={post_id}#comment-{comment_id}",
    },
    NotificationType.MENTION.value: {
        "title": "{actor_name} mentioned you in a comment",
        "action_url": "/feed?post={post_id}#comment-{comment_id}",
    },
}

# Handles start and end with a letter or digit; inner dots and underscores allowed
MENTION_PATTERN = re.compile(
    r"(?<![\w@])@([A-Za-z0-9](?:[A-Za-z0-9._]{0,48}[A-Za-z0-9])?)"
)


class NotificationFanoutService:
    """Service creating recipient-facing notification rows."""

    def dispatch_follow_event(self, event: FollowEvent) -> Notification | None:
        """Create the notification, if any, that a follow transition calls for.

        REQUESTED notifies the target with a follow_request, FOLLOWED notifies
        the target with new_follower and ACCEPTED notifies the original
        follower with follow_accepted. REJECTED and REMOVED notify nobody.

        Args:
            event: The transition emitted by the follow service.

        Returns:
            The created Notification, or None if nothing was created.
        """
        metadata = {"follow_id": str(event.follow_id)}

        if event.kind == FollowEventKind.REQUESTED:
            return self._create_notification(
                recipient_id=event.following_id,
                actor_id=event.follower_id,
                notification_type=NotificationType.FOLLOW_REQUEST,
                message=event.message,
                related_follow_id=event.follow_id,
                metadata=metadata,
            )
        if event.kind == FollowEventKind.FOLLOWED:
            return self._create_notification(
                recipient_id=event.following_id,
                actor_id=event.follower_id,
                notification_type=NotificationType.NEW_FOLLOWER,
                related_follow_id=event.follow_id,
                metadata=metadata,
            )
        if event.kind == FollowEventKind.ACCEPTED:
            return self._create_notification(
                recipient_id=event.follower_id,
                actor_id=event.following_id,
                notification_type=NotificationType.FOLLOW_ACCEPTED,
                related_follow_id=event.follow_id,
                metadata=metadata,
            )

        logger.debug(
            "follow_event_not_notified",
            kind=event.kind.value,
            follow_id=str(event.follow_id),
        )
        return None

    def notify_post_liked(self, like: PostLike) -> Notification | None:
        """Notify a post's author that someone liked the post."""
        post = like.post
        return self._create_notification(
            recipient_id=post.author_id,
            actor_id=like.profile_id,
            notification_type=NotificationType.LIKE,
            related_post_id=post.id,
            metadata={"post_id": str(post.id)},
        )

    def notify_post_commented(self, comment: PostComment) -> list[Notification]:
        """Notify the post author and every profile @mentioned in a comment.

        The post author receives a single comment notification even when
        also mentioned.

        Args:
            comment: The newly created comment.

        Returns:
            The notifications that were created.
        """
        post = comment.post
        preview = comment.content[:COMMENT_PREVIEW_LENGTH]
        metadata = {"post_id": str(post.id), "comment_id": str(comment.id)}
        created = []

        notification = self._create_notification(
            recipient_id=post.author_id,
            actor_id=comment.profile_id,
            notification_type=NotificationType.COMMENT,
            message=preview,
            related_post_id=post.id,
            related_comment_id=comment.id,
            metadata=metadata,
        )
        if notification is not None:
            created.append(notification)

        for profile_id in self._mentioned_profile_ids(comment.content):
            if str(profile_id) in {str(post.author_id), str(comment.profile_id)}:
                continue
            notification = self._create_notification(
                recipient_id=profile_id,
                actor_id=comment.profile_id,
                notification_type=NotificationType.MENTION,
                message=preview,
                related_post_id=post.id,
                related_comment_id=comment.id,
                metadata=metadata,
            )
            if notification is not None:
                created.append(notification)

        return created

    def send_system_notification(
        self,
        recipient_ids: Iterable[UUID],
        title: str,
        message: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> int:
        """Send an announcement with no actor to each recipient.

        Args:
            recipient_ids: Profiles to notify.
            title: Announcement headline.
            message: Optional body.
            metadata: Optional JSON payload for the client.

        Returns:
            Number of notifications created.
        """
        sent = 0
        for recipient_id in recipient_ids:
            notification = self._create_notification(
                recipient_id=recipient_id,
                actor_id=None,
                notification_type=NotificationType.SYSTEM,
                title=title,
                message=message,
                metadata=metadata,
            )
            if notification is not None:
                sent += 1

        logger.info("system_notifications_sent", title=title, sent=sent)
        return sent

    def _mentioned_profile_ids(self, content: str) -> list[UUID]:
        """Resolve @handles in text to profile ids, ignoring unknown handles."""
        handles = {match.lower() for match in MENTION_PATTERN.findall(content)}
        if not handles:
            return []

        query = Q()
        for handle in handles:
            query |= Q(handle__iexact=handle)
        return list(Profile.objects.filter(query).values_list("id", flat=True))

    def _is_enabled(self, recipient_id: UUID, notification_type: str) -> bool:
        """Check the recipient's preferences; no row means everything is on."""
        preferences = NotificationPreference.objects.filter(
            profile_id=recipient_id
        ).first()
        return preferences is None or preferences.allows(notification_type)

    def _render_action_url(
        self, template: dict[str, str], context: dict[str, Any]
    ) -> str | None:
        """Fill the template's client route; None if a route field is missing."""
        action_url = template.get("action_url")
        if action_url is None:
            return None
        known = {key: value for key, value in context.items() if value is not None}
        try:
            return action_url.format(**known)
        except KeyError:
            return None

    def _create_notification(
        self,
        recipient_id: UUID,
        actor_id: UUID | None,
        notification_type: NotificationType,
        title: str | None = None,
        message: str | None = None,
        related_post_id: UUID | None = None,
        related_comment_id: UUID | None = None,
        related_follow_id: UUID | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> Notification | None:
        """Insert one notification unless it is self-caused or opted out.

        Returns:
            The created Notification, or None if skipped or failed.
        """
        type_value = notification_type.value

        if actor_id is not None and str(actor_id) == str(recipient_id):
            logger.debug("self_notification_skipped", type=type_value)
            return None

        try:
            # Savepoint: a failed insert must leave the caller's transaction usable
            with transaction.atomic():
                if not self._is_enabled(recipient_id, type_value):
                    logger.info(
                        "notification_disabled_by_preferences",
                        recipient_id=str(recipient_id),
                        type=type_value,
                    )
                    return None

                actor = (
                    Profile.objects.filter(id=actor_id).first() if actor_id else None
                )
                template = NOTIFICATION_TEMPLATES.get(type_value, {})
                context = {
                    "actor_name": actor.name if actor else DEFAULT_ACTOR_NAME,
                    "actor_id": actor_id,
                    "post_id": related_post_id,
                    "comment_id": related_comment_id,
                }

                notification = Notification.objects.create(
                    recipient_id=recipient_id,
                    actor_id=actor_id,
                    notification_type=type_value,
                    title=title or template.get("title", "Notification").format(
                        **context
                    ),
                    message=message,
                    related_post_id=related_post_id,
                    related_comment_id=related_comment_id,
                    related_follow_id=related_follow_id,
                    action_url=self._render_action_url(template, context),
                    metadata=metadata,
                )
        except Exception as e:
            # Never let a notification failure undo or fail the primary action
            logger.error(
                "notification_create_failed",
                recipient_id=str(recipient_id),
                type=type_value,
                error=str(e),
                error_type=type(e).__name__,
            )
            return None

        logger.info(
            "notification_created",
            notification_id=str(notification.id),
            recipient_id=str(recipient_id),
            type=type_value,
        )
        return notification


notification_fanout_service = NotificationFanoutService()
