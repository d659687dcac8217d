"""Django signals turning post likes and comments into notifications."""

from django.db.models.signals import post_save
from django.dispatch import receiver

import structlog

from social.services.notification_fanout_service import notification_fanout_service

logger = structlog.get_logger(__name__)


@receiver(post_save, sender="social.PostLike")
def notify_post_liked(
    sender: type,
    instance,
    created: bool,
    **kwargs: dict,
) -> None:
    """Notify the post author when a new like is stored.

    Args:
        sender: The model class (PostLike)
        instance: The PostLike being saved
        created: True if this is a new like, False if updating
        **kwargs: Additional signal arguments
    """
    if not created:
        return

    try:
        notification_fanout_service.notify_post_liked(instance)
    except Exception as e:
        # A failed notification must not break the like
        logger.error(
            "like_notification_failed",
            like_id=str(instance.id),
            post_id=str(instance.post_id),
            error=str(e),
        )


@receiver(post_save, sender="social.PostComment")
def notify_post_commented(
    sender: type,
    instance,
    created: bool,
    **kwargs: dict,
) -> None:
    """Notify the post author and mentioned profiles of a new comment."""
    if not created:
        return

    try:
        notification_fanout_service.notify_post_commented(instance)
    except Exception as e:
        logger.error(
            "comment_notification_failed",
            comment_id=str(instance.id),
            post_id=str(instance.post_id),
            error=str(e),
        )
