"""Django signals for notification triggers."""

from social.signals.post_signals import notify_post_commented, notify_post_liked

__all__ = ["notify_post_commented", "notify_post_liked"]
