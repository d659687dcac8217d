"""URL routing configuration for the social application."""

from django.urls import path

from .views import (
    FollowersView,
    FollowStatsView,
    FollowView,
    LivenessCheckView,
    NotificationActionView,
    NotificationDetailView,
    NotificationListView,
    NotificationPreferencesView,
    PrivacyCheckView,
    ReadinessCheckView,
    UnfollowView,
    UnreadCountView,
)

urlpatterns = [
    # Health check endpoints
    path("health/live", LivenessCheckView.as_view(), name="health-live"),
    path("health/ready", ReadinessCheckView.as_view(), name="health-ready"),
    # Follow graph endpoints (stats before follow/<profile_id>)
    path("api/follow", FollowView.as_view(), name="follow"),
    path("api/follow/stats", FollowStatsView.as_view(), name="follow-stats"),
    path(
        "api/follow/<uuid:profile_id>",
        UnfollowView.as_view(),
        name="unfollow",
    ),
    path("api/followers", FollowersView.as_view(), name="followers"),
    # Notification endpoints (specific routes before notifications/<id>)
    path(
        "api/notifications",
        NotificationListView.as_view(),
        name="notifications",
    ),
    path(
        "api/notifications/unread-count",
        UnreadCountView.as_view(),
        name="notification-unread-count",
    ),
    path(
        "api/notifications/preferences",
        NotificationPreferencesView.as_view(),
        name="notification-preferences",
    ),
    path(
        "api/notifications/<uuid:notification_id>",
        NotificationDetailView.as_view(),
        name="notification-detail",
    ),
    path(
        "api/notifications/<uuid:notification_id>/action",
        NotificationActionView.as_view(),
        name="notification-action",
    ),
    # Privacy
    path("api/privacy/check", PrivacyCheckView.as_view(), name="privacy-check"),
]
