"""Root URL configuration for the athlete network social service."""

from django.urls import include, path

urlpatterns = [
    path("", include("social.urls")),
]
