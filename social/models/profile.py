"""Profile model."""

import uuid
from typing import ClassVar

from django.db import models

from social.constants import DEFAULT_ACTOR_NAME
from social.enums import ProfileVisibility


class Profile(models.Model):
    """Athlete profile matching the platform profiles table.

    This model is unmanaged as the database schema is owned by the platform.
    Profile editing happens elsewhere; this service reads profiles to resolve
    actors, visibility and handles.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    handle = models.CharField(max_length=50, unique=True)
    first_name = models.CharField(max_length=100, null=True, blank=True)
    last_name = models.CharField(max_length=100, null=True, blank=True)
    full_name = models.CharField(max_length=255, null=True, blank=True)
    display_name = models.CharField(max_length=255, null=True, blank=True)
    avatar_url = models.TextField(null=True, blank=True)
    visibility = models.CharField(
        max_length=10,
        choices=[(v.value, v.value) for v in ProfileVisibility],
        default=ProfileVisibility.PUBLIC.value,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Django model metadata."""

        db_table = "profiles"
        managed = False  # Schema is managed externally
        ordering: ClassVar[list[str]] = ["-created_at"]

    @property
    def is_private(self) -> bool:
        """Whether follows of this profile require approval."""
        return self.visibility == ProfileVisibility.PRIVATE.value

    @property
    def name(self) -> str:
        """Name used when this profile appears in notifications."""
        if self.display_name:
            return self.display_name
        if self.first_name and self.last_name:
            return f"{self.first_name} {self.last_name}"
        return self.full_name or self.first_name or DEFAULT_ACTOR_NAME

    def __str__(self) -> str:
        """Return string representation of profile."""
        return f"@{self.handle}"

    def __repr__(self) -> str:
        """Return detailed representation of profile."""
        return f"<Profile(id={self.id}, handle='{self.handle}')>"
