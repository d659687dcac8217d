"""Test data helpers for profiles, follow edges, posts and access tokens."""

from datetime import UTC, datetime, timedelta
from uuid import UUID

from django.conf import settings

import jwt
from faker import Faker

from social.auth import AuthenticatedUser
from social.enums import FollowStatus, ProfileVisibility
from social.models import Follow, Notification, Post, Profile

fake = Faker()


def create_profile(private: bool = False, **kwargs) -> Profile:
    """Create a profile with a unique handle and a realistic name."""
    first_name = kwargs.pop("first_name", fake.first_name())
    last_name = kwargs.pop("last_name", fake.last_name())
    defaults = {
        "handle": kwargs.pop("handle", fake.unique.user_name()[:40]),
        "first_name": first_name,
        "last_name": last_name,
        "full_name": f"{first_name} {last_name}",
        "visibility": (
            ProfileVisibility.PRIVATE.value
            if private
            else ProfileVisibility.PUBLIC.value
        ),
    }
    defaults.update(kwargs)
    return Profile.objects.create(**defaults)


def create_follow(
    follower: Profile,
    following: Profile,
    status: FollowStatus = FollowStatus.ACCEPTED,
    message: str | None = None,
) -> Follow:
    """Create a follow edge directly, bypassing the follow service."""
    return Follow.objects.create(
        follower=follower,
        following=following,
        status=status.value,
        message=message,
    )


def create_post(author: Profile, caption: str | None = None) -> Post:
    """Create a post owned by author."""
    return Post.objects.create(
        author=author, caption=caption or fake.sentence(nb_words=8)
    )


def create_notification(recipient: Profile, **kwargs) -> Notification:
    """Create a system notification row for recipient."""
    defaults = {
        "recipient": recipient,
        "notification_type": "system",
        "title": fake.sentence(nb_words=5),
    }
    defaults.update(kwargs)
    return Notification.objects.create(**defaults)


def make_user(profile: Profile | UUID) -> AuthenticatedUser:
    """Build the principal the authenticator would produce for a profile."""
    profile_id = profile.id if isinstance(profile, Profile) else profile
    return AuthenticatedUser(user_id=str(profile_id), role="authenticated")


def make_token(
    profile: Profile | UUID,
    expires_in: int = 3600,
    secret: str | None = None,
    **claims,
) -> str:
    """Mint an HS256 access token for a profile, signed with the test secret."""
    profile_id = profile.id if isinstance(profile, Profile) else profile
    payload = {
        "sub": str(profile_id),
        "aud": settings.JWT_AUDIENCE,
        "role": "authenticated",
        "email": fake.email(),
        "exp": datetime.now(UTC) + timedelta(seconds=expires_in),
    }
    payload.update(claims)
    return jwt.encode(payload, secret or settings.JWT_SECRET, algorithm="HS256")


def auth_headers(profile: Profile | UUID) -> dict[str, str]:
    """Authorization header kwargs for django.test.Client calls."""
    return {"HTTP_AUTHORIZATION": f"Bearer {make_token(profile)}"}
