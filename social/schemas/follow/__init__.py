"""Follow graph schemas."""

from social.schemas.follow.event import FollowEvent
from social.schemas.follow.request import (
    FollowCreateRequest,
    FollowListQuery,
    FollowRespondRequest,
    ProfileQuery,
)
from social.schemas.follow.response import (
    FollowCreateResponse,
    FollowEdge,
    FollowListItem,
    FollowListResponse,
    FollowRespondResponse,
    FollowStatsResponse,
)

__all__ = [
    "FollowCreateRequest",
    "FollowCreateResponse",
    "FollowEdge",
    "FollowEvent",
    "FollowListItem",
    "FollowListQuery",
    "FollowListResponse",
    "FollowRespondRequest",
    "FollowRespondResponse",
    "FollowStatsResponse",
    "ProfileQuery",
]
