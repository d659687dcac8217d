"""Follow graph response schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from social.enums import FollowStatus
from social.schemas.base_schema_model import BaseSchemaModel
from social.schemas.profile import ProfileSummary


class FollowEdge(BaseSchemaModel):
    """A follow edge as stored."""

    id: UUID
    follower_id: UUID
    following_id: UUID
    status: FollowStatus
    message: str | None = None
    created_at: datetime
    updated_at: datetime


class FollowCreateResponse(BaseSchemaModel):
    """Result of a follow action."""

    action: str = Field(..., description="requested or followed")
    is_pending: bool = Field(..., description="Whether approval is required")
    message: str = Field(..., description="Human-readable outcome")
    follow: FollowEdge


class FollowRespondResponse(BaseSchemaModel):
    """Result of accepting or rejecting a follow request."""

    action: str = Field(..., description="accept or reject")
    changed: bool = Field(
        ..., description="False when the request had already been resolved this way"
    )
    follow: FollowEdge


class FollowListItem(BaseSchemaModel):
    """One entry of a followers, following or requests list."""

    id: UUID = Field(..., description="Follow edge id")
    status: FollowStatus
    message: str | None = None
    created_at: datetime
    profile: ProfileSummary = Field(..., description="The other participant")


class FollowListResponse(BaseSchemaModel):
    """Response of GET /api/followers."""

    type: str
    profile_id: UUID
    count: int
    items: list[FollowListItem]


class FollowStatsResponse(BaseSchemaModel):
    """Follower counts of a profile and the caller's relationship to it."""

    profile_id: UUID
    followers_count: int
    following_count: int
    pending_requests_count: int | None = Field(
        None, description="Only reported for the caller's own profile"
    )
    follow_status: FollowStatus | None = Field(
        None, description="Status of the caller's edge towards the profile"
    )
    is_following: bool
    is_pending: bool
    is_own_profile: bool
