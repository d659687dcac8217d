"""Follow graph request schemas."""

from typing import Literal
from uuid import UUID

from pydantic import Field

from social.enums import FollowAction
from social.schemas.base_schema_model import BaseSchemaModel


class FollowCreateRequest(BaseSchemaModel):
    """Body of POST /api/follow."""

    following_id: UUID = Field(..., description="Profile to follow")
    message: str | None = Field(
        None,
        max_length=500,
        description="Optional note shown to a private profile with the request",
    )


class FollowRespondRequest(BaseSchemaModel):
    """Body of POST /api/followers."""

    action: FollowAction = Field(..., description="accept or reject")
    follow_id: UUID = Field(..., description="Pending follow edge to resolve")


class FollowListQuery(BaseSchemaModel):
    """Query string of GET /api/followers."""

    type: Literal["followers", "following", "requests"] = Field(
        "followers", description="Which list to return"
    )
    profile_id: UUID | None = Field(
        None, description="Profile whose lists to read; defaults to the caller"
    )


class ProfileQuery(BaseSchemaModel):
    """Query string naming a profile; defaults to the caller when omitted."""

    profile_id: UUID | None = Field(None, description="Target profile id")
