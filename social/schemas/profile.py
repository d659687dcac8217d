"""Profile summary schema embedded in follow and notification responses."""

from uuid import UUID

from pydantic import Field

from social.schemas.base_schema_model import BaseSchemaModel


class ProfileSummary(BaseSchemaModel):
    """Minimal public view of a profile."""

    id: UUID = Field(..., description="Profile id")
    handle: str | None = Field(None, description="Unique @handle")
    name: str = Field(..., description="Name shown to other users")
    avatar_url: str | None = Field(None, description="Avatar image URL")
    visibility: str | None = Field(None, description="public or private")
