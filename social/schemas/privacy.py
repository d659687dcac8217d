"""Privacy check schemas."""

from uuid import UUID

from pydantic import Field

from social.enums import PrivacyReason
from social.schemas.base_schema_model import BaseSchemaModel


class PrivacyCheckQuery(BaseSchemaModel):
    """Query string of GET /api/privacy/check."""

    profile_id: UUID


class PrivacyCheckResponse(BaseSchemaModel):
    """Whether the caller may see a profile's content."""

    profile_id: UUID
    can_view: bool
    limited_access: bool = Field(
        ..., description="True when only the profile header may be shown"
    )
    reason: PrivacyReason
