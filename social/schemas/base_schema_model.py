"""Base pydantic model for centralized configuration of schema definitions."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseSchemaModel(BaseModel):
    """Base pydantic model shared by all request and response schemas.

    Fields are snake_case in Python and camelCase on the wire; inputs are
    accepted under either name.
    """

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        extra="ignore",
        str_strip_whitespace=True,
    )

    def to_response(self) -> dict:
        """Serialize to the camelCase JSON-compatible dict returned by views."""
        return self.model_dump(by_alias=True, mode="json")
