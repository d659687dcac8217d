"""Pydantic schemas for requests and responses."""

from social.schemas.base_schema_model import BaseSchemaModel
from social.schemas.profile import ProfileSummary

__all__ = ["BaseSchemaModel", "ProfileSummary"]
