"""
Base schemas with common fields and utilities.
"""

from pydantic import BaseModel, ConfigDict, Field


class BaseSchema(BaseModel):
    """Base schema with common configuration."""
    model_config = ConfigDict(from_attributes=True)


class MessageSchema(BaseSchema):
    """Schema for simple confirmation message responses."""
    message: str = Field(description="Response message")
