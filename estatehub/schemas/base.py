"""
Shared schema configuration.
Request and response bodies use camelCase keys on the wire; snake_case is accepted too.
"""

from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Annotated, Optional


def normalize_email(value: str) -> str:
    """Emails are stored and matched in lowercase."""
    return value.strip().lower()


NormalizedEmail = Annotated[EmailStr, AfterValidator(normalize_email)]


class CamelModel(BaseModel):
    """Base schema with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class DocumentResponse(CamelModel):
    """Base response for stored entities; the id is exposed as `_id`."""

    id: str = Field(..., alias="_id", description="Unique identifier")
    created_at: Optional[datetime] = None


class MessageResponse(CamelModel):
    """Result of a mutation that returns no entity."""

    success: bool = True
    message: str = Field(..., examples=["Property updated successfully"])
