"""
Pydantic schemas for property requests and responses.
"""

from pydantic import Field, field_validator, model_validator
from typing import Optional
from datetime import datetime
from estatehub.models.property import PropertyStatus
from estatehub.schemas.base import CamelModel, NormalizedEmail, DocumentResponse


class PropertyCreate(CamelModel):
    """
    Schema for creating a listing, and for overwriting one with PUT.
    Status and advertising are managed by admins and cannot be submitted.
    """

    title: str = Field(..., min_length=1, max_length=255, examples=["Lakeview Cottage"])
    location: str = Field(..., min_length=1, max_length=255, examples=["Austin, TX"])
    image: Optional[str] = Field(None, max_length=1024)
    description: Optional[str] = Field(None, max_length=5000)

    agent_name: Optional[str] = Field(None, max_length=255)
    agent_email: NormalizedEmail = Field(..., examples=["agent@example.com"])
    agent_image: Optional[str] = Field(None, max_length=1024)

    min_price: float = Field(..., ge=0, examples=[120000])
    max_price: float = Field(..., ge=0, examples=[150000])

    @field_validator("title", "location")
    @classmethod
    def strip_text(cls, v):
        if not v.strip():
            raise ValueError("Field cannot be empty")
        return v.strip()

    @model_validator(mode="after")
    def validate_price_range(self):
        """The price range must not be inverted."""
        if self.max_price < self.min_price:
            raise ValueError("maxPrice must be greater than or equal to minPrice")
        return self


class PropertyResponse(DocumentResponse):
    """Property response schema."""

    title: str
    location: str
    image: Optional[str] = None
    description: Optional[str] = None
    agent_name: Optional[str] = None
    agent_email: str
    agent_image: Optional[str] = None
    min_price: float
    max_price: float
    status: PropertyStatus
    advertise: bool = False
    updated_at: Optional[datetime] = None
