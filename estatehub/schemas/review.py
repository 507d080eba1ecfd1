"""
Pydantic schemas for reviews.
"""

from pydantic import Field
from typing import Optional
from datetime import datetime
import uuid
from estatehub.schemas.base import CamelModel, NormalizedEmail, DocumentResponse


class ReviewCreate(CamelModel):
    """Schema for posting a review. The date defaults to the time of posting."""

    property_id: uuid.UUID
    property_title: Optional[str] = Field(None, max_length=255)
    agent_name: Optional[str] = Field(None, max_length=255)
    reviewer_name: Optional[str] = Field(None, max_length=255)
    reviewer_email: NormalizedEmail
    reviewer_image: Optional[str] = Field(None, max_length=1024)
    rating: Optional[int] = Field(None, ge=1, le=5)
    comment: Optional[str] = Field(None, max_length=5000)
    date: Optional[datetime] = None


class ReviewResponse(DocumentResponse):
    property_id: str
    property_title: Optional[str] = None
    agent_name: Optional[str] = None
    reviewer_name: Optional[str] = None
    reviewer_email: str
    reviewer_image: Optional[str] = None
    rating: Optional[int] = None
    comment: Optional[str] = None
    date: datetime
