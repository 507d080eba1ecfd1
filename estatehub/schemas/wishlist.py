"""
Pydantic schemas for wishlist entries.
"""

from pydantic import Field
from typing import Optional
import uuid
from estatehub.schemas.base import CamelModel, NormalizedEmail, DocumentResponse


class WishlistCreate(CamelModel):
    """A property saved by a user, with a snapshot of the listing."""

    user_email: NormalizedEmail
    property_id: uuid.UUID
    title: Optional[str] = Field(None, max_length=255)
    location: Optional[str] = Field(None, max_length=255)
    image: Optional[str] = Field(None, max_length=1024)
    agent_name: Optional[str] = Field(None, max_length=255)
    agent_email: Optional[NormalizedEmail] = None
    agent_image: Optional[str] = Field(None, max_length=1024)
    min_price: Optional[float] = Field(None, ge=0)
    max_price: Optional[float] = Field(None, ge=0)
    status: Optional[str] = Field(None, max_length=32)


class WishlistResponse(DocumentResponse):
    user_email: str
    property_id: str
    title: Optional[str] = None
    location: Optional[str] = None
    image: Optional[str] = None
    agent_name: Optional[str] = None
    agent_email: Optional[str] = None
    agent_image: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    status: Optional[str] = None
