"""
Pydantic schemas for user requests and responses.
"""

from pydantic import Field
from typing import Optional
from datetime import datetime
from estatehub.models.user import UserRole
from estatehub.schemas.base import CamelModel, NormalizedEmail, DocumentResponse


class UserCreate(CamelModel):
    """Schema for registering a user after identity-provider sign up."""

    email: NormalizedEmail = Field(..., examples=["buyer@example.com"])
    name: Optional[str] = Field(None, max_length=255, examples=["Jane Buyer"])
    photo_url: Optional[str] = Field(None, max_length=1024)
    uid: Optional[str] = Field(None, max_length=128, description="Identity provider user id")
    role: UserRole = Field(UserRole.USER, description="Requested role")


class UserResponse(DocumentResponse):
    """User response schema."""

    email: str
    name: Optional[str] = None
    photo_url: Optional[str] = None
    role: UserRole
    fraud: bool = False
    uid: Optional[str] = None
    updated_at: Optional[datetime] = None
