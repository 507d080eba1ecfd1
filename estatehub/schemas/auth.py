"""
Pydantic schemas for session token requests and responses.
"""

from pydantic import Field
from typing import Optional
from estatehub.models.user import UserRole
from estatehub.schemas.base import CamelModel, NormalizedEmail


class TokenRequest(CamelModel):
    """Token request schema."""

    email: NormalizedEmail = Field(
        ...,
        description="Identity to embed in the token",
        examples=["buyer@example.com"]
    )
    role: Optional[UserRole] = Field(
        None,
        description="Role claim; guards always re-read the stored role",
        examples=["user"]
    )


class TokenResponse(CamelModel):
    """Token response schema."""

    token: str = Field(
        ...,
        description="Signed session token, valid for 30 days",
        examples=["eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9..."]
    )
