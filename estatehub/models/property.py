"""
Property model for marketplace listings.
Handles listing data, price range, verification status and advertising.
"""

from sqlalchemy import String, Text, Numeric, Boolean, Enum as SQLEnum, Index
from sqlalchemy.orm import Mapped, mapped_column
from estatehub.database import Base
from decimal import Decimal
import enum
from typing import Optional


class PropertyStatus(str, enum.Enum):
    """Verification status; only admins move a property out of PENDING."""
    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"


class Property(Base):
    """
    Property listing owned by an agent, referenced by the agent's email.
    """

    __tablename__ = "properties"

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Property listing title"
    )

    location: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Property location/address"
    )

    image: Mapped[Optional[str]] = mapped_column(
        String(1024),
        nullable=True,
        comment="Cover image URL"
    )

    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True
    )

    # Listing agent
    agent_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    agent_email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        comment="Email of the agent who listed this property"
    )
    agent_image: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)

    # Price range
    min_price: Mapped[Decimal] = mapped_column(
        Numeric(precision=12, scale=2),
        nullable=False,
        index=True
    )
    max_price: Mapped[Decimal] = mapped_column(
        Numeric(precision=12, scale=2),
        nullable=False
    )

    status: Mapped[PropertyStatus] = mapped_column(
        SQLEnum(PropertyStatus),
        nullable=False,
        default=PropertyStatus.PENDING,
        index=True
    )

    advertise: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        index=True
    )

    __table_args__ = (
        Index("idx_property_status_min_price", "status", "min_price"),
    )

    def __repr__(self) -> str:
        return f"<Property(id={self.id}, title={self.title[:30]}, status={self.status})>"

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "title": self.title,
            "location": self.location,
            "image": self.image,
            "description": self.description,
            "agent_name": self.agent_name,
            "agent_email": self.agent_email,
            "agent_image": self.agent_image,
            "min_price": float(self.min_price),
            "max_price": float(self.max_price),
            "status": self.status.value,
            "advertise": self.advertise,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
