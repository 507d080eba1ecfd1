"""
Wishlist entry model.
Stores a snapshot of the property as it looked when the user saved it.
"""

from sqlalchemy import String, Numeric, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from estatehub.database import Base
from decimal import Decimal
import uuid
from typing import Optional


class WishlistItem(Base):
    """
    A property saved by a user. The same property may be saved more than once.
    """

    __tablename__ = "wishlists"

    user_email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        comment="Email of the user who saved the property"
    )

    property_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        nullable=False,
        index=True,
        comment="Referenced property, not enforced as a foreign key"
    )

    title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    image: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    agent_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    agent_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    agent_image: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    min_price: Mapped[Optional[Decimal]] = mapped_column(Numeric(precision=12, scale=2), nullable=True)
    max_price: Mapped[Optional[Decimal]] = mapped_column(Numeric(precision=12, scale=2), nullable=True)
    status: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "user_email": self.user_email,
            "property_id": str(self.property_id),
            "title": self.title,
            "location": self.location,
            "image": self.image,
            "agent_name": self.agent_name,
            "agent_email": self.agent_email,
            "agent_image": self.agent_image,
            "min_price": float(self.min_price) if self.min_price is not None else None,
            "max_price": float(self.max_price) if self.max_price is not None else None,
            "status": self.status,
            "created_at": self.created_at,
        }
