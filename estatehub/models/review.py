"""
Review model. Reviews are immutable once created; they can only be deleted.
"""

from sqlalchemy import String, Text, Integer, DateTime, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column
from estatehub.database import Base
from datetime import datetime
import uuid
from typing import Optional


class Review(Base):
    """Review left by a user on a property."""

    __tablename__ = "reviews"

    property_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        nullable=False,
        index=True
    )
    property_title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    agent_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    reviewer_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    reviewer_email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True
    )
    reviewer_image: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)

    rating: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    comment: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        index=True,
        comment="Review date, used for newest-first ordering"
    )

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "property_id": str(self.property_id),
            "property_title": self.property_title,
            "agent_name": self.agent_name,
            "reviewer_name": self.reviewer_name,
            "reviewer_email": self.reviewer_email,
            "reviewer_image": self.reviewer_image,
            "rating": self.rating,
            "comment": self.comment,
            "date": self.date,
        }
