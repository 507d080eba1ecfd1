"""
Offer model and its status state machine.
"""

from sqlalchemy import String, Numeric, DateTime, Uuid, Enum as SQLEnum, Index
from sqlalchemy.orm import Mapped, mapped_column
from estatehub.database import Base
from datetime import datetime
from decimal import Decimal
import enum
import uuid
from typing import Dict, FrozenSet, Optional


class OfferStatus(str, enum.Enum):
    """Offer status enumeration."""
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    BOUGHT = "bought"


# Allowed predecessor -> successor moves when transitions are enforced
OFFER_TRANSITIONS: Dict[OfferStatus, FrozenSet[OfferStatus]] = {
    OfferStatus.PENDING: frozenset({OfferStatus.ACCEPTED, OfferStatus.REJECTED}),
    OfferStatus.ACCEPTED: frozenset({OfferStatus.BOUGHT}),
    OfferStatus.REJECTED: frozenset(),
    OfferStatus.BOUGHT: frozenset(),
}

# Statuses an agent sees on the incoming offers page
OPEN_OFFER_STATUSES = [OfferStatus.PENDING, OfferStatus.ACCEPTED, OfferStatus.REJECTED]


def can_transition(current: OfferStatus, target: OfferStatus) -> bool:
    """Check whether `current -> target` is a legal offer transition."""
    return target in OFFER_TRANSITIONS[current]


def allowed_predecessors(target: OfferStatus) -> FrozenSet[OfferStatus]:
    """Statuses an offer may hold when it is moved to `target`."""
    return frozenset(
        current for current, targets in OFFER_TRANSITIONS.items() if target in targets
    )


class Offer(Base):
    """
    Purchase offer made by a buyer on a property listed by an agent.
    """

    __tablename__ = "offers"

    property_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        nullable=False,
        index=True,
        comment="Referenced property, not enforced as a foreign key"
    )
    property_title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    property_location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    property_image: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)

    agent_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    agent_email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    buyer_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    buyer_email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    offer_amount: Mapped[Decimal] = mapped_column(
        Numeric(precision=12, scale=2),
        nullable=False
    )
    buying_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    status: Mapped[OfferStatus] = mapped_column(
        SQLEnum(OfferStatus),
        nullable=False,
        default=OfferStatus.PENDING,
        index=True
    )

    transaction_id: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        comment="Payment processor transaction id, set when bought"
    )

    __table_args__ = (
        Index("idx_offer_agent_status", "agent_email", "status"),
    )

    def __repr__(self) -> str:
        return f"<Offer(id={self.id}, property_id={self.property_id}, status={self.status})>"

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "property_id": str(self.property_id),
            "property_title": self.property_title,
            "property_location": self.property_location,
            "property_image": self.property_image,
            "agent_name": self.agent_name,
            "agent_email": self.agent_email,
            "buyer_name": self.buyer_name,
            "buyer_email": self.buyer_email,
            "offer_amount": float(self.offer_amount),
            "buying_date": self.buying_date,
            "status": self.status.value,
            "transaction_id": self.transaction_id,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
