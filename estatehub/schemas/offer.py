"""
Pydantic schemas for offers and payments.
"""

from pydantic import Field
from typing import Optional
from datetime import datetime
import uuid
from estatehub.models.offer import OfferStatus
from estatehub.schemas.base import CamelModel, NormalizedEmail, DocumentResponse, MessageResponse


class OfferUpdate(CamelModel):
    """
    Schema for overwriting an offer with PUT.
    The property an offer is made on cannot be changed. Status and transaction
    id are set by the lifecycle operations only.
    """

    property_title: Optional[str] = Field(None, max_length=255)
    property_location: Optional[str] = Field(None, max_length=255)
    property_image: Optional[str] = Field(None, max_length=1024)
    agent_name: Optional[str] = Field(None, max_length=255)
    agent_email: NormalizedEmail
    buyer_name: Optional[str] = Field(None, max_length=255)
    buyer_email: NormalizedEmail
    offer_amount: float = Field(..., gt=0, examples=[135000])
    buying_date: Optional[datetime] = None


class OfferCreate(OfferUpdate):
    """Schema for making an offer."""

    property_id: uuid.UUID


class OfferPurchase(CamelModel):
    """Payment confirmation that marks an offer as bought."""

    transaction_id: str = Field(..., min_length=1, max_length=255, examples=["pi_3PqXyZ"])


class OfferResponse(DocumentResponse):
    property_id: str
    property_title: Optional[str] = None
    property_location: Optional[str] = None
    property_image: Optional[str] = None
    agent_name: Optional[str] = None
    agent_email: str
    buyer_name: Optional[str] = None
    buyer_email: str
    offer_amount: float
    buying_date: Optional[datetime] = None
    status: OfferStatus
    transaction_id: Optional[str] = None
    updated_at: Optional[datetime] = None


class OfferAcceptResponse(MessageResponse):
    """Result of accepting an offer."""

    offer: OfferResponse
    rejected_count: int = Field(..., description="Other offers on the property that were rejected")


class PaymentIntentRequest(CamelModel):
    price: float = Field(..., gt=0, description="Price in dollars", examples=[135000])


class PaymentIntentResponse(CamelModel):
    client_secret: str
