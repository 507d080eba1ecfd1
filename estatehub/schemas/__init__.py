"""
Pydantic schemas for request/response validation.
"""

from .base import CamelModel, DocumentResponse, MessageResponse, NormalizedEmail
from .auth import TokenRequest, TokenResponse
from .user import UserCreate, UserResponse
from .property import PropertyCreate, PropertyResponse
from .wishlist import WishlistCreate, WishlistResponse
from .review import ReviewCreate, ReviewResponse
from .offer import (
    OfferCreate,
    OfferUpdate,
    OfferPurchase,
    OfferResponse,
    OfferAcceptResponse,
    PaymentIntentRequest,
    PaymentIntentResponse
)
from .dashboard import DashboardSummary

__all__ = [
    "CamelModel",
    "DocumentResponse",
    "MessageResponse",
    "NormalizedEmail",

    # Authentication
    "TokenRequest",
    "TokenResponse",

    # User
    "UserCreate",
    "UserResponse",

    # Property
    "PropertyCreate",
    "PropertyResponse",

    # Wishlist
    "WishlistCreate",
    "WishlistResponse",

    # Review
    "ReviewCreate",
    "ReviewResponse",

    # Offer and payment
    "OfferCreate",
    "OfferUpdate",
    "OfferPurchase",
    "OfferResponse",
    "OfferAcceptResponse",
    "PaymentIntentRequest",
    "PaymentIntentResponse",

    # Dashboard
    "DashboardSummary",
]
