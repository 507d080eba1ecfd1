"""
Database models for the EstateHub API.
Each model maps one of the five marketplace collections to a table.
"""

from estatehub.models.user import User, UserRole
from estatehub.models.property import Property, PropertyStatus
from estatehub.models.wishlist import WishlistItem
from estatehub.models.review import Review
from estatehub.models.offer import Offer, OfferStatus

__all__ = [
    "User",
    "UserRole",
    "Property",
    "PropertyStatus",
    "WishlistItem",
    "Review",
    "Offer",
    "OfferStatus",
]
