"""
Repository layer for data access operations.
One repository per marketplace collection.
"""

from estatehub.repositories.base import BaseRepository
from estatehub.repositories.user import UserRepository
from estatehub.repositories.property import PropertyRepository
from estatehub.repositories.wishlist import WishlistRepository
from estatehub.repositories.review import ReviewRepository
from estatehub.repositories.offer import OfferRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "PropertyRepository",
    "WishlistRepository",
    "ReviewRepository",
    "OfferRepository",
]
