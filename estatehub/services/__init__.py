"""
Service layer for business logic implementation.
Contains one service per marketplace collection plus the external collaborators.
"""

from .auth import AuthService
from .user import UserService
from .property import PropertyService
from .wishlist import WishlistService
from .review import ReviewService
from .offer import OfferService
from .dashboard import DashboardService
from .payment import PaymentService
from .identity import IdentityService
from .error_handler import ErrorHandlerService

__all__ = [
    "AuthService",
    "UserService",
    "PropertyService",
    "WishlistService",
    "ReviewService",
    "OfferService",
    "DashboardService",
    "PaymentService",
    "IdentityService",
    "ErrorHandlerService"
]
