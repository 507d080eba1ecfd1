"""
API route handlers for the EstateHub API.
Routes are mounted at the application root.
"""

from .auth import router as auth_router
from .users import router as users_router
from .properties import router as properties_router
from .wishlist import router as wishlist_router
from .offers import router as offers_router
from .reviews import router as reviews_router
from .payments import router as payments_router
from .dashboard import router as dashboard_router

__all__ = [
    "auth_router",
    "users_router",
    "properties_router",
    "wishlist_router",
    "offers_router",
    "reviews_router",
    "payments_router",
    "dashboard_router",
]
