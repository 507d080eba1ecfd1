"""
FastAPI dependency injection utilities for authentication and database sessions.
Provides reusable dependencies for route protection and service construction.
"""

from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from estatehub.database import get_db, get_session_factory
from estatehub.models.user import UserRole
from estatehub.services.auth import AuthService
from estatehub.services.user import UserService
from estatehub.services.property import PropertyService
from estatehub.services.wishlist import WishlistService
from estatehub.services.review import ReviewService
from estatehub.services.offer import OfferService
from estatehub.services.dashboard import DashboardService
from estatehub.utils.auth import TokenClaims, extract_token_from_header


# HTTP Bearer token security scheme
security = HTTPBearer(auto_error=False)


async def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    return AuthService(db)


async def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db)


async def get_property_service(db: AsyncSession = Depends(get_db)) -> PropertyService:
    return PropertyService(db)


async def get_wishlist_service(db: AsyncSession = Depends(get_db)) -> WishlistService:
    return WishlistService(db)


async def get_review_service(db: AsyncSession = Depends(get_db)) -> ReviewService:
    return ReviewService(db)


async def get_offer_service(db: AsyncSession = Depends(get_db)) -> OfferService:
    return OfferService(db)


async def get_dashboard_service(
    session_factory: async_sessionmaker = Depends(get_session_factory)
) -> DashboardService:
    """
    Get dashboard service instance.
    Uses the session factory rather than the request session so each count
    runs on its own connection.
    """
    return DashboardService(session_factory)


async def get_current_claims(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> TokenClaims:
    """
    Verify the bearer token of the current request.

    Args:
        request: Incoming request, read for non-Bearer Authorization headers
        credentials: HTTP Bearer credentials
        auth_service: Authentication service

    Returns:
        Verified token claims

    Raises:
        UnauthorizedError: If no Authorization header was sent
        InvalidTokenError: If the header or token is malformed or badly signed
        TokenExpiredError: If the token is expired
    """
    if credentials:
        token = credentials.credentials
    else:
        token = extract_token_from_header(request.headers.get("Authorization"))

    return auth_service.verify(token)


async def get_current_admin(
    claims: TokenClaims = Depends(get_current_claims),
    auth_service: AuthService = Depends(get_auth_service)
) -> TokenClaims:
    """
    Require the caller to be a stored admin.

    Raises:
        InsufficientPermissionsError: If the caller is not an admin
    """
    return await auth_service.require_role(claims, UserRole.ADMIN)


async def get_current_agent(
    claims: TokenClaims = Depends(get_current_claims),
    auth_service: AuthService = Depends(get_auth_service)
) -> TokenClaims:
    """
    Require the caller to be a stored agent.

    Raises:
        InsufficientPermissionsError: If the caller is not an agent
    """
    return await auth_service.require_role(claims, UserRole.AGENT)
