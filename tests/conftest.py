"""
Test configuration and fixtures for the EstateHub API.
Provides database fixtures, test data factories, and common test utilities.
"""

import os
import tempfile

# Configure the application before it is imported
_TEST_DIR = tempfile.mkdtemp(prefix="estatehub-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_TEST_DIR, 'app.db')}"
os.environ["ENVIRONMENT"] = "testing"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ.pop("STRIPE_SECRET_KEY", None)
os.environ.pop("FIREBASE_SERVICE_KEY", None)

import pytest
import uuid
from datetime import datetime
from typing import AsyncGenerator, Optional
from unittest.mock import AsyncMock, Mock
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import NullPool
from httpx import AsyncClient, ASGITransport

from estatehub.main import app
from estatehub.database import Base, get_db, get_session_factory
from estatehub.models.user import User, UserRole
from estatehub.models.property import Property, PropertyStatus
from estatehub.models.offer import Offer
from estatehub.models.review import Review
from estatehub.repositories.user import UserRepository
from estatehub.repositories.property import PropertyRepository
from estatehub.repositories.offer import OfferRepository
from estatehub.repositories.review import ReviewRepository
from estatehub.repositories.wishlist import WishlistRepository
from estatehub.services.payment import PaymentService, get_payment_service
from estatehub.services.identity import IdentityService, get_identity_service
from estatehub.utils.auth import create_access_token


@pytest.fixture
async def test_engine(tmp_path):
    """A fresh SQLite database per test."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        poolclass=NullPool
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker:
    return async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False
    )


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def payment_gateway() -> Mock:
    """Stand-in for the Stripe backed payment service."""
    gateway = Mock(spec=PaymentService)
    gateway.create_payment_intent = AsyncMock(return_value="pi_test_secret_123")
    return gateway


@pytest.fixture
def identity_provider() -> Mock:
    """Stand-in for the Firebase identity provider."""
    provider = Mock(spec=IdentityService)
    provider.delete_user = AsyncMock(return_value=True)
    return provider


@pytest.fixture
async def async_client(
    session_factory,
    payment_gateway,
    identity_provider
) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client with database and collaborator overrides."""
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_payment_service] = lambda: payment_gateway
    app.dependency_overrides[get_identity_service] = lambda: identity_provider

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# Repository fixtures
@pytest.fixture
def user_repository(db_session: AsyncSession) -> UserRepository:
    return UserRepository(db_session)


@pytest.fixture
def property_repository(db_session: AsyncSession) -> PropertyRepository:
    return PropertyRepository(db_session)


@pytest.fixture
def offer_repository(db_session: AsyncSession) -> OfferRepository:
    return OfferRepository(db_session)


@pytest.fixture
def review_repository(db_session: AsyncSession) -> ReviewRepository:
    return ReviewRepository(db_session)


@pytest.fixture
def wishlist_repository(db_session: AsyncSession) -> WishlistRepository:
    return WishlistRepository(db_session)


# Test data factories
class UserFactory:
    """Factory for creating test users."""

    @staticmethod
    def create_user_data(
        email: Optional[str] = None,
        name: str = "Test User",
        role: UserRole = UserRole.USER,
        uid: Optional[str] = None
    ) -> dict:
        return {
            "email": email or f"user{uuid.uuid4().hex[:8]}@example.com",
            "name": name,
            "photo_url": "https://img.example.com/avatar.png",
            "role": role,
            "uid": uid,
        }

    @staticmethod
    async def create_user(
        user_repo: UserRepository,
        email: Optional[str] = None,
        name: str = "Test User",
        role: UserRole = UserRole.USER,
        uid: Optional[str] = None
    ) -> User:
        """Create a test user in the database."""
        user_data = UserFactory.create_user_data(email=email, name=name, role=role, uid=uid)
        return await user_repo.create_user(user_data)


class PropertyFactory:
    """Factory for creating test properties."""

    @staticmethod
    def create_property_data(
        title: str = "Lakeview Cottage",
        location: str = "Austin, TX",
        agent_email: str = "agent@example.com",
        min_price: float = 120000,
        max_price: float = 150000
    ) -> dict:
        return {
            "title": title,
            "location": location,
            "image": "https://img.example.com/house.jpg",
            "description": "Two bedrooms by the lake",
            "agent_name": "Test Agent",
            "agent_email": agent_email,
            "agent_image": "https://img.example.com/agent.png",
            "min_price": min_price,
            "max_price": max_price,
        }

    @staticmethod
    async def create_property(
        property_repo: PropertyRepository,
        title: str = "Lakeview Cottage",
        agent_email: str = "agent@example.com",
        min_price: float = 120000,
        max_price: float = 150000,
        status: PropertyStatus = PropertyStatus.PENDING,
        advertise: bool = False
    ) -> Property:
        """Create a test property, then move it to the requested status."""
        property_obj = await property_repo.create_property(
            PropertyFactory.create_property_data(
                title=title,
                agent_email=agent_email,
                min_price=min_price,
                max_price=max_price
            )
        )
        if status != PropertyStatus.PENDING:
            property_obj = await property_repo.set_status(property_obj.id, status)
        if advertise:
            property_obj = await property_repo.set_advertise(property_obj.id, True)
        return property_obj


class OfferFactory:
    """Factory for creating test offers."""

    @staticmethod
    def create_offer_data(
        property_id: uuid.UUID,
        buyer_email: str = "buyer@example.com",
        agent_email: str = "agent@example.com",
        offer_amount: float = 130000
    ) -> dict:
        return {
            "property_id": property_id,
            "property_title": "Lakeview Cottage",
            "property_location": "Austin, TX",
            "property_image": "https://img.example.com/house.jpg",
            "agent_name": "Test Agent",
            "agent_email": agent_email,
            "buyer_name": "Test Buyer",
            "buyer_email": buyer_email,
            "offer_amount": offer_amount,
            "buying_date": datetime(2024, 6, 1, 12, 0),
        }

    @staticmethod
    async def create_offer(
        offer_repo: OfferRepository,
        property_id: uuid.UUID,
        buyer_email: str = "buyer@example.com",
        agent_email: str = "agent@example.com",
        offer_amount: float = 130000
    ) -> Offer:
        """Create a pending test offer."""
        return await offer_repo.create_offer(
            OfferFactory.create_offer_data(
                property_id,
                buyer_email=buyer_email,
                agent_email=agent_email,
                offer_amount=offer_amount
            )
        )


class ReviewFactory:
    """Factory for creating test reviews."""

    @staticmethod
    async def create_review(
        review_repo: ReviewRepository,
        property_id: uuid.UUID,
        date: datetime,
        reviewer_email: str = "buyer@example.com",
        rating: int = 5
    ) -> Review:
        return await review_repo.create({
            "property_id": property_id,
            "property_title": "Lakeview Cottage",
            "agent_name": "Test Agent",
            "reviewer_name": "Test Buyer",
            "reviewer_email": reviewer_email,
            "rating": rating,
            "comment": "Great place",
            "date": date,
        })


def auth_headers(email: str, role: Optional[str] = None) -> dict:
    """Authorization header carrying a fresh session token."""
    return {"Authorization": f"Bearer {create_access_token(email, role)}"}


# Common test fixtures
@pytest.fixture
async def test_admin(user_repository: UserRepository) -> User:
    return await UserFactory.create_user(
        user_repository,
        email="admin@example.com",
        name="Test Admin",
        role=UserRole.ADMIN
    )


@pytest.fixture
async def test_agent(user_repository: UserRepository) -> User:
    return await UserFactory.create_user(
        user_repository,
        email="agent@example.com",
        name="Test Agent",
        role=UserRole.AGENT
    )


@pytest.fixture
async def test_buyer(user_repository: UserRepository) -> User:
    return await UserFactory.create_user(
        user_repository,
        email="buyer@example.com",
        name="Test Buyer",
        role=UserRole.USER,
        uid="firebase-buyer-uid"
    )


@pytest.fixture
async def test_property(property_repository: PropertyRepository) -> Property:
    return await PropertyFactory.create_property(property_repository)
