"""
Tests for service layer classes.
"""

import asyncio
import pytest
import uuid
from datetime import datetime
from unittest.mock import Mock, patch

import stripe

from estatehub.models.user import UserRole
from estatehub.models.property import PropertyStatus
from estatehub.models.offer import OfferStatus
from estatehub.schemas.user import UserCreate
from estatehub.schemas.property import PropertyCreate
from estatehub.schemas.offer import OfferUpdate
from estatehub.models.review import Review
from estatehub.services.user import UserService
from estatehub.services.property import PropertyService
from estatehub.services.offer import OfferService
from estatehub.services.payment import PaymentService
from estatehub.services.identity import IdentityService
from estatehub.services.dashboard import DashboardService, SUMMARY_COUNTS
from estatehub.utils.exceptions import (
    BadRequestError,
    NotFoundError,
    DuplicateResourceError,
    InsufficientPermissionsError,
    OfferTransitionError,
    UpstreamServiceError,
    InternalServerError,
)
from tests.conftest import PropertyFactory, OfferFactory, ReviewFactory, UserFactory


class TestUserService:
    """Test user registration and account management."""

    async def test_register_user(self, db_session):
        service = UserService(db_session)

        user = await service.register_user(UserCreate(email="New@Example.com", name="New User"))

        assert user.email == "new@example.com"
        assert user.role == UserRole.USER

    async def test_register_agent(self, db_session):
        user = await UserService(db_session).register_user(
            UserCreate(email="seller@example.com", role=UserRole.AGENT)
        )

        assert user.role == UserRole.AGENT

    async def test_register_duplicate_user(self, db_session, test_buyer):
        with pytest.raises(DuplicateResourceError) as exc_info:
            await UserService(db_session).register_user(UserCreate(email="buyer@example.com"))

        assert exc_info.value.status_code == 400
        assert exc_info.value.detail == "User already exists"

    async def test_register_admin_refused(self, db_session):
        with pytest.raises(InsufficientPermissionsError):
            await UserService(db_session).register_user(
                UserCreate(email="sneaky@example.com", role=UserRole.ADMIN)
            )

    async def test_get_missing_user(self, db_session):
        with pytest.raises(NotFoundError, match="User not found"):
            await UserService(db_session).get_user_by_email("ghost@example.com")

    async def test_change_role_of_missing_user(self, db_session):
        with pytest.raises(NotFoundError):
            await UserService(db_session).change_role(uuid.uuid4(), UserRole.AGENT)

    async def test_top_agents_limited_to_six(self, db_session, user_repository):
        for _ in range(7):
            await UserFactory.create_user(user_repository, role=UserRole.AGENT)

        agents = await UserService(db_session).get_top_agents()

        assert len(agents) == 6

    async def test_delete_user_removes_identity_account(self, db_session, test_buyer, identity_provider):
        service = UserService(db_session)

        await service.delete_user(test_buyer.id, identity_provider)

        identity_provider.delete_user.assert_awaited_once_with("firebase-buyer-uid")
        assert await service.user_repo.get_by_id(test_buyer.id) is None

    async def test_delete_user_without_uid(self, db_session, test_agent, identity_provider):
        await UserService(db_session).delete_user(test_agent.id, identity_provider)

        identity_provider.delete_user.assert_not_awaited()

    async def test_delete_user_when_identity_provider_fails(self, db_session, test_buyer, identity_provider):
        identity_provider.delete_user.return_value = False
        service = UserService(db_session)

        await service.delete_user(test_buyer.id, identity_provider)

        assert await service.user_repo.get_by_id(test_buyer.id) is None

    async def test_delete_missing_user(self, db_session, identity_provider):
        with pytest.raises(NotFoundError):
            await UserService(db_session).delete_user(uuid.uuid4(), identity_provider)

        identity_provider.delete_user.assert_not_awaited()


class TestPropertyService:
    """Test listing operations."""

    async def test_create_property_starts_pending(self, db_session):
        payload = PropertyCreate(**PropertyFactory.create_property_data())

        property_obj = await PropertyService(db_session).create_property(payload)

        assert property_obj.status == PropertyStatus.PENDING
        assert property_obj.advertise is False

    async def test_agent_properties_require_email(self, db_session):
        with pytest.raises(BadRequestError, match="Email is required"):
            await PropertyService(db_session).list_agent_properties("")

    async def test_get_missing_property(self, db_session):
        with pytest.raises(NotFoundError, match="Property not found"):
            await PropertyService(db_session).get_property(uuid.uuid4())

    async def test_verify_then_reject(self, db_session, test_property):
        service = PropertyService(db_session)

        verified_status = (await service.set_status(test_property.id, PropertyStatus.VERIFIED)).status
        rejected = await service.set_status(test_property.id, PropertyStatus.REJECTED)

        assert verified_status == PropertyStatus.VERIFIED
        assert rejected.status == PropertyStatus.REJECTED

    async def test_replace_keeps_status(self, db_session, property_repository):
        listing = await PropertyFactory.create_property(property_repository, status=PropertyStatus.VERIFIED)
        payload = PropertyCreate(**PropertyFactory.create_property_data(title="Renovated"))

        updated = await PropertyService(db_session).replace_property(listing.id, payload)

        assert updated.title == "Renovated"
        assert updated.status == PropertyStatus.VERIFIED

    async def test_delete_missing_property(self, db_session):
        with pytest.raises(NotFoundError):
            await PropertyService(db_session).delete_property(uuid.uuid4())


class TestOfferService:
    """Test the offer lifecycle under both transition policies."""

    async def test_accept_rejects_siblings_only(self, db_session, offer_repository, property_repository):
        home = await PropertyFactory.create_property(property_repository, title="Home")
        other = await PropertyFactory.create_property(property_repository, title="Other")
        first = await OfferFactory.create_offer(offer_repository, home.id, buyer_email="one@example.com")
        second = await OfferFactory.create_offer(offer_repository, home.id, buyer_email="two@example.com")
        third = await OfferFactory.create_offer(offer_repository, other.id, buyer_email="three@example.com")
        service = OfferService(db_session, policy="lenient")

        accepted, rejected_count = await service.accept_offer(first.id)

        assert accepted.status == OfferStatus.ACCEPTED
        assert rejected_count == 1
        assert (await service.get_offer(second.id)).status == OfferStatus.REJECTED
        assert (await service.get_offer(third.id)).status == OfferStatus.PENDING

    async def test_accept_twice(self, db_session, offer_repository, test_property):
        offer = await OfferFactory.create_offer(offer_repository, test_property.id)
        service = OfferService(db_session, policy="lenient")
        await service.accept_offer(offer.id)

        with pytest.raises(NotFoundError, match="Offer not found or already updated"):
            await service.accept_offer(offer.id)

    async def test_accept_missing_offer(self, db_session):
        with pytest.raises(NotFoundError):
            await OfferService(db_session).accept_offer(uuid.uuid4())

    async def test_reject_twice(self, db_session, offer_repository, test_property):
        offer = await OfferFactory.create_offer(offer_repository, test_property.id)
        service = OfferService(db_session, policy="lenient")
        await service.reject_offer(offer.id)

        with pytest.raises(NotFoundError):
            await service.reject_offer(offer.id)

    async def test_lenient_overwrites_bought_offer(self, db_session, offer_repository, test_property):
        offer = await OfferFactory.create_offer(offer_repository, test_property.id)
        service = OfferService(db_session, policy="lenient")
        await service.mark_bought(offer.id, "tx-1")

        rejected = await service.reject_offer(offer.id)

        assert rejected.status == OfferStatus.REJECTED
        assert rejected.transaction_id == "tx-1"

    async def test_lenient_marks_pending_offer_bought(self, db_session, offer_repository, test_property):
        offer = await OfferFactory.create_offer(offer_repository, test_property.id)

        bought = await OfferService(db_session, policy="lenient").mark_bought(offer.id, "tx-2")

        assert bought.status == OfferStatus.BOUGHT
        assert bought.transaction_id == "tx-2"

    async def test_strict_full_lifecycle(self, db_session, offer_repository, test_property):
        offer = await OfferFactory.create_offer(offer_repository, test_property.id)
        service = OfferService(db_session, policy="strict")

        await service.accept_offer(offer.id)
        bought = await service.mark_bought(offer.id, "tx-3")

        assert bought.status == OfferStatus.BOUGHT

    async def test_strict_refuses_buying_pending_offer(self, db_session, offer_repository, test_property):
        offer = await OfferFactory.create_offer(offer_repository, test_property.id)

        with pytest.raises(OfferTransitionError) as exc_info:
            await OfferService(db_session, policy="strict").mark_bought(offer.id, "tx-4")

        assert exc_info.value.status_code == 409
        assert (await offer_repository.get_by_id(offer.id)).status == OfferStatus.PENDING

    async def test_strict_refuses_accepting_rejected_offer(self, db_session, offer_repository, test_property):
        offer = await OfferFactory.create_offer(offer_repository, test_property.id)
        service = OfferService(db_session, policy="strict")
        await service.reject_offer(offer.id)

        with pytest.raises(OfferTransitionError):
            await service.accept_offer(offer.id)

    async def test_strict_refuses_cascade_over_bought_sibling(self, db_session, offer_repository, test_property):
        sold = await OfferFactory.create_offer(offer_repository, test_property.id)
        service = OfferService(db_session, policy="strict")
        await service.accept_offer(sold.id)
        await service.mark_bought(sold.id, "tx-5")
        sold_id = sold.id
        late = await OfferFactory.create_offer(offer_repository, test_property.id, buyer_email="late@example.com")

        with pytest.raises(OfferTransitionError):
            await service.accept_offer(late.id)

        assert (await offer_repository.get_by_id(sold_id)).status == OfferStatus.BOUGHT

    async def test_strict_refuses_rejecting_twice(self, db_session, offer_repository, test_property):
        offer = await OfferFactory.create_offer(offer_repository, test_property.id)
        service = OfferService(db_session, policy="strict")
        await service.reject_offer(offer.id)

        with pytest.raises(OfferTransitionError):
            await service.reject_offer(offer.id)

    async def test_strict_refuses_rejecting_accepted_offer(self, db_session, offer_repository, test_property):
        offer = await OfferFactory.create_offer(offer_repository, test_property.id)
        service = OfferService(db_session, policy="strict")
        await service.accept_offer(offer.id)

        with pytest.raises(OfferTransitionError, match="from 'accepted' to 'rejected'"):
            await service.reject_offer(offer.id)

        assert (await offer_repository.get_by_id(offer.id)).status == OfferStatus.ACCEPTED

    async def test_strict_buying_missing_offer(self, db_session):
        with pytest.raises(NotFoundError, match="Offer not found or already updated"):
            await OfferService(db_session, policy="strict").mark_bought(uuid.uuid4(), "tx-6")

    async def test_replace_offer_keeps_property_and_status(
        self, db_session, offer_repository, property_repository
    ):
        home = await PropertyFactory.create_property(property_repository, title="Home")
        other = await PropertyFactory.create_property(property_repository, title="Other")
        offer = await OfferFactory.create_offer(offer_repository, home.id)
        service = OfferService(db_session)
        await service.accept_offer(offer.id)
        payload = OfferUpdate(**OfferFactory.create_offer_data(other.id, offer_amount=128000))

        updated = await service.replace_offer(offer.id, payload)

        assert updated.property_id == home.id
        assert updated.status == OfferStatus.ACCEPTED
        assert float(updated.offer_amount) == 128000

    async def test_list_requires_email(self, db_session):
        service = OfferService(db_session)

        with pytest.raises(BadRequestError, match="Email is required"):
            await service.list_bought(None)
        with pytest.raises(BadRequestError, match="Agent email is required"):
            await service.list_for_agent("")


class TestPaymentService:
    """Test Stripe payment intent creation."""

    def test_to_minor_units(self):
        assert PaymentService.to_minor_units(1500.5) == 150050
        assert PaymentService.to_minor_units(0.999) == 99

    async def test_create_payment_intent(self):
        service = PaymentService(api_key="sk_test_123", currency="usd")
        intent = Mock(id="pi_123", client_secret="pi_123_secret_abc")

        with patch("estatehub.services.payment.stripe.PaymentIntent.create", return_value=intent) as create:
            client_secret = await service.create_payment_intent(1500.5)

        assert client_secret == "pi_123_secret_abc"
        create.assert_called_once_with(
            api_key="sk_test_123",
            amount=150050,
            currency="usd",
            payment_method_types=["card"],
        )

    async def test_stripe_error(self):
        service = PaymentService(api_key="sk_test_123")

        with patch(
            "estatehub.services.payment.stripe.PaymentIntent.create",
            side_effect=stripe.StripeError("Your card was declined.")
        ):
            with pytest.raises(UpstreamServiceError) as exc_info:
                await service.create_payment_intent(100)

        assert exc_info.value.status_code == 502

    async def test_missing_api_key(self):
        with patch("estatehub.services.payment.stripe.PaymentIntent.create") as create:
            with pytest.raises(UpstreamServiceError, match="not configured"):
                await PaymentService(api_key="").create_payment_intent(100)

        create.assert_not_called()


class TestIdentityService:
    """Test best-effort identity provider account deletion."""

    async def test_no_service_key(self):
        service = IdentityService(service_key="")

        assert await service.delete_user("uid-1") is False

    async def test_unusable_service_key(self):
        service = IdentityService(service_key="definitely not base64 json")

        assert await service.delete_user("uid-1") is False
        assert service._get_app() is None

    async def test_no_uid(self):
        service = IdentityService(service_key="")
        service._app = Mock()

        with patch("estatehub.services.identity.auth.delete_user") as delete_user:
            assert await service.delete_user(None) is False

        delete_user.assert_not_called()

    async def test_delete_user(self):
        service = IdentityService(service_key="")
        app = Mock()
        service._app = app

        with patch("estatehub.services.identity.auth.delete_user") as delete_user:
            assert await service.delete_user("uid-1") is True

        delete_user.assert_called_once_with("uid-1", app=app)

    async def test_provider_failure_is_swallowed(self):
        service = IdentityService(service_key="")
        service._app = Mock()

        with patch(
            "estatehub.services.identity.auth.delete_user",
            side_effect=RuntimeError("provider unavailable")
        ):
            assert await service.delete_user("uid-1") is False


class TestDashboardService:
    """Test the admin dashboard aggregator."""

    async def test_summary_counts(
        self,
        session_factory,
        user_repository,
        property_repository,
        review_repository,
        test_admin,
        test_agent,
        test_buyer
    ):
        await PropertyFactory.create_property(property_repository)
        await PropertyFactory.create_property(property_repository, status=PropertyStatus.VERIFIED, advertise=True)
        rejected = await PropertyFactory.create_property(property_repository, status=PropertyStatus.REJECTED)
        await UserFactory.create_user(user_repository)
        await ReviewFactory.create_review(review_repository, rejected.id, date=datetime(2024, 5, 1))

        summary = await DashboardService(session_factory).get_summary()

        assert summary.total_users == 2
        assert summary.total_admins == 1
        assert summary.total_agents == 1
        assert summary.all_properties == 3
        assert summary.pending_properties == 1
        assert summary.accepted_properties == 1
        assert summary.rejected_properties == 1
        assert summary.total_reviews == 1
        assert summary.advertised_properties == 1

    async def test_empty_database(self, session_factory):
        summary = await DashboardService(session_factory).get_summary()

        assert summary.model_dump() == dict.fromkeys(summary.model_dump(), 0)

    async def test_count_failure(self):
        failing_factory = Mock(side_effect=RuntimeError("connection refused"))

        with pytest.raises(InternalServerError, match="Failed to load summary"):
            await DashboardService(failing_factory).get_summary()

    async def test_count_failure_cancels_remaining_counts(self, session_factory):
        cancelled = []

        async def count(model, filters):
            if model is Review:
                await asyncio.sleep(0)
                raise RuntimeError("connection reset")
            try:
                await asyncio.sleep(30)
            except asyncio.CancelledError:
                cancelled.append(model)
                raise
            return 0

        service = DashboardService(session_factory)
        with patch.object(service, "_count", side_effect=count):
            with pytest.raises(InternalServerError):
                await service.get_summary()

        assert len(cancelled) == len(SUMMARY_COUNTS) - 1
