"""
Payment gateway backed by Stripe payment intents.
"""

from typing import Optional
from starlette.concurrency import run_in_threadpool
from estatehub.config import settings
from estatehub.utils.exceptions import UpstreamServiceError
import stripe
import logging

logger = logging.getLogger(__name__)


class PaymentService:
    """Creates card payment intents for property purchases."""

    def __init__(self, api_key: Optional[str] = None, currency: Optional[str] = None):
        self.api_key = api_key if api_key is not None else settings.stripe_secret_key
        self.currency = currency or settings.payment_currency

    @staticmethod
    def to_minor_units(price: float) -> int:
        """Convert a dollar price to cents, truncating fractions of a cent."""
        return int(price * 100)

    async def create_payment_intent(self, price: float) -> str:
        """
        Create a payment intent for `price` dollars.

        Args:
            price: Amount in dollars

        Returns:
            Client secret of the created intent

        Raises:
            UpstreamServiceError: If Stripe is not configured or rejects the request
        """
        if not self.api_key:
            logger.error("STRIPE_SECRET_KEY not set; cannot create payment intent")
            raise UpstreamServiceError("Payment processor", "not configured")

        amount = self.to_minor_units(price)

        try:
            intent = await run_in_threadpool(
                stripe.PaymentIntent.create,
                api_key=self.api_key,
                amount=amount,
                currency=self.currency,
                payment_method_types=["card"],
            )
        except stripe.StripeError as e:
            logger.error(f"Stripe payment intent creation failed: {e}")
            raise UpstreamServiceError("Payment processor", e.user_message or str(e))

        logger.info(f"Created payment intent {intent.id} for {amount} {self.currency}")
        return intent.client_secret


def get_payment_service() -> PaymentService:
    return PaymentService()
