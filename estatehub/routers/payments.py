"""
Payment endpoint.
"""

from fastapi import APIRouter, Depends

from estatehub.services.payment import PaymentService, get_payment_service
from estatehub.schemas.offer import PaymentIntentRequest, PaymentIntentResponse
from estatehub.schemas.error import get_error_responses
from estatehub.utils.auth import TokenClaims
from estatehub.utils.dependencies import get_current_claims


router = APIRouter(tags=["Payments"])


@router.post(
    "/create-payment-intent",
    response_model=PaymentIntentResponse,
    summary="Create payment intent",
    description="Create a card payment intent for a price in dollars and return its client secret.",
    responses=get_error_responses(400, 401, 403, 502)
)
async def create_payment_intent(
    payment: PaymentIntentRequest,
    claims: TokenClaims = Depends(get_current_claims),
    payment_service: PaymentService = Depends(get_payment_service)
) -> PaymentIntentResponse:
    client_secret = await payment_service.create_payment_intent(payment.price)
    return PaymentIntentResponse(client_secret=client_secret)
