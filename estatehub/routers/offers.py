"""
Offer endpoints covering the purchase lifecycle:
buyers make offers, agents accept or reject them, buyers pay for accepted ones.
"""

from fastapi import APIRouter, Depends, status, Query, Path
from typing import List, Optional
from uuid import UUID

from estatehub.services.offer import OfferService
from estatehub.schemas.base import MessageResponse
from estatehub.schemas.offer import (
    OfferCreate,
    OfferUpdate,
    OfferPurchase,
    OfferResponse,
    OfferAcceptResponse
)
from estatehub.schemas.error import get_crud_error_responses, get_error_responses
from estatehub.utils.auth import TokenClaims
from estatehub.utils.dependencies import (
    get_current_claims,
    get_current_agent,
    get_offer_service
)


router = APIRouter(tags=["Offers"])


def _to_response(offers) -> List[OfferResponse]:
    return [OfferResponse.model_validate(o.to_dict()) for o in offers]


@router.get(
    "/bought-properties",
    response_model=List[OfferResponse],
    summary="List a buyer's offers",
    description="Every offer made by a buyer, including bought ones.",
    responses=get_error_responses(400, 401, 403)
)
async def bought_properties(
    email: Optional[str] = Query(None, description="Buyer email"),
    claims: TokenClaims = Depends(get_current_claims),
    offer_service: OfferService = Depends(get_offer_service)
) -> List[OfferResponse]:
    return _to_response(await offer_service.list_bought(email))


@router.get(
    "/offers",
    response_model=List[OfferResponse],
    summary="List offers on an agent's properties",
    description="Pending, accepted and rejected offers for the given agent.",
    responses=get_error_responses(400, 401, 403)
)
async def agent_offers(
    agent_email: Optional[str] = Query(None, alias="agentEmail", description="Agent email"),
    claims: TokenClaims = Depends(get_current_claims),
    offer_service: OfferService = Depends(get_offer_service)
) -> List[OfferResponse]:
    return _to_response(await offer_service.list_for_agent(agent_email))


@router.get(
    "/agent-sold-properties/{agent_email}",
    response_model=List[OfferResponse],
    summary="List an agent's sold properties",
    responses=get_error_responses(401, 403)
)
async def agent_sold_properties(
    agent_email: str = Path(..., description="Agent email"),
    agent: TokenClaims = Depends(get_current_agent),
    offer_service: OfferService = Depends(get_offer_service)
) -> List[OfferResponse]:
    return _to_response(await offer_service.list_sold(agent_email))


@router.get(
    "/offers/{offer_id}",
    response_model=OfferResponse,
    summary="Get offer by ID",
    responses=get_crud_error_responses()
)
async def get_offer(
    offer_id: UUID = Path(..., description="Offer ID"),
    claims: TokenClaims = Depends(get_current_claims),
    offer_service: OfferService = Depends(get_offer_service)
) -> OfferResponse:
    offer = await offer_service.get_offer(offer_id)
    return OfferResponse.model_validate(offer.to_dict())


@router.post(
    "/offers",
    response_model=OfferResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Make offer",
    responses=get_error_responses(400, 401, 403)
)
async def create_offer(
    offer_data: OfferCreate,
    claims: TokenClaims = Depends(get_current_claims),
    offer_service: OfferService = Depends(get_offer_service)
) -> OfferResponse:
    offer = await offer_service.create_offer(offer_data)
    return OfferResponse.model_validate(offer.to_dict())


@router.put(
    "/offers/{offer_id}",
    response_model=OfferResponse,
    summary="Update offer",
    description="Overwrite every editable field of an offer. Property and status are unchanged.",
    responses=get_crud_error_responses()
)
async def update_offer(
    offer_data: OfferUpdate,
    offer_id: UUID = Path(..., description="Offer ID"),
    claims: TokenClaims = Depends(get_current_claims),
    offer_service: OfferService = Depends(get_offer_service)
) -> OfferResponse:
    offer = await offer_service.replace_offer(offer_id, offer_data)
    return OfferResponse.model_validate(offer.to_dict())


@router.patch(
    "/offers/accept/{offer_id}",
    response_model=OfferAcceptResponse,
    summary="Accept offer",
    description="Accept an offer and reject every other offer on the same property.",
    responses=get_error_responses(400, 401, 403, 404, 409)
)
async def accept_offer(
    offer_id: UUID = Path(..., description="Offer ID"),
    agent: TokenClaims = Depends(get_current_agent),
    offer_service: OfferService = Depends(get_offer_service)
) -> OfferAcceptResponse:
    offer, rejected_count = await offer_service.accept_offer(offer_id)
    return OfferAcceptResponse(
        message="Offer accepted and other offers rejected successfully",
        offer=OfferResponse.model_validate(offer.to_dict()),
        rejected_count=rejected_count
    )


@router.patch(
    "/offers/reject/{offer_id}",
    response_model=MessageResponse,
    summary="Reject offer",
    responses=get_error_responses(400, 401, 403, 404, 409)
)
async def reject_offer(
    offer_id: UUID = Path(..., description="Offer ID"),
    agent: TokenClaims = Depends(get_current_agent),
    offer_service: OfferService = Depends(get_offer_service)
) -> MessageResponse:
    await offer_service.reject_offer(offer_id)
    return MessageResponse(message="Offer rejected successfully")


@router.patch(
    "/offers/{offer_id}",
    response_model=OfferResponse,
    summary="Mark offer bought",
    description="Record the payment transaction of an accepted offer.",
    responses=get_error_responses(400, 401, 403, 404, 409)
)
async def mark_offer_bought(
    purchase: OfferPurchase,
    offer_id: UUID = Path(..., description="Offer ID"),
    claims: TokenClaims = Depends(get_current_claims),
    offer_service: OfferService = Depends(get_offer_service)
) -> OfferResponse:
    offer = await offer_service.mark_bought(offer_id, purchase.transaction_id)
    return OfferResponse.model_validate(offer.to_dict())
