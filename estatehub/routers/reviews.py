"""
Review endpoints.
"""

from fastapi import APIRouter, Depends, status, Query, Path
from typing import List, Optional
from uuid import UUID

from estatehub.services.review import ReviewService
from estatehub.schemas.base import MessageResponse
from estatehub.schemas.review import ReviewCreate, ReviewResponse
from estatehub.schemas.error import get_auth_error_responses, get_crud_error_responses, get_error_responses
from estatehub.utils.auth import TokenClaims
from estatehub.utils.dependencies import get_current_claims, get_review_service


router = APIRouter(tags=["Reviews"])


def _to_response(reviews) -> List[ReviewResponse]:
    return [ReviewResponse.model_validate(r.to_dict()) for r in reviews]


@router.get(
    "/reviews",
    response_model=List[ReviewResponse],
    summary="List all reviews",
    responses=get_auth_error_responses()
)
async def list_reviews(
    claims: TokenClaims = Depends(get_current_claims),
    review_service: ReviewService = Depends(get_review_service)
) -> List[ReviewResponse]:
    return _to_response(await review_service.list_reviews())


@router.get(
    "/latest-reviews",
    response_model=List[ReviewResponse],
    summary="Latest reviews",
    description="The three most recent reviews."
)
async def latest_reviews(
    review_service: ReviewService = Depends(get_review_service)
) -> List[ReviewResponse]:
    return _to_response(await review_service.latest_reviews())


@router.get(
    "/my-reviews",
    response_model=List[ReviewResponse],
    summary="List a reviewer's reviews",
    responses=get_error_responses(400, 401, 403)
)
async def my_reviews(
    email: Optional[str] = Query(None, description="Reviewer email"),
    claims: TokenClaims = Depends(get_current_claims),
    review_service: ReviewService = Depends(get_review_service)
) -> List[ReviewResponse]:
    return _to_response(await review_service.list_by_reviewer(email))


@router.get(
    "/reviews/{property_id}",
    response_model=List[ReviewResponse],
    summary="List a property's reviews",
    description="Reviews of one property, newest first.",
    responses=get_error_responses(400, 401, 403)
)
async def property_reviews(
    property_id: UUID = Path(..., description="Property ID"),
    claims: TokenClaims = Depends(get_current_claims),
    review_service: ReviewService = Depends(get_review_service)
) -> List[ReviewResponse]:
    return _to_response(await review_service.list_for_property(property_id))


@router.post(
    "/reviews",
    response_model=ReviewResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Post review",
    responses=get_error_responses(400, 401, 403)
)
async def create_review(
    review_data: ReviewCreate,
    claims: TokenClaims = Depends(get_current_claims),
    review_service: ReviewService = Depends(get_review_service)
) -> ReviewResponse:
    review = await review_service.create_review(review_data)
    return ReviewResponse.model_validate(review.to_dict())


@router.delete(
    "/reviews/{review_id}",
    response_model=MessageResponse,
    summary="Delete review",
    responses=get_crud_error_responses()
)
async def delete_review(
    review_id: UUID = Path(..., description="Review ID"),
    claims: TokenClaims = Depends(get_current_claims),
    review_service: ReviewService = Depends(get_review_service)
) -> MessageResponse:
    await review_service.delete_review(review_id)
    return MessageResponse(message="Review deleted")
