"""
Wishlist endpoints.
"""

from fastapi import APIRouter, Depends, status, Query, Path
from typing import List, Optional
from uuid import UUID

from estatehub.services.wishlist import WishlistService
from estatehub.schemas.base import MessageResponse
from estatehub.schemas.wishlist import WishlistCreate, WishlistResponse
from estatehub.schemas.error import get_crud_error_responses, get_error_responses
from estatehub.utils.auth import TokenClaims
from estatehub.utils.dependencies import get_current_claims, get_wishlist_service


router = APIRouter(prefix="/wishlist", tags=["Wishlist"])


@router.get(
    "",
    response_model=List[WishlistResponse],
    summary="List a user's wishlist",
    responses=get_error_responses(400, 401, 403)
)
async def list_wishlist(
    email: Optional[str] = Query(None, description="User email"),
    claims: TokenClaims = Depends(get_current_claims),
    wishlist_service: WishlistService = Depends(get_wishlist_service)
) -> List[WishlistResponse]:
    items = await wishlist_service.list_for_user(email)
    return [WishlistResponse.model_validate(item.to_dict()) for item in items]


@router.get(
    "/{item_id}",
    response_model=WishlistResponse,
    summary="Get wishlist entry",
    responses=get_crud_error_responses()
)
async def get_wishlist_item(
    item_id: UUID = Path(..., description="Wishlist entry ID"),
    claims: TokenClaims = Depends(get_current_claims),
    wishlist_service: WishlistService = Depends(get_wishlist_service)
) -> WishlistResponse:
    item = await wishlist_service.get_item(item_id)
    return WishlistResponse.model_validate(item.to_dict())


@router.post(
    "",
    response_model=WishlistResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add to wishlist",
    responses=get_error_responses(400, 401, 403)
)
async def add_to_wishlist(
    item_data: WishlistCreate,
    claims: TokenClaims = Depends(get_current_claims),
    wishlist_service: WishlistService = Depends(get_wishlist_service)
) -> WishlistResponse:
    item = await wishlist_service.add_item(item_data)
    return WishlistResponse.model_validate(item.to_dict())


@router.delete(
    "/{item_id}",
    response_model=MessageResponse,
    summary="Remove from wishlist",
    responses=get_crud_error_responses()
)
async def remove_from_wishlist(
    item_id: UUID = Path(..., description="Wishlist entry ID"),
    claims: TokenClaims = Depends(get_current_claims),
    wishlist_service: WishlistService = Depends(get_wishlist_service)
) -> MessageResponse:
    await wishlist_service.remove_item(item_id)
    return MessageResponse(message="Wishlist item removed")
