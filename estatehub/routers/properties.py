"""
Property listing endpoints: CRUD, verification and advertising.
"""

from fastapi import APIRouter, Depends, status, Query, Path
from typing import List, Optional
from uuid import UUID

from estatehub.models.property import PropertyStatus
from estatehub.services.property import PropertyService
from estatehub.schemas.base import MessageResponse
from estatehub.schemas.property import PropertyCreate, PropertyResponse
from estatehub.schemas.error import get_auth_error_responses, get_crud_error_responses, get_error_responses
from estatehub.utils.auth import TokenClaims
from estatehub.utils.dependencies import (
    get_current_claims,
    get_current_admin,
    get_property_service
)


router = APIRouter(tags=["Properties"])


def _to_response(properties) -> List[PropertyResponse]:
    return [PropertyResponse.model_validate(p.to_dict()) for p in properties]


@router.get(
    "/properties",
    response_model=List[PropertyResponse],
    summary="List all properties",
    description="Every listing regardless of status, for the admin review page.",
    responses=get_auth_error_responses()
)
async def list_properties(
    claims: TokenClaims = Depends(get_current_claims),
    property_service: PropertyService = Depends(get_property_service)
) -> List[PropertyResponse]:
    return _to_response(await property_service.list_properties())


# Declared before /properties/{property_id} so "verified" is not parsed as an id
@router.get(
    "/properties/verified",
    response_model=List[PropertyResponse],
    summary="List verified properties",
    description="Verified listings ordered by ascending minimum price."
)
async def list_verified_properties(
    property_service: PropertyService = Depends(get_property_service)
) -> List[PropertyResponse]:
    return _to_response(await property_service.list_verified())


@router.get(
    "/my-properties",
    response_model=List[PropertyResponse],
    summary="List an agent's properties",
    responses=get_error_responses(400, 401, 403)
)
async def list_my_properties(
    email: Optional[str] = Query(None, description="Agent email"),
    claims: TokenClaims = Depends(get_current_claims),
    property_service: PropertyService = Depends(get_property_service)
) -> List[PropertyResponse]:
    return _to_response(await property_service.list_agent_properties(email))


@router.get(
    "/advertised",
    response_model=List[PropertyResponse],
    summary="List advertised properties"
)
async def list_advertised_properties(
    property_service: PropertyService = Depends(get_property_service)
) -> List[PropertyResponse]:
    return _to_response(await property_service.list_advertised())


@router.get(
    "/properties/{property_id}",
    response_model=PropertyResponse,
    summary="Get property by ID",
    responses=get_error_responses(400, 404)
)
async def get_property(
    property_id: UUID = Path(..., description="Property ID"),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    property_obj = await property_service.get_property(property_id)
    return PropertyResponse.model_validate(property_obj.to_dict())


@router.post(
    "/properties",
    response_model=PropertyResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create property",
    description="Create a listing. New listings are pending until an admin verifies them.",
    responses=get_error_responses(400, 401, 403)
)
async def create_property(
    property_data: PropertyCreate,
    claims: TokenClaims = Depends(get_current_claims),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    property_obj = await property_service.create_property(property_data)
    return PropertyResponse.model_validate(property_obj.to_dict())


@router.put(
    "/properties/{property_id}",
    response_model=MessageResponse,
    summary="Update property",
    description="Overwrite every editable field of a listing.",
    responses=get_crud_error_responses()
)
async def update_property(
    property_data: PropertyCreate,
    property_id: UUID = Path(..., description="Property ID"),
    claims: TokenClaims = Depends(get_current_claims),
    property_service: PropertyService = Depends(get_property_service)
) -> MessageResponse:
    await property_service.replace_property(property_id, property_data)
    return MessageResponse(message="Property updated successfully")


@router.delete(
    "/properties/{property_id}",
    response_model=MessageResponse,
    summary="Delete property",
    responses=get_crud_error_responses()
)
async def delete_property(
    property_id: UUID = Path(..., description="Property ID"),
    claims: TokenClaims = Depends(get_current_claims),
    property_service: PropertyService = Depends(get_property_service)
) -> MessageResponse:
    await property_service.delete_property(property_id)
    return MessageResponse(message="Property deleted successfully")


@router.patch(
    "/properties/verify/{property_id}",
    response_model=PropertyResponse,
    summary="Verify property",
    responses=get_crud_error_responses()
)
async def verify_property(
    property_id: UUID = Path(..., description="Property ID"),
    admin: TokenClaims = Depends(get_current_admin),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    property_obj = await property_service.set_status(property_id, PropertyStatus.VERIFIED)
    return PropertyResponse.model_validate(property_obj.to_dict())


@router.patch(
    "/properties/reject/{property_id}",
    response_model=PropertyResponse,
    summary="Reject property",
    responses=get_crud_error_responses()
)
async def reject_property(
    property_id: UUID = Path(..., description="Property ID"),
    admin: TokenClaims = Depends(get_current_admin),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    property_obj = await property_service.set_status(property_id, PropertyStatus.REJECTED)
    return PropertyResponse.model_validate(property_obj.to_dict())


@router.patch(
    "/properties/advertise/{property_id}",
    response_model=PropertyResponse,
    summary="Advertise property",
    description="Feature a listing on the home page.",
    responses=get_crud_error_responses()
)
async def advertise_property(
    property_id: UUID = Path(..., description="Property ID"),
    admin: TokenClaims = Depends(get_current_admin),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    property_obj = await property_service.advertise(property_id)
    return PropertyResponse.model_validate(property_obj.to_dict())
