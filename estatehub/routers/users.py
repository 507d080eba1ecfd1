"""
User account endpoints: registration, lookups and admin account management.
"""

from fastapi import APIRouter, Depends, status, Path
from typing import List
from uuid import UUID

from estatehub.models.user import UserRole
from estatehub.services.user import UserService
from estatehub.services.identity import IdentityService, get_identity_service
from estatehub.schemas.base import MessageResponse
from estatehub.schemas.user import UserCreate, UserResponse
from estatehub.schemas.error import get_auth_error_responses, get_crud_error_responses, get_error_responses
from estatehub.utils.auth import TokenClaims
from estatehub.utils.dependencies import (
    get_current_claims,
    get_current_admin,
    get_user_service
)


router = APIRouter(tags=["Users"])


@router.get(
    "/users",
    response_model=List[UserResponse],
    summary="List users",
    responses=get_auth_error_responses()
)
async def list_users(
    claims: TokenClaims = Depends(get_current_claims),
    user_service: UserService = Depends(get_user_service)
) -> List[UserResponse]:
    users = await user_service.list_users()
    return [UserResponse.model_validate(user.to_dict()) for user in users]


@router.get(
    "/users/{email}",
    response_model=UserResponse,
    summary="Get user by email",
    responses=get_error_responses(401, 403, 404)
)
async def get_user(
    email: str = Path(..., description="User email"),
    claims: TokenClaims = Depends(get_current_claims),
    user_service: UserService = Depends(get_user_service)
) -> UserResponse:
    user = await user_service.get_user_by_email(email)
    return UserResponse.model_validate(user.to_dict())


@router.post(
    "/users",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register user",
    description="Register a user after sign up. Fails with 400 if the email is already registered.",
    responses=get_error_responses(400, 403)
)
async def register_user(
    user_data: UserCreate,
    user_service: UserService = Depends(get_user_service)
) -> UserResponse:
    user = await user_service.register_user(user_data)
    return UserResponse.model_validate(user.to_dict())


@router.patch(
    "/users/admin/{user_id}",
    response_model=MessageResponse,
    summary="Promote user to admin",
    responses=get_crud_error_responses()
)
async def make_admin(
    user_id: UUID = Path(..., description="User ID"),
    admin: TokenClaims = Depends(get_current_admin),
    user_service: UserService = Depends(get_user_service)
) -> MessageResponse:
    await user_service.change_role(user_id, UserRole.ADMIN)
    return MessageResponse(message="User promoted to admin")


@router.patch(
    "/users/agent/{user_id}",
    response_model=MessageResponse,
    summary="Promote user to agent",
    responses=get_crud_error_responses()
)
async def make_agent(
    user_id: UUID = Path(..., description="User ID"),
    admin: TokenClaims = Depends(get_current_admin),
    user_service: UserService = Depends(get_user_service)
) -> MessageResponse:
    await user_service.change_role(user_id, UserRole.AGENT)
    return MessageResponse(message="User promoted to agent")


@router.patch(
    "/users/fraud/{user_id}",
    response_model=MessageResponse,
    summary="Mark user as fraud",
    responses=get_crud_error_responses()
)
async def mark_fraud(
    user_id: UUID = Path(..., description="User ID"),
    admin: TokenClaims = Depends(get_current_admin),
    user_service: UserService = Depends(get_user_service)
) -> MessageResponse:
    await user_service.mark_fraud(user_id)
    return MessageResponse(message="User marked as fraud")


@router.delete(
    "/users/{user_id}",
    response_model=MessageResponse,
    summary="Delete user",
    description="Delete the user from the identity provider (best effort), then from the database.",
    responses=get_crud_error_responses()
)
async def delete_user(
    user_id: UUID = Path(..., description="User ID"),
    admin: TokenClaims = Depends(get_current_admin),
    user_service: UserService = Depends(get_user_service),
    identity: IdentityService = Depends(get_identity_service)
) -> MessageResponse:
    await user_service.delete_user(user_id, identity)
    return MessageResponse(message="User deleted")


@router.get(
    "/top-agents",
    response_model=List[UserResponse],
    summary="Featured agents",
    description="Up to six agents for the home page."
)
async def top_agents(
    user_service: UserService = Depends(get_user_service)
) -> List[UserResponse]:
    agents = await user_service.get_top_agents()
    return [UserResponse.model_validate(agent.to_dict()) for agent in agents]
