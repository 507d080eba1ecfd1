"""
Session token endpoint.
Clients exchange the identity they signed in with for an API token.
"""

from fastapi import APIRouter, Depends, status
from estatehub.services.auth import AuthService
from estatehub.schemas.auth import TokenRequest, TokenResponse
from estatehub.schemas.error import get_error_responses
from estatehub.utils.dependencies import get_auth_service


router = APIRouter(tags=["Authentication"])


@router.post(
    "/jwt",
    response_model=TokenResponse,
    status_code=status.HTTP_200_OK,
    summary="Issue session token",
    description="Issue a 30 day session token for an identity. Send it as `Authorization: Bearer <token>`.",
    responses=get_error_responses(400)
)
async def issue_token(
    token_request: TokenRequest,
    auth_service: AuthService = Depends(get_auth_service)
) -> TokenResponse:
    """
    Issue a session token.

    Args:
        token_request: Identity and optional role claim
        auth_service: Authentication service

    Returns:
        Signed token
    """
    return TokenResponse(token=auth_service.issue_token(token_request.email, token_request.role))
