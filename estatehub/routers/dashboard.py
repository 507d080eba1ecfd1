"""
Admin dashboard endpoint.
"""

from fastapi import APIRouter, Depends

from estatehub.services.dashboard import DashboardService
from estatehub.schemas.dashboard import DashboardSummary
from estatehub.schemas.error import get_error_responses
from estatehub.utils.auth import TokenClaims
from estatehub.utils.dependencies import get_current_admin, get_dashboard_service


router = APIRouter(tags=["Dashboard"])


@router.get(
    "/admin-dashboard-summary",
    response_model=DashboardSummary,
    summary="Admin dashboard summary",
    description="Live user, property and review counts.",
    responses=get_error_responses(401, 403, 500)
)
async def admin_dashboard_summary(
    admin: TokenClaims = Depends(get_current_admin),
    dashboard_service: DashboardService = Depends(get_dashboard_service)
) -> DashboardSummary:
    return await dashboard_service.get_summary()
