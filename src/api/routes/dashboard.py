"""Dashboard endpoint."""

from fastapi import APIRouter, Depends

from src.api.dependencies import get_current_user, get_dashboard_use_case
from src.application.dto.responses import DashboardResponse
from src.application.use_cases.dashboard import DashboardUseCase
from src.core.entities.tenancy import ALL_AGENCIES, CurrentUserContext

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    agency_id: str = ALL_AGENCIES,
    viewer: CurrentUserContext | None = Depends(get_current_user),
    use_case: DashboardUseCase = Depends(get_dashboard_use_case),
) -> DashboardResponse:
    """Order stats, stock alerts, best sellers and monthly evolution."""
    result = await use_case.execute(viewer, agency_id)
    return use_case.to_response(result)
