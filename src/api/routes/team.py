"""Team member provisioning endpoint."""

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_create_team_member_use_case, get_current_user
from src.application.dto.requests import CreateTeamMemberRequest
from src.application.dto.responses import ErrorResponse, TeamMemberResponse
from src.application.use_cases.create_team_member import CreateTeamMemberUseCase
from src.core.entities.tenancy import CurrentUserContext

router = APIRouter(prefix="/api/team", tags=["team"])


@router.post(
    "",
    response_model=TeamMemberResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
async def create_team_member(
    request: CreateTeamMemberRequest,
    viewer: CurrentUserContext | None = Depends(get_current_user),
    use_case: CreateTeamMemberUseCase = Depends(get_create_team_member_use_case),
) -> TeamMemberResponse:
    """Create a sign-in account and its profile."""
    result = await use_case.execute(viewer, request)
    return use_case.to_response(result)
