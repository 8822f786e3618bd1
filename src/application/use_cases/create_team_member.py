"""Create Team Member Use Case - provision an account and its profile."""

from src.application.dto.requests import CreateTeamMemberRequest
from src.application.dto.responses import TeamMemberResponse
from src.application.use_cases.access import (
    require_agency_access,
    require_same_company,
    require_staff,
)
from src.config import get_logger, get_settings
from src.core.entities.tenancy import CurrentUserContext, User, UserRole
from src.core.exceptions import AuthorizationError, ValidationError
from src.core.interfaces.directory_store import IDirectoryStore
from src.core.interfaces.user_provisioner import IUserProvisioner, ProvisionedUser

logger = get_logger(__name__)

REQUIRED_FIELDS = ("email", "password", "first_name", "last_name", "company_id")


class CreateTeamMemberUseCase:
    """
    Provision a team member through the external endpoint.

    Input is validated and the caller checked before the endpoint is called.
    Once the endpoint answers, the profile is mirrored into the local
    directory so it takes part in agency filters straight away.
    """

    def __init__(
        self,
        provisioner: IUserProvisioner | None = None,
        directory_store: IDirectoryStore | None = None,
    ):
        self._provisioner = provisioner
        self._directory_store = directory_store

    async def _get_provisioner(self) -> IUserProvisioner:
        if self._provisioner is None:
            from src.infrastructure.provisioning import get_user_provisioner

            self._provisioner = get_user_provisioner()
        return self._provisioner

    async def _get_directory_store(self) -> IDirectoryStore:
        if self._directory_store is None:
            from src.infrastructure.storage.sqlite import get_directory_store

            self._directory_store = await get_directory_store()
        return self._directory_store

    def _validate(self, request: CreateTeamMemberRequest) -> None:
        for name in REQUIRED_FIELDS:
            if not getattr(request, name):
                raise ValidationError(field=name, message="This field is required")

        min_length = get_settings().provisioning.min_password_length
        if len(request.password) < min_length:
            raise ValidationError(
                field="password",
                message=f"Password must be at least {min_length} characters",
            )
        if request.confirm_password is not None and request.confirm_password != request.password:
            raise ValidationError(field="confirm_password", message="Passwords do not match")
        if "@" not in request.email:
            raise ValidationError(field="email", message="Invalid e-mail address", value=request.email)

    async def execute(
        self,
        viewer: CurrentUserContext | None,
        request: CreateTeamMemberRequest,
    ) -> ProvisionedUser:
        viewer = require_staff(viewer)
        if not (viewer.is_admin or viewer.is_area_manager):
            raise AuthorizationError(
                "Only admins and area managers can add team members",
                user_id=viewer.user_id,
            )
        if request.role == UserRole.ADMIN and not viewer.is_admin:
            raise AuthorizationError("Only admins can create admins", user_id=viewer.user_id)
        self._validate(request)
        require_same_company(viewer, request.company_id)

        agency_id = request.agencies_id
        if viewer.is_area_manager:
            agency_id = agency_id or viewer.agency_id
            require_agency_access(viewer, agency_id)

        payload = request.model_dump(mode="json", exclude={"confirm_password"})
        payload["agencies_id"] = agency_id

        logger.info(
            "create_team_member_started",
            email=request.email,
            role=request.role.value,
            by=viewer.user_id,
        )
        provisioner = await self._get_provisioner()
        provisioned = await provisioner.create_user(payload)

        directory = await self._get_directory_store()
        await directory.save_user(
            User(
                id=provisioned.user_id,
                company_id=request.company_id,
                role=request.role,
                agencies_id=agency_id,
                first_name=request.first_name,
                last_name=request.last_name,
                email=request.email,
                phone=request.phone,
                non_assujetti_tva=request.non_assujetti_tva,
                tva=request.tva,
            )
        )

        logger.info("create_team_member_complete", user_id=provisioned.user_id)
        return provisioned

    def to_response(self, result: ProvisionedUser) -> TeamMemberResponse:
        """Convert result to API response."""
        return TeamMemberResponse(success=True, user_id=result.user_id, message=result.message)
