"""Tests for CreateTeamMemberUseCase."""

from unittest.mock import AsyncMock

import pytest

from src.application.dto.requests import CreateTeamMemberRequest
from src.application.use_cases.create_team_member import CreateTeamMemberUseCase
from src.core.entities.tenancy import UserRole
from src.core.exceptions import (
    AgencyAccessDeniedError,
    AuthorizationError,
    DuplicateUserError,
    NotAuthenticatedError,
    ValidationError,
)
from src.core.interfaces.user_provisioner import ProvisionedUser


def _request(**overrides) -> CreateTeamMemberRequest:
    data = {
        "email": " new.rep@example.com ",
        "password": "secret123",
        "confirm_password": "secret123",
        "first_name": "Nina",
        "last_name": "Roux",
        "company_id": "company-1",
        "role": "sales",
        "agencies_id": "A1",
    }
    data.update(overrides)
    return CreateTeamMemberRequest(**data)


@pytest.fixture
def mock_provisioner():
    provisioner = AsyncMock()
    provisioner.create_user.return_value = ProvisionedUser(user_id="new-user", message="User created")
    return provisioner


@pytest.fixture
def mock_directory_store():
    return AsyncMock()


@pytest.fixture
def use_case(mock_provisioner, mock_directory_store):
    return CreateTeamMemberUseCase(provisioner=mock_provisioner, directory_store=mock_directory_store)


class TestCreateTeamMemberUseCase:
    async def test_admin_creates_member(
        self, use_case, mock_provisioner, mock_directory_store, make_viewer
    ):
        result = await use_case.execute(make_viewer(UserRole.ADMIN), _request())

        assert result.user_id == "new-user"
        payload = mock_provisioner.create_user.call_args[0][0]
        assert payload["email"] == "new.rep@example.com"
        assert payload["role"] == "sales"
        assert "confirm_password" not in payload

        saved = mock_directory_store.save_user.call_args[0][0]
        assert saved.id == "new-user"
        assert saved.agencies_id == "A1"
        assert saved.role == UserRole.SALES

        response = use_case.to_response(result)
        assert response.success is True
        assert response.user_id == "new-user"

    async def test_missing_required_field(self, use_case, mock_provisioner, make_viewer):
        with pytest.raises(ValidationError) as exc_info:
            await use_case.execute(make_viewer(UserRole.ADMIN), _request(first_name="  "))
        assert exc_info.value.details["field"] == "first_name"
        mock_provisioner.create_user.assert_not_called()

    async def test_short_password(self, use_case, make_viewer):
        with pytest.raises(ValidationError) as exc_info:
            await use_case.execute(
                make_viewer(UserRole.ADMIN), _request(password="abc", confirm_password="abc")
            )
        assert exc_info.value.details["field"] == "password"

    async def test_password_mismatch(self, use_case, make_viewer):
        with pytest.raises(ValidationError) as exc_info:
            await use_case.execute(make_viewer(UserRole.ADMIN), _request(confirm_password="other123"))
        assert exc_info.value.details["field"] == "confirm_password"

    async def test_invalid_email(self, use_case, make_viewer):
        with pytest.raises(ValidationError):
            await use_case.execute(make_viewer(UserRole.ADMIN), _request(email="not-an-email"))

    async def test_duplicate_email_propagates(
        self, use_case, mock_provisioner, mock_directory_store, make_viewer
    ):
        mock_provisioner.create_user.side_effect = DuplicateUserError("new.rep@example.com")
        with pytest.raises(DuplicateUserError):
            await use_case.execute(make_viewer(UserRole.ADMIN), _request())
        mock_directory_store.save_user.assert_not_called()

    async def test_sales_cannot_add_members(self, use_case, make_viewer):
        with pytest.raises(AuthorizationError):
            await use_case.execute(make_viewer(UserRole.SALES, agency_id="A1"), _request())

    async def test_only_admins_create_admins(self, use_case, make_viewer):
        viewer = make_viewer(UserRole.AREA_MANAGER, agency_id="A1")
        with pytest.raises(AuthorizationError):
            await use_case.execute(viewer, _request(role="admin"))

    async def test_other_company_denied(self, use_case, make_viewer):
        with pytest.raises(AuthorizationError):
            await use_case.execute(make_viewer(UserRole.ADMIN), _request(company_id="other"))

    async def test_area_manager_own_agency_default(
        self, use_case, mock_provisioner, make_viewer
    ):
        viewer = make_viewer(UserRole.AREA_MANAGER, agency_id="A1")
        await use_case.execute(viewer, _request(agencies_id=None, role="customer"))
        assert mock_provisioner.create_user.call_args[0][0]["agencies_id"] == "A1"

    async def test_area_manager_other_agency_denied(self, use_case, mock_provisioner, make_viewer):
        viewer = make_viewer(UserRole.AREA_MANAGER, agency_id="A1")
        with pytest.raises(AgencyAccessDeniedError):
            await use_case.execute(viewer, _request(agencies_id="A2"))
        mock_provisioner.create_user.assert_not_called()

    async def test_signed_out(self, use_case):
        with pytest.raises(NotAuthenticatedError):
            await use_case.execute(None, _request())
