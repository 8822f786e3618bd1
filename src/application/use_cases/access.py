"""Caller checks shared by the use cases."""

from src.core.entities.tenancy import CurrentUserContext
from src.core.exceptions import (
    AgencyAccessDeniedError,
    AuthorizationError,
    NotAuthenticatedError,
)


def require_viewer(viewer: CurrentUserContext | None) -> CurrentUserContext:
    """The signed-in caller, or NotAuthenticatedError."""
    if viewer is None:
        raise NotAuthenticatedError()
    return viewer


def require_staff(viewer: CurrentUserContext | None) -> CurrentUserContext:
    """A signed-in caller that is not a customer."""
    viewer = require_viewer(viewer)
    if viewer.is_customer:
        raise AuthorizationError(
            "Customers cannot perform this operation",
            user_id=viewer.user_id,
        )
    return viewer


def require_same_company(viewer: CurrentUserContext, company_id: str | None) -> None:
    if company_id != viewer.company_id:
        raise AuthorizationError(
            "Resource belongs to another company",
            user_id=viewer.user_id,
            company_id=company_id,
        )


def require_agency_access(viewer: CurrentUserContext, agency_id: str | None) -> None:
    """Area managers may only touch their own agency's resources."""
    if viewer.is_area_manager and not viewer.can_manage_agency(agency_id):
        raise AgencyAccessDeniedError(viewer.user_id, viewer.agency_id, agency_id)
