"""Tenant directory entities: companies, agencies, warehouses and users."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator

ALL_AGENCIES = "ALL"


class UserRole(str, Enum):
    """Roles a company member can hold."""

    ADMIN = "admin"
    AREA_MANAGER = "area manager"
    WAREHOUSE = "warehouse"
    SALES = "sales"
    DRIVER = "driver"
    CUSTOMER = "customer"


class Company(BaseModel):
    """Top-level tenant."""

    id: str | None = None
    name: str
    phone: str | None = None
    street: str | None = None
    postal_code: str | None = None
    city: str | None = None
    country: str | None = None
    is_active: bool = True


class Agency(BaseModel):
    """Regional sub-unit of a company."""

    id: str | None = None
    company_id: str
    name: str


class Warehouse(BaseModel):
    """Fixed stock location belonging to an agency."""

    id: str | None = None
    company_id: str
    agencies_id: str | None = None
    name: str


class User(BaseModel):
    """Staff member or customer profile."""

    id: str
    company_id: str
    role: UserRole = UserRole.SALES
    agencies_id: str | None = None
    first_name: str = ""
    last_name: str = ""
    email: str | None = None
    phone: str | None = None
    is_active: bool = True

    # Customer tax profile
    non_assujetti_tva: bool = False
    tva: float | None = Field(default=None, ge=0)

    created_at: datetime | None = None

    @field_validator("role", mode="before")
    @classmethod
    def normalize_role(cls, v: object) -> object:
        # Profiles written by the registration flow use upper-case roles
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class CurrentUserContext(BaseModel):
    """The signed-in caller, passed explicitly into every workflow."""

    user_id: str
    company_id: str
    role: UserRole
    agency_id: str | None = None

    @classmethod
    def from_user(cls, user: User) -> "CurrentUserContext":
        return cls(
            user_id=user.id,
            company_id=user.company_id,
            role=user.role,
            agency_id=user.agencies_id,
        )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def is_area_manager(self) -> bool:
        return self.role == UserRole.AREA_MANAGER

    @property
    def is_customer(self) -> bool:
        return self.role == UserRole.CUSTOMER

    def can_manage_agency(self, agency_id: str | None) -> bool:
        """Admins manage every agency; other staff only their own."""
        if self.is_admin:
            return True
        return self.agency_id is not None and self.agency_id == agency_id
