"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.
"""

from pydantic import BaseModel, Field, model_validator

from src.core.entities.order import OrderStatus
from src.core.entities.stock import LocationType
from src.core.entities.tenancy import ALL_AGENCIES, UserRole


class AddCartItemRequest(BaseModel):
    """Add one unit of a product to the caller's cart."""

    product_id: str = Field(..., min_length=1, description="Product to add")


class SetCartQuantityRequest(BaseModel):
    """Set a cart line's quantity. Zero or less removes the line."""

    quantity: int = Field(..., description="New quantity", examples=[3, 0])


class PlaceOrderRequest(BaseModel):
    """Turn the caller's cart into an order.

    Customers always order for themselves; staff ordering on behalf of a
    customer name them here.
    """

    customer_id: str | None = Field(
        default=None,
        description="Customer the order is placed for (staff only)",
    )


class ListOrdersRequest(BaseModel):
    """Order list filters."""

    status: OrderStatus | None = None
    search: str | None = Field(
        default=None,
        description="Order reference or customer name fragment",
    )
    year: int | None = Field(default=None, ge=2000, le=2100)
    month: int | None = Field(default=None, ge=1, le=12)
    agency_id: str = Field(
        default=ALL_AGENCIES,
        description="Agency filter for admins; area managers are pinned to their own",
    )


class UpdateOrderStatusRequest(BaseModel):
    """Advance an order one step and optionally assign its sales rep."""

    status: OrderStatus
    sales_id: str | None = None


class SaveStockRequest(BaseModel):
    """Create (no id) or update a stock row."""

    id: str | None = None
    product_id: str = Field(..., min_length=1)
    agencies_id: str | None = None
    location_type: LocationType = LocationType.WAREHOUSE
    location_id: str = Field(..., min_length=1, description="Warehouse or agent id")
    quantity: float = Field(..., ge=0)
    alert_threshold: float | None = Field(default=None, ge=0)


class SaveProductRequest(BaseModel):
    """Create or edit a catalogue product."""

    name: str = Field(..., min_length=1)
    sub_name: str | None = None
    description: str | None = None
    price_ht: float = Field(..., ge=0, description="Unit price excluding tax")
    tva: float | None = Field(default=None, ge=0, description="Tax rate; empty uses the default")
    barcode: str | None = None
    is_active: bool = True
    image_urls: list[str] = Field(default_factory=list)


class CreateTeamMemberRequest(BaseModel):
    """Provision a staff member or customer account."""

    email: str = Field(..., description="Sign-in e-mail")
    password: str
    confirm_password: str | None = None
    first_name: str
    last_name: str
    company_id: str
    role: UserRole = UserRole.SALES
    agencies_id: str | None = None
    phone: str | None = None

    # Customer tax profile
    non_assujetti_tva: bool = False
    tva: float | None = Field(default=None, ge=0)

    @model_validator(mode="before")
    @classmethod
    def strip_strings(cls, data: object) -> object:
        if isinstance(data, dict):
            return {
                k: v.strip() if isinstance(v, str) and k not in ("password", "confirm_password") else v
                for k, v in data.items()
            }
        return data
