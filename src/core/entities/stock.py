"""Stock domain entities."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class LocationType(str, Enum):
    """Where a stock row is held."""

    WAREHOUSE = "WAREHOUSE"
    TRUCK = "TRUCK"  # field agent


class Stock(BaseModel):
    """Quantity of one product at one location.

    A product usually has several rows, one per location. ``alert_threshold``
    is optional; ``None`` means the row does not configure an alert.
    """

    id: str | None = None
    company_id: str
    product_id: str
    agencies_id: str | None = None
    location_type: LocationType = LocationType.WAREHOUSE
    location_id: str | None = None
    quantity: float = Field(default=0.0, ge=0)
    alert_threshold: float | None = Field(default=None, ge=0)
    updated_at: datetime | None = None


class StockLocation(BaseModel):
    """One location's share of a product's stock, as shown in an alert."""

    stock_id: str | None
    quantity: float
    agency_name: str
    location_name: str


class AlertProduct(BaseModel):
    """A product whose total stock is at or below its alert threshold."""

    product_id: str
    product_name: str
    total_stock: float
    alert_threshold: float
    stock_locations: list[StockLocation] = Field(default_factory=list)
