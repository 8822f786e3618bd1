"""Response DTOs for API endpoints.

Pydantic v2 models for API responses.
"""

from datetime import datetime

from pydantic import BaseModel, Field

# Cart


class CartLineResponse(BaseModel):
    """One cart line priced at the product's own tax rate."""

    product_id: str
    name: str
    quantity: int
    unit_price_ht: float
    tax_rate: float
    unit_price_ttc: float
    total_ht: float
    total_ttc: float
    image_url: str | None = None


class CartResponse(BaseModel):
    """The caller's cart with grand totals."""

    lines: list[CartLineResponse] = Field(default_factory=list)
    item_count: int = 0
    total_ht: float = 0.0
    total_ttc: float = 0.0


# Orders


class OrderLineResponse(BaseModel):
    """Frozen order line snapshot."""

    id: str | None
    product_id: str
    product_name: str | None = None
    quantity: int
    price_ht: float
    tva: float
    total_ht: float
    total_ttc: float


class OrderResponse(BaseModel):
    """Order header with totals computed from its lines."""

    id: str
    reference: str
    company_id: str
    customer_id: str
    customer_name: str | None = None
    sales_id: str | None = None
    created_by: str
    status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    total_ht: float
    total_ttc: float
    total_tva: float
    lines: list[OrderLineResponse] = Field(default_factory=list)


class OrderListResponse(BaseModel):
    orders: list[OrderResponse] = Field(default_factory=list)
    total: int = 0


class OrderStatsResponse(BaseModel):
    """Order counts per status."""

    in_preparation: int = 0
    taken: int = 0
    in_delivery: int = 0
    delivered: int = 0
    total: int = 0


# Stock


class StockResponse(BaseModel):
    """A stored stock row as written."""

    id: str
    company_id: str
    product_id: str
    agencies_id: str | None = None
    location_type: str
    location_id: str | None = None
    quantity: float
    alert_threshold: float | None = None
    updated_at: datetime | None = None


class ProductResponse(BaseModel):
    """A catalogue product with its tax-inclusive unit price."""

    id: str
    company_id: str
    name: str
    display_name: str
    sub_name: str | None = None
    description: str | None = None
    price_ht: float
    tax_rate: float
    price_ttc: float
    barcode: str | None = None
    is_active: bool
    image_urls: list[str] = Field(default_factory=list)


class ProductListResponse(BaseModel):
    products: list[ProductResponse] = Field(default_factory=list)
    total: int = 0


class StockRowResponse(BaseModel):
    """A stock row with its product's total and alert flag."""

    id: str | None
    product_id: str
    product_name: str
    agencies_id: str | None = None
    agency_name: str
    location_type: str
    location_id: str | None = None
    location_name: str
    quantity: float
    alert_threshold: float | None = None
    total_stock: float
    is_alert: bool
    updated_at: datetime | None = None


class StockListResponse(BaseModel):
    stocks: list[StockRowResponse] = Field(default_factory=list)
    total: int = 0
    alert_count: int = 0


class StockLocationResponse(BaseModel):
    stock_id: str | None
    quantity: float
    agency_name: str
    location_name: str


class AlertProductResponse(BaseModel):
    """A product at or below its alert threshold."""

    product_id: str
    product_name: str
    total_stock: float
    alert_threshold: float
    stock_locations: list[StockLocationResponse] = Field(default_factory=list)


class AlertListResponse(BaseModel):
    agency_id: str
    alerts: list[AlertProductResponse] = Field(default_factory=list)
    total: int = 0


# Dashboard


class ProductSalesResponse(BaseModel):
    product_id: str
    name: str
    quantity: int
    image_url: str | None = None


class AgencySalesResponse(BaseModel):
    agency_id: str
    name: str
    delivered_orders: int


class MonthlyCountResponse(BaseModel):
    month: str
    count: int


class DashboardResponse(BaseModel):
    """Everything the dashboard view renders."""

    agency_id: str
    stats: OrderStatsResponse
    alerts: list[AlertProductResponse] = Field(default_factory=list)
    alert_count: int = 0
    top_products: list[ProductSalesResponse] = Field(default_factory=list)
    top_agencies: list[AgencySalesResponse] = Field(default_factory=list)
    orders_per_month: list[MonthlyCountResponse] = Field(default_factory=list)


# Team


class TeamMemberResponse(BaseModel):
    """Provisioning outcome."""

    success: bool = True
    user_id: str
    message: str


# Health / errors


class ProviderHealthResponse(BaseModel):
    """Health status of a backing service."""

    name: str
    available: bool
    latency_ms: float | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: ProviderHealthResponse | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. ORDER_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)
