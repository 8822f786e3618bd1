"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.

These are the ONLY contracts between API handlers and use cases.
"""

from src.application.dto.requests import (
    AddCartItemRequest,
    CreateTeamMemberRequest,
    ListOrdersRequest,
    PlaceOrderRequest,
    SaveProductRequest,
    SaveStockRequest,
    SetCartQuantityRequest,
    UpdateOrderStatusRequest,
)
from src.application.dto.responses import (
    AgencySalesResponse,
    AlertListResponse,
    AlertProductResponse,
    CartLineResponse,
    CartResponse,
    DashboardResponse,
    ErrorResponse,
    HealthResponse,
    MonthlyCountResponse,
    OrderLineResponse,
    OrderListResponse,
    OrderResponse,
    OrderStatsResponse,
    ProductListResponse,
    ProductResponse,
    ProductSalesResponse,
    ProviderHealthResponse,
    StockListResponse,
    StockLocationResponse,
    StockResponse,
    StockRowResponse,
    TeamMemberResponse,
)

__all__ = [
    # Requests
    "AddCartItemRequest",
    "SetCartQuantityRequest",
    "PlaceOrderRequest",
    "ListOrdersRequest",
    "UpdateOrderStatusRequest",
    "SaveStockRequest",
    "SaveProductRequest",
    "CreateTeamMemberRequest",
    # Responses
    "CartLineResponse",
    "CartResponse",
    "OrderLineResponse",
    "OrderResponse",
    "OrderListResponse",
    "OrderStatsResponse",
    "StockRowResponse",
    "StockListResponse",
    "StockLocationResponse",
    "StockResponse",
    "AlertProductResponse",
    "AlertListResponse",
    "ProductResponse",
    "ProductListResponse",
    "ProductSalesResponse",
    "AgencySalesResponse",
    "MonthlyCountResponse",
    "DashboardResponse",
    "TeamMemberResponse",
    "ProviderHealthResponse",
    "HealthResponse",
    "ErrorResponse",
]
