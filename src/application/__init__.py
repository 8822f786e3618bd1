"""
Application layer - Use cases and DTOs.

This layer orchestrates business logic by:
1. Defining request/response DTOs for API contracts
2. Implementing use cases that coordinate core services and stores

Use cases are the only entry point for API handlers.
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
    AlertListResponse,
    CartResponse,
    DashboardResponse,
    ErrorResponse,
    HealthResponse,
    OrderListResponse,
    OrderResponse,
    OrderStatsResponse,
    ProductListResponse,
    ProviderHealthResponse,
    StockListResponse,
    StockResponse,
    TeamMemberResponse,
)
from src.application.use_cases import (
    CreateTeamMemberUseCase,
    DashboardUseCase,
    GetOrderDetailUseCase,
    GetStockAlertsUseCase,
    ListOrdersUseCase,
    ListProductsUseCase,
    ListStocksUseCase,
    ManageCartUseCase,
    PlaceOrderUseCase,
    SaveProductUseCase,
    SaveStockUseCase,
    UpdateOrderStatusUseCase,
)

__all__ = [
    # Request DTOs
    "AddCartItemRequest",
    "SetCartQuantityRequest",
    "PlaceOrderRequest",
    "ListOrdersRequest",
    "UpdateOrderStatusRequest",
    "SaveStockRequest",
    "SaveProductRequest",
    "CreateTeamMemberRequest",
    # Response DTOs
    "CartResponse",
    "OrderResponse",
    "OrderListResponse",
    "OrderStatsResponse",
    "ProductListResponse",
    "StockListResponse",
    "StockResponse",
    "AlertListResponse",
    "DashboardResponse",
    "TeamMemberResponse",
    "HealthResponse",
    "ProviderHealthResponse",
    "ErrorResponse",
    # Use Cases
    "ManageCartUseCase",
    "PlaceOrderUseCase",
    "ListOrdersUseCase",
    "GetOrderDetailUseCase",
    "UpdateOrderStatusUseCase",
    "ListStocksUseCase",
    "ListProductsUseCase",
    "SaveProductUseCase",
    "GetStockAlertsUseCase",
    "SaveStockUseCase",
    "DashboardUseCase",
    "CreateTeamMemberUseCase",
]
