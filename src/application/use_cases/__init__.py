"""Application use cases."""

from src.application.use_cases.create_team_member import CreateTeamMemberUseCase
from src.application.use_cases.dashboard import DashboardResult, DashboardUseCase
from src.application.use_cases.get_order_detail import GetOrderDetailUseCase, OrderDetailResult
from src.application.use_cases.get_stock_alerts import GetStockAlertsUseCase, StockAlertsResult
from src.application.use_cases.list_orders import ListOrdersResult, ListOrdersUseCase
from src.application.use_cases.list_products import ListProductsUseCase
from src.application.use_cases.list_stocks import ListStocksResult, ListStocksUseCase
from src.application.use_cases.manage_cart import ManageCartUseCase
from src.application.use_cases.place_order import PlaceOrderResult, PlaceOrderUseCase
from src.application.use_cases.save_product import SaveProductUseCase
from src.application.use_cases.save_stock import SaveStockUseCase
from src.application.use_cases.update_order_status import (
    UpdateOrderStatusResult,
    UpdateOrderStatusUseCase,
)

__all__ = [
    "ManageCartUseCase",
    "PlaceOrderUseCase",
    "PlaceOrderResult",
    "ListOrdersUseCase",
    "ListOrdersResult",
    "GetOrderDetailUseCase",
    "OrderDetailResult",
    "UpdateOrderStatusUseCase",
    "UpdateOrderStatusResult",
    "ListStocksUseCase",
    "ListStocksResult",
    "GetStockAlertsUseCase",
    "StockAlertsResult",
    "SaveStockUseCase",
    "ListProductsUseCase",
    "SaveProductUseCase",
    "DashboardUseCase",
    "DashboardResult",
    "CreateTeamMemberUseCase",
]
