"""Core domain entities."""

from src.core.entities.cart import CartLine
from src.core.entities.catalog import Product
from src.core.entities.order import Order, OrderLine, OrderStats, OrderStatus
from src.core.entities.stock import AlertProduct, LocationType, Stock, StockLocation
from src.core.entities.tenancy import (
    ALL_AGENCIES,
    Agency,
    Company,
    CurrentUserContext,
    User,
    UserRole,
    Warehouse,
)

__all__ = [
    # Catalog
    "Product",
    # Cart
    "CartLine",
    # Orders
    "Order",
    "OrderLine",
    "OrderStats",
    "OrderStatus",
    # Stock
    "Stock",
    "StockLocation",
    "AlertProduct",
    "LocationType",
    # Tenancy
    "ALL_AGENCIES",
    "Company",
    "Agency",
    "Warehouse",
    "User",
    "UserRole",
    "CurrentUserContext",
]
