"""
Core business logic services.

Layer-pure code that depends only on:
- src/core/entities/*
- src/core/interfaces/*
- src/core/exceptions.py

NO infrastructure imports. Persistence is injected.
"""

from src.core.services.agency_filter import (
    calculate_order_stats,
    filter_orders_by_agency,
    filter_stocks_by_agency,
    scope_orders_for_viewer,
    select_dashboard_order_lines,
)
from src.core.services.cart import Cart
from src.core.services.order_analytics import (
    filter_orders,
    orders_per_month,
    top_agencies,
    top_products,
)
from src.core.services.pricing import (
    LineTotals,
    OrderTotals,
    line_total,
    order_totals,
    resolve_customer_tax_rate,
    round2,
)
from src.core.services.stock_alerts import (
    calculate_stock_alerts,
    count_alert_products,
    is_stock_alert,
    scope_stocks_for_viewer,
    total_stock_by_product,
)

__all__ = [
    # Pricing
    "round2",
    "line_total",
    "LineTotals",
    "OrderTotals",
    "order_totals",
    "resolve_customer_tax_rate",
    # Cart
    "Cart",
    # Agency filters
    "filter_orders_by_agency",
    "filter_stocks_by_agency",
    "calculate_order_stats",
    "select_dashboard_order_lines",
    "scope_orders_for_viewer",
    # Stock alerts
    "calculate_stock_alerts",
    "count_alert_products",
    "is_stock_alert",
    "scope_stocks_for_viewer",
    "total_stock_by_product",
    # Analytics
    "filter_orders",
    "orders_per_month",
    "top_agencies",
    "top_products",
]
