"""
Agency scoping filters.

Pure functions over in-memory lists. ``"ALL"`` means no agency filter and
returns the input list itself.
"""

from collections.abc import Iterable, Sequence

from src.core.entities.order import Order, OrderLine, OrderStats, OrderStatus
from src.core.entities.stock import Stock
from src.core.entities.tenancy import ALL_AGENCIES, CurrentUserContext, User


def customer_ids_for_agency(users: Iterable[User], agency_id: str) -> set[str]:
    """Ids of the users assigned to ``agency_id``."""
    return {user.id for user in users if user.agencies_id == agency_id}


def filter_orders_by_agency(
    orders: list[Order],
    users: Iterable[User],
    agency_id: str,
) -> list[Order]:
    """Orders placed by customers of ``agency_id``."""
    if agency_id == ALL_AGENCIES:
        return orders
    customer_ids = customer_ids_for_agency(users, agency_id)
    return [order for order in orders if order.customer_id in customer_ids]


def filter_stocks_by_agency(stocks: list[Stock], agency_id: str) -> list[Stock]:
    """Stock rows held by ``agency_id``."""
    if agency_id == ALL_AGENCIES:
        return stocks
    return [stock for stock in stocks if stock.agencies_id == agency_id]


def calculate_order_stats(orders: Sequence[Order]) -> OrderStats:
    """Tally orders per status."""
    stats = OrderStats(total=len(orders))
    for order in orders:
        if order.status == OrderStatus.PREPARATION:
            stats.in_preparation += 1
        elif order.status == OrderStatus.TAKEN:
            stats.taken += 1
        elif order.status == OrderStatus.IN_DELIVERY:
            stats.in_delivery += 1
        elif order.status == OrderStatus.DELIVERED:
            stats.delivered += 1
    return stats


def dashboard_agency(viewer: CurrentUserContext, selected_agency: str = ALL_AGENCIES) -> str:
    """Agency a dashboard is scoped to.

    Area managers are pinned to their own agency; everyone else sees the
    selected agency, ``"ALL"`` by default.
    """
    if viewer.is_area_manager and viewer.agency_id:
        return viewer.agency_id
    return selected_agency


def select_dashboard_order_lines(
    viewer: CurrentUserContext,
    orders: list[Order],
    lines: Iterable[OrderLine],
    users: Iterable[User],
    selected_agency: str = ALL_AGENCIES,
) -> list[OrderLine]:
    """Lines of delivered orders visible on the viewer's dashboard."""
    delivered = [order for order in orders if order.status == OrderStatus.DELIVERED]
    scoped = filter_orders_by_agency(delivered, users, dashboard_agency(viewer, selected_agency))
    order_ids = {order.id for order in scoped}
    return [line for line in lines if line.order_id in order_ids]


def scope_orders_for_viewer(
    viewer: CurrentUserContext | None,
    orders: list[Order],
    users: Iterable[User],
    selected_agency: str = ALL_AGENCIES,
) -> list[Order]:
    """Orders a viewer may list.

    Nobody signed in sees nothing and customers see their own orders. Staff
    see the agency returned by ``dashboard_agency``.
    """
    if viewer is None:
        return []
    if viewer.is_customer:
        return [order for order in orders if order.customer_id == viewer.user_id]
    return filter_orders_by_agency(orders, users, dashboard_agency(viewer, selected_agency))
