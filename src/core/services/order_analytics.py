"""Dashboard aggregations over orders and order lines."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from src.core.entities.catalog import Product
from src.core.entities.order import Order, OrderLine, OrderStatus
from src.core.entities.tenancy import Agency, User


@dataclass(frozen=True)
class ProductSales:
    product_id: str
    name: str
    quantity: int
    image_url: str | None = None


@dataclass(frozen=True)
class AgencySales:
    agency_id: str
    name: str
    delivered_orders: int


@dataclass(frozen=True)
class MonthlyCount:
    month: str  # YYYY-MM
    count: int


def order_reference(order: Order) -> str:
    """Short order reference shown to users."""
    return (order.id or "")[:8].upper()


def top_products(
    lines: Iterable[OrderLine],
    products: Iterable[Product],
    limit: int = 5,
) -> list[ProductSales]:
    """Best-selling products by quantity."""
    sold: dict[str, int] = {}
    for line in lines:
        sold[line.product_id] = sold.get(line.product_id, 0) + line.quantity

    by_id = {p.id: p for p in products}
    ranking = []
    for product_id, quantity in sold.items():
        product = by_id.get(product_id)
        ranking.append(
            ProductSales(
                product_id=product_id,
                name=product.display_name if product else f"Product {product_id[:8]}",
                quantity=quantity,
                image_url=product.image_urls[0] if product and product.image_urls else None,
            )
        )
    ranking.sort(key=lambda p: p.quantity, reverse=True)
    return ranking[:limit]


def top_agencies(
    orders: Iterable[Order],
    users: Iterable[User],
    agencies: Iterable[Agency],
    limit: int = 5,
) -> list[AgencySales]:
    """Agencies ranked by delivered orders; agencies with none are included."""
    agency_of = {u.id: u.agencies_id for u in users if u.agencies_id}
    counts: dict[str, int] = {}
    for order in orders:
        if order.status != OrderStatus.DELIVERED:
            continue
        agency_id = agency_of.get(order.customer_id)
        if agency_id:
            counts[agency_id] = counts.get(agency_id, 0) + 1

    ranking = [
        AgencySales(agency_id=a.id, name=a.name, delivered_orders=counts.get(a.id, 0))
        for a in agencies
        if a.id
    ]
    ranking.sort(key=lambda a: a.delivered_orders, reverse=True)
    return ranking[:limit]


def orders_per_month(orders: Iterable[Order]) -> list[MonthlyCount]:
    """Order counts per creation month, oldest first."""
    counts: dict[str, int] = {}
    for order in orders:
        if order.created_at is None:
            continue
        key = order.created_at.strftime("%Y-%m")
        counts[key] = counts.get(key, 0) + 1
    return [MonthlyCount(month=k, count=counts[k]) for k in sorted(counts)]


def filter_orders(
    orders: Iterable[Order],
    status: OrderStatus | None = None,
    search: str | None = None,
    year: int | None = None,
    month: int | None = None,
    customer_names: Mapping[str, str] | None = None,
) -> list[Order]:
    """Order list filtering by status, reference/customer search and period.

    Orders without a creation date never match a period filter.
    """
    needle = search.strip().lower() if search else ""
    names = customer_names or {}
    result = []
    for order in orders:
        if status is not None and order.status != status:
            continue
        if year is not None or month is not None:
            if order.created_at is None:
                continue
            if year is not None and order.created_at.year != year:
                continue
            if month is not None and order.created_at.month != month:
                continue
        if needle:
            haystack = (
                order_reference(order).lower(),
                (order.id or "").lower(),
                names.get(order.customer_id, "").lower(),
            )
            if not any(needle in field for field in haystack):
                continue
        result.append(order)
    return result


def sort_recent_first(orders: Iterable[Order]) -> list[Order]:
    """Newest orders first; undated orders last."""
    return sorted(
        orders,
        key=lambda o: (o.created_at is not None, o.created_at.timestamp() if o.created_at else 0),
        reverse=True,
    )
