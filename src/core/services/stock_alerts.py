"""
Stock aggregation and low-stock alerts.

A product's stock is the sum of its rows across every location in scope.
A product is flagged once, however many of its rows carry a threshold: it
alerts when its total is at or below the highest threshold configured on
any of its rows, and that threshold is the one reported.
"""

from collections.abc import Iterable

from src.core.entities.catalog import Product
from src.core.entities.stock import AlertProduct, LocationType, Stock, StockLocation
from src.core.entities.tenancy import ALL_AGENCIES, Agency, CurrentUserContext, User, Warehouse
from src.core.services.agency_filter import filter_stocks_by_agency

UNKNOWN_NAME = "—"


def total_stock_by_product(stocks: Iterable[Stock]) -> dict[str, float]:
    """Sum quantities per product id."""
    totals: dict[str, float] = {}
    for stock in stocks:
        totals[stock.product_id] = totals.get(stock.product_id, 0.0) + stock.quantity
    return totals


def is_stock_alert(stock: Stock, totals: dict[str, float]) -> bool:
    """Whether this row's own threshold is reached by its product's total."""
    if stock.alert_threshold is None:
        return False
    return totals.get(stock.product_id, 0.0) <= stock.alert_threshold


def count_alert_products(stocks: list[Stock]) -> int:
    """Number of distinct products with at least one row in alert."""
    totals = total_stock_by_product(stocks)
    return len({stock.product_id for stock in stocks if is_stock_alert(stock, totals)})


def location_name(
    stock: Stock,
    warehouses: dict[str, Warehouse],
    users: dict[str, User] | None = None,
) -> str:
    """Human-readable name of the place a row is held."""
    if not stock.location_id:
        return UNKNOWN_NAME
    if stock.location_type == LocationType.WAREHOUSE:
        warehouse = warehouses.get(stock.location_id)
        return warehouse.name if warehouse else UNKNOWN_NAME
    user = (users or {}).get(stock.location_id)
    if user is not None and user.full_name:
        return user.full_name
    return f"Agent {stock.location_id[:8]}"


def calculate_stock_alerts(
    stocks: list[Stock],
    products: Iterable[Product],
    agencies: Iterable[Agency],
    warehouses: Iterable[Warehouse],
    users: Iterable[User] = (),
    agency_id: str = ALL_AGENCIES,
) -> list[AlertProduct]:
    """Products whose total stock is at or below their alert threshold.

    Rows are scoped to ``agency_id`` before totals are computed, so another
    agency's stock of the same product does not count. Products that no
    longer exist in the catalog are skipped. Inputs are not mutated and the
    result only depends on them.
    """
    scoped = filter_stocks_by_agency(stocks, agency_id)
    totals = total_stock_by_product(scoped)

    rows_by_product: dict[str, list[Stock]] = {}
    for stock in scoped:
        rows_by_product.setdefault(stock.product_id, []).append(stock)

    products_by_id = {p.id: p for p in products}
    agency_names = {a.id: a.name for a in agencies}
    warehouses_by_id = {w.id: w for w in warehouses if w.id}
    users_by_id = {u.id: u for u in users}

    alerts: list[AlertProduct] = []
    for product_id, rows in rows_by_product.items():
        thresholds = [r.alert_threshold for r in rows if r.alert_threshold is not None]
        if not thresholds:
            continue
        threshold = max(thresholds)
        total = totals[product_id]
        if total > threshold:
            continue
        product = products_by_id.get(product_id)
        if product is None:
            continue

        alerts.append(
            AlertProduct(
                product_id=product_id,
                product_name=product.display_name,
                total_stock=total,
                alert_threshold=threshold,
                stock_locations=[
                    StockLocation(
                        stock_id=row.id,
                        quantity=row.quantity,
                        agency_name=agency_names.get(row.agencies_id, UNKNOWN_NAME)
                        if row.agencies_id
                        else UNKNOWN_NAME,
                        location_name=location_name(row, warehouses_by_id, users_by_id),
                    )
                    for row in rows
                ],
            )
        )
    return alerts


def scope_stocks_for_viewer(
    stocks: list[Stock],
    viewer: CurrentUserContext | None,
) -> list[Stock]:
    """Rows a viewer may see on the stock management page.

    Customers see nothing. Admins see everything. Other staff see their own
    agency's rows plus every agency's warehouses, or only warehouses when
    they have no agency.
    """
    if viewer is None or viewer.is_customer:
        return []
    if viewer.is_admin:
        return stocks
    if viewer.agency_id:
        return [
            s
            for s in stocks
            if s.agencies_id == viewer.agency_id or s.location_type == LocationType.WAREHOUSE
        ]
    return [s for s in stocks if s.location_type == LocationType.WAREHOUSE]
