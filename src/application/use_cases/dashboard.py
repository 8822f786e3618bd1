"""Dashboard Use Case - stats, alerts and sales rankings for one viewer."""

from dataclasses import dataclass, field

from src.application.dto.responses import (
    AgencySalesResponse,
    DashboardResponse,
    MonthlyCountResponse,
    OrderStatsResponse,
    ProductSalesResponse,
)
from src.application.use_cases.get_stock_alerts import alerts_to_response
from src.config import get_logger
from src.core.entities.order import OrderStats
from src.core.entities.stock import AlertProduct
from src.core.entities.tenancy import ALL_AGENCIES, CurrentUserContext
from src.core.interfaces.directory_store import IDirectoryStore
from src.core.interfaces.order_store import IOrderStore
from src.core.interfaces.product_store import IProductStore
from src.core.interfaces.stock_store import IStockStore
from src.core.services.agency_filter import (
    calculate_order_stats,
    dashboard_agency,
    filter_orders_by_agency,
    select_dashboard_order_lines,
)
from src.core.services.order_analytics import (
    AgencySales,
    MonthlyCount,
    ProductSales,
    orders_per_month,
    top_agencies,
    top_products,
)
from src.core.services.stock_alerts import calculate_stock_alerts

logger = get_logger(__name__)

DASHBOARD_ALERT_LIMIT = 6


@dataclass
class DashboardResult:
    agency_id: str = ALL_AGENCIES
    stats: OrderStats = field(default_factory=OrderStats)
    alerts: list[AlertProduct] = field(default_factory=list)
    top_products: list[ProductSales] = field(default_factory=list)
    top_agencies: list[AgencySales] = field(default_factory=list)
    orders_per_month: list[MonthlyCount] = field(default_factory=list)


class DashboardUseCase:
    """
    Build the dashboard for a staff viewer.

    Area managers are pinned to their own agency. Admins see every agency or
    the one they select. Alerts are capped to the first few; the full count
    is returned alongside.
    """

    def __init__(
        self,
        order_store: IOrderStore | None = None,
        stock_store: IStockStore | None = None,
        product_store: IProductStore | None = None,
        directory_store: IDirectoryStore | None = None,
    ):
        self._order_store = order_store
        self._stock_store = stock_store
        self._product_store = product_store
        self._directory_store = directory_store

    async def _get_order_store(self) -> IOrderStore:
        if self._order_store is None:
            from src.infrastructure.storage.sqlite import get_order_store

            self._order_store = await get_order_store()
        return self._order_store

    async def _get_stock_store(self) -> IStockStore:
        if self._stock_store is None:
            from src.infrastructure.storage.sqlite import get_stock_store

            self._stock_store = await get_stock_store()
        return self._stock_store

    async def _get_product_store(self) -> IProductStore:
        if self._product_store is None:
            from src.infrastructure.storage.sqlite import get_product_store

            self._product_store = await get_product_store()
        return self._product_store

    async def _get_directory_store(self) -> IDirectoryStore:
        if self._directory_store is None:
            from src.infrastructure.storage.sqlite import get_directory_store

            self._directory_store = await get_directory_store()
        return self._directory_store

    async def execute(
        self,
        viewer: CurrentUserContext | None,
        agency_id: str = ALL_AGENCIES,
    ) -> DashboardResult:
        if viewer is None or viewer.is_customer:
            return DashboardResult(agency_id=agency_id)

        scope = dashboard_agency(viewer, agency_id)
        company_id = viewer.company_id

        order_store = await self._get_order_store()
        directory = await self._get_directory_store()
        orders = await order_store.list_orders(company_id)
        users = await directory.list_users(company_id)
        agencies = await directory.list_agencies(company_id)
        warehouses = await directory.list_warehouses(company_id)
        products = await (await self._get_product_store()).list_by_company(company_id)
        stocks = await (await self._get_stock_store()).list_by_company(company_id)

        scoped_orders = filter_orders_by_agency(orders, users, scope)
        lines = await order_store.get_lines_for_orders([o.id for o in orders if o.id])
        delivered_lines = select_dashboard_order_lines(viewer, orders, lines, users, agency_id)

        result = DashboardResult(
            agency_id=scope,
            stats=calculate_order_stats(scoped_orders),
            alerts=calculate_stock_alerts(
                stocks, products, agencies, warehouses, users=users, agency_id=scope
            ),
            top_products=top_products(delivered_lines, products),
            top_agencies=top_agencies(orders, users, agencies),
            orders_per_month=orders_per_month(scoped_orders),
        )
        logger.info(
            "dashboard_built",
            user_id=viewer.user_id,
            agency_id=scope,
            orders=len(scoped_orders),
            alerts=len(result.alerts),
        )
        return result

    def to_response(self, result: DashboardResult) -> DashboardResponse:
        """Convert result to API response."""
        return DashboardResponse(
            agency_id=result.agency_id,
            stats=OrderStatsResponse(**result.stats.model_dump()),
            alerts=alerts_to_response(result.alerts[:DASHBOARD_ALERT_LIMIT]),
            alert_count=len(result.alerts),
            top_products=[
                ProductSalesResponse(
                    product_id=p.product_id,
                    name=p.name,
                    quantity=p.quantity,
                    image_url=p.image_url,
                )
                for p in result.top_products
            ],
            top_agencies=[
                AgencySalesResponse(
                    agency_id=a.agency_id,
                    name=a.name,
                    delivered_orders=a.delivered_orders,
                )
                for a in result.top_agencies
            ],
            orders_per_month=[
                MonthlyCountResponse(month=m.month, count=m.count)
                for m in result.orders_per_month
            ],
        )
