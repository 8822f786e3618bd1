"""List Orders Use Case - role-scoped order list and per-status counts."""

from dataclasses import dataclass, field

from src.application.dto.requests import ListOrdersRequest
from src.application.dto.responses import OrderListResponse, OrderStatsResponse
from src.application.use_cases.order_responses import build_order_response
from src.config import get_logger
from src.core.entities.order import Order, OrderLine, OrderStats
from src.core.entities.tenancy import CurrentUserContext
from src.core.interfaces.directory_store import IDirectoryStore
from src.core.interfaces.order_store import IOrderStore
from src.core.services.agency_filter import calculate_order_stats, scope_orders_for_viewer
from src.core.services.order_analytics import filter_orders, sort_recent_first

logger = get_logger(__name__)


@dataclass
class ListOrdersResult:
    """Orders visible to the caller, with their lines and customer names."""

    orders: list[Order] = field(default_factory=list)
    lines_by_order: dict[str, list[OrderLine]] = field(default_factory=dict)
    customer_names: dict[str, str] = field(default_factory=dict)


class ListOrdersUseCase:
    """List orders scoped to the caller's role and agency."""

    def __init__(
        self,
        order_store: IOrderStore | None = None,
        directory_store: IDirectoryStore | None = None,
    ):
        self._order_store = order_store
        self._directory_store = directory_store

    async def _get_order_store(self) -> IOrderStore:
        if self._order_store is None:
            from src.infrastructure.storage.sqlite import get_order_store

            self._order_store = await get_order_store()
        return self._order_store

    async def _get_directory_store(self) -> IDirectoryStore:
        if self._directory_store is None:
            from src.infrastructure.storage.sqlite import get_directory_store

            self._directory_store = await get_directory_store()
        return self._directory_store

    async def _scoped_orders(
        self, viewer: CurrentUserContext, request: ListOrdersRequest
    ) -> tuple[list[Order], dict[str, str]]:
        order_store = await self._get_order_store()
        directory = await self._get_directory_store()

        customer_id = viewer.user_id if viewer.is_customer else None
        orders = await order_store.list_orders(viewer.company_id, customer_id=customer_id)
        users = await directory.list_users(viewer.company_id)

        scoped = scope_orders_for_viewer(viewer, orders, users, request.agency_id)
        names = {u.id: u.full_name for u in users}
        return scoped, names

    async def execute(
        self,
        viewer: CurrentUserContext | None,
        request: ListOrdersRequest | None = None,
    ) -> ListOrdersResult:
        """Execute list orders use case."""
        if viewer is None:
            return ListOrdersResult()
        request = request or ListOrdersRequest()

        scoped, names = await self._scoped_orders(viewer, request)
        orders = sort_recent_first(
            filter_orders(
                scoped,
                status=request.status,
                search=request.search,
                year=request.year,
                month=request.month,
                customer_names=names,
            )
        )

        order_store = await self._get_order_store()
        lines = await order_store.get_lines_for_orders([o.id for o in orders if o.id])
        lines_by_order: dict[str, list[OrderLine]] = {}
        for line in lines:
            lines_by_order.setdefault(line.order_id or "", []).append(line)

        logger.debug(
            "orders_listed",
            user_id=viewer.user_id,
            scoped=len(scoped),
            returned=len(orders),
        )
        return ListOrdersResult(
            orders=orders,
            lines_by_order=lines_by_order,
            customer_names=names,
        )

    async def stats(
        self,
        viewer: CurrentUserContext | None,
        request: ListOrdersRequest | None = None,
    ) -> OrderStats:
        """Per-status counts over the caller's scoped orders."""
        if viewer is None:
            return OrderStats()
        scoped, _ = await self._scoped_orders(viewer, request or ListOrdersRequest())
        return calculate_order_stats(scoped)

    def to_response(self, result: ListOrdersResult) -> OrderListResponse:
        """Convert result to API response."""
        return OrderListResponse(
            orders=[
                build_order_response(
                    order,
                    result.lines_by_order.get(order.id or "", []),
                    customer_name=result.customer_names.get(order.customer_id) or None,
                    include_lines=False,
                )
                for order in result.orders
            ],
            total=len(result.orders),
        )

    @staticmethod
    def stats_to_response(stats: OrderStats) -> OrderStatsResponse:
        return OrderStatsResponse(**stats.model_dump())
