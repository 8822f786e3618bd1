"""Get Order Detail Use Case."""

from dataclasses import dataclass

from src.application.dto.responses import OrderResponse
from src.application.use_cases.access import require_agency_access, require_viewer
from src.application.use_cases.order_responses import build_order_response
from src.core.entities.catalog import Product
from src.core.entities.order import Order, OrderLine
from src.core.entities.tenancy import CurrentUserContext, User
from src.core.exceptions import AuthorizationError, OrderNotFoundError
from src.core.interfaces.directory_store import IDirectoryStore
from src.core.interfaces.order_store import IOrderStore
from src.core.interfaces.product_store import IProductStore


@dataclass
class OrderDetailResult:
    order: Order
    lines: list[OrderLine]
    customer: User | None
    products: dict[str, Product]


class GetOrderDetailUseCase:
    """Load one order with its lines. Customers may only read their own."""

    def __init__(
        self,
        order_store: IOrderStore | None = None,
        directory_store: IDirectoryStore | None = None,
        product_store: IProductStore | None = None,
    ):
        self._order_store = order_store
        self._directory_store = directory_store
        self._product_store = product_store

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

    async def _get_product_store(self) -> IProductStore:
        if self._product_store is None:
            from src.infrastructure.storage.sqlite import get_product_store

            self._product_store = await get_product_store()
        return self._product_store

    async def execute(self, viewer: CurrentUserContext | None, order_id: str) -> OrderDetailResult:
        viewer = require_viewer(viewer)
        order_store = await self._get_order_store()

        order = await order_store.get_order(order_id)
        if order is None or order.company_id != viewer.company_id:
            raise OrderNotFoundError(order_id)
        if viewer.is_customer and order.customer_id != viewer.user_id:
            raise AuthorizationError(
                "Customers can only view their own orders",
                user_id=viewer.user_id,
                order_id=order_id,
            )

        directory = await self._get_directory_store()
        customer = await directory.get_user(order.customer_id)
        if viewer.is_area_manager:
            require_agency_access(viewer, customer.agencies_id if customer else None)

        lines = await order_store.get_lines(order_id)
        product_store = await self._get_product_store()
        products = {
            p.id: p for p in await product_store.list_by_company(viewer.company_id) if p.id
        }
        return OrderDetailResult(order=order, lines=lines, customer=customer, products=products)

    def to_response(self, result: OrderDetailResult) -> OrderResponse:
        """Convert result to API response."""
        return build_order_response(
            result.order,
            result.lines,
            customer_name=result.customer.full_name if result.customer else None,
            product_names={pid: p.display_name for pid, p in result.products.items()},
        )
