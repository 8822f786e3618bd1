"""Place Order Use Case - turn a cart into an order with frozen line prices."""

from dataclasses import dataclass

from src.application.dto.requests import PlaceOrderRequest
from src.application.dto.responses import OrderResponse
from src.application.use_cases.access import require_viewer
from src.application.use_cases.order_responses import build_order_response
from src.config import get_logger, get_settings
from src.core.entities.order import Order, OrderLine, OrderStatus
from src.core.entities.tenancy import CurrentUserContext, User, UserRole
from src.core.exceptions import (
    CustomerNotFoundError,
    EmptyCartError,
    OrderPlacementError,
    ValidationError,
)
from src.core.interfaces.directory_store import IDirectoryStore
from src.core.interfaces.key_value_store import IKeyValueStore
from src.core.interfaces.order_store import IOrderStore
from src.core.services.cart import Cart
from src.core.services.pricing import line_total, resolve_customer_tax_rate

logger = get_logger(__name__)


@dataclass
class PlaceOrderResult:
    """Result of placing an order."""

    order: Order
    lines: list[OrderLine]
    customer: User
    tax_rate: float


class PlaceOrderUseCase:
    """
    Place an order from the caller's cart.

    The order header and every line are written in one store transaction.
    The cart is cleared only once that transaction has committed; on any
    failure it is left as it was so the caller can retry.
    """

    def __init__(
        self,
        order_store: IOrderStore | None = None,
        directory_store: IDirectoryStore | None = None,
        key_value_store: IKeyValueStore | None = None,
    ):
        self._order_store = order_store
        self._directory_store = directory_store
        self._key_value_store = key_value_store

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

    async def _get_key_value_store(self) -> IKeyValueStore:
        if self._key_value_store is None:
            from src.infrastructure.storage.sqlite import get_key_value_store

            self._key_value_store = await get_key_value_store()
        return self._key_value_store

    async def execute(
        self,
        viewer: CurrentUserContext | None,
        request: PlaceOrderRequest | None = None,
    ) -> PlaceOrderResult:
        """Execute place order use case."""
        viewer = require_viewer(viewer)
        request = request or PlaceOrderRequest()
        settings = get_settings()

        if not viewer.company_id:
            raise ValidationError(field="company_id", message="Caller has no company")

        customer_id = viewer.user_id if viewer.is_customer else request.customer_id
        if not customer_id:
            raise ValidationError(
                field="customer_id",
                message="A customer must be selected to place an order",
            )

        cart = await Cart.load(
            await self._get_key_value_store(),
            settings.cart.slot_key(viewer.user_id),
            default_tax_rate=settings.pricing.default_tax_rate,
        )
        if cart.is_empty:
            raise EmptyCartError(customer_id)

        directory = await self._get_directory_store()
        customer = await directory.get_user(customer_id)
        if customer is None or customer.company_id != viewer.company_id:
            raise CustomerNotFoundError(customer_id)
        if customer.role != UserRole.CUSTOMER:
            raise ValidationError(
                field="customer_id",
                message="Orders can only be placed for customers",
                value=customer_id,
            )

        # 1. Customer tax rate overrides each product's own rate
        tax_rate = resolve_customer_tax_rate(customer, settings.pricing.default_tax_rate)

        logger.info(
            "place_order_started",
            customer_id=customer_id,
            created_by=viewer.user_id,
            lines=len(cart.lines),
            tax_rate=tax_rate,
        )

        # 2. Header
        order = Order(
            company_id=viewer.company_id,
            customer_id=customer_id,
            sales_id=None,
            created_by=viewer.user_id,
            status=OrderStatus.PREPARATION,
        )

        # 3. Frozen line snapshots
        lines = []
        for cart_line in cart.lines:
            totals = line_total(cart_line.product.price_ht, tax_rate, cart_line.quantity)
            lines.append(
                OrderLine(
                    product_id=cart_line.product.id,  # type: ignore[arg-type]
                    quantity=cart_line.quantity,
                    price_ht=cart_line.product.price_ht,
                    tva=tax_rate,
                    total_ht=totals.line_ht,
                    total_ttc=totals.line_ttc,
                )
            )

        order_store = await self._get_order_store()
        try:
            order, lines = await order_store.create_order_with_lines(order, lines)
        except Exception as e:
            logger.error(
                "place_order_failed",
                customer_id=customer_id,
                error=str(e),
            )
            raise OrderPlacementError(customer_id, str(e)) from e

        # 4. Only a committed order empties the cart
        await cart.clear()

        logger.info(
            "place_order_complete",
            order_id=order.id,
            customer_id=customer_id,
            lines=len(lines),
        )
        return PlaceOrderResult(order=order, lines=lines, customer=customer, tax_rate=tax_rate)

    def to_response(self, result: PlaceOrderResult) -> OrderResponse:
        """Convert result to API response."""
        return build_order_response(
            result.order,
            result.lines,
            customer_name=result.customer.full_name or None,
        )
