"""Update Order Status Use Case - advance an order one step at a time."""

from dataclasses import dataclass

from src.application.dto.requests import UpdateOrderStatusRequest
from src.application.dto.responses import OrderResponse
from src.application.use_cases.access import require_agency_access, require_staff
from src.application.use_cases.order_responses import build_order_response
from src.config import get_logger
from src.core.entities.order import Order, OrderLine
from src.core.entities.tenancy import CurrentUserContext, UserRole
from src.core.exceptions import (
    InvalidStatusTransitionError,
    OrderNotFoundError,
    ValidationError,
)
from src.core.interfaces.directory_store import IDirectoryStore
from src.core.interfaces.order_store import IOrderStore

logger = get_logger(__name__)


@dataclass
class UpdateOrderStatusResult:
    order: Order
    lines: list[OrderLine]
    previous_status: str


class UpdateOrderStatusUseCase:
    """
    Move an order forward: PREPARATION → TAKEN → IN_DELIVERY → DELIVERED.

    Backward moves, skipped steps and moves out of DELIVERED are rejected.
    Area managers may only act on orders of their own agency's customers.
    """

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

    async def execute(
        self,
        viewer: CurrentUserContext | None,
        order_id: str,
        request: UpdateOrderStatusRequest,
    ) -> UpdateOrderStatusResult:
        viewer = require_staff(viewer)
        order_store = await self._get_order_store()
        directory = await self._get_directory_store()

        order = await order_store.get_order(order_id)
        if order is None or order.company_id != viewer.company_id:
            raise OrderNotFoundError(order_id)

        if viewer.is_area_manager:
            customer = await directory.get_user(order.customer_id)
            require_agency_access(viewer, customer.agencies_id if customer else None)

        if not order.status.can_advance_to(request.status):
            raise InvalidStatusTransitionError(
                order_id, order.status.value, request.status.value
            )

        if request.sales_id:
            rep = await directory.get_user(request.sales_id)
            if rep is None or rep.company_id != viewer.company_id:
                raise ValidationError(
                    field="sales_id",
                    message="Unknown sales representative",
                    value=request.sales_id,
                )
            if rep.role != UserRole.SALES:
                raise ValidationError(
                    field="sales_id",
                    message="User is not a sales representative",
                    value=request.sales_id,
                )

        previous = order.status
        updated = await order_store.update_status(order_id, request.status, request.sales_id)
        lines = await order_store.get_lines(order_id)

        logger.info(
            "order_status_changed",
            order_id=order_id,
            from_status=previous.value,
            to_status=updated.status.value,
            by=viewer.user_id,
        )
        return UpdateOrderStatusResult(order=updated, lines=lines, previous_status=previous.value)

    def to_response(self, result: UpdateOrderStatusResult) -> OrderResponse:
        """Convert result to API response."""
        return build_order_response(result.order, result.lines)
