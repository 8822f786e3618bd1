"""Tests for UpdateOrderStatusUseCase."""

from unittest.mock import AsyncMock

import pytest

from src.application.dto.requests import UpdateOrderStatusRequest
from src.application.use_cases.update_order_status import UpdateOrderStatusUseCase
from src.core.entities.order import OrderStatus
from src.core.entities.tenancy import User, UserRole
from src.core.exceptions import (
    AgencyAccessDeniedError,
    AuthorizationError,
    InvalidStatusTransitionError,
    OrderNotFoundError,
    ValidationError,
)


@pytest.fixture
def mock_order_store(make_order):
    store = AsyncMock()
    store.get_order.return_value = make_order("o1", "cust-1", status=OrderStatus.PREPARATION)

    async def _update(order_id, status, sales_id=None):
        return make_order(order_id, "cust-1", status=status, sales_id=sales_id)

    store.update_status.side_effect = _update
    store.get_lines.return_value = []
    return store


@pytest.fixture
def mock_directory_store(customers):
    store = AsyncMock()
    by_id = {u.id: u for u in customers}
    by_id["rep-1"] = User(id="rep-1", company_id="company-1", role=UserRole.SALES)
    store.get_user.side_effect = lambda uid: by_id.get(uid)
    return store


@pytest.fixture
def use_case(mock_order_store, mock_directory_store):
    return UpdateOrderStatusUseCase(
        order_store=mock_order_store, directory_store=mock_directory_store
    )


class TestUpdateOrderStatusUseCase:
    async def test_advance_one_step(self, use_case, mock_order_store, make_viewer):
        result = await use_case.execute(
            make_viewer(UserRole.ADMIN), "o1", UpdateOrderStatusRequest(status=OrderStatus.TAKEN)
        )
        assert result.order.status == OrderStatus.TAKEN
        assert result.previous_status == "PREPARATION"
        mock_order_store.update_status.assert_awaited_once_with("o1", OrderStatus.TAKEN, None)

    async def test_assign_sales_rep(self, use_case, mock_order_store, make_viewer):
        result = await use_case.execute(
            make_viewer(UserRole.ADMIN),
            "o1",
            UpdateOrderStatusRequest(status=OrderStatus.TAKEN, sales_id="rep-1"),
        )
        assert result.order.sales_id == "rep-1"

    async def test_unknown_sales_rep(self, use_case, mock_order_store, make_viewer):
        with pytest.raises(ValidationError):
            await use_case.execute(
                make_viewer(UserRole.ADMIN),
                "o1",
                UpdateOrderStatusRequest(status=OrderStatus.TAKEN, sales_id="ghost"),
            )
        mock_order_store.update_status.assert_not_called()

    async def test_customer_cannot_be_sales_rep(self, use_case, mock_order_store, make_viewer):
        with pytest.raises(ValidationError, match="not a sales representative"):
            await use_case.execute(
                make_viewer(UserRole.ADMIN),
                "o1",
                UpdateOrderStatusRequest(status=OrderStatus.TAKEN, sales_id="cust-1"),
            )
        mock_order_store.update_status.assert_not_called()

    async def test_skipping_a_step_rejected(self, use_case, mock_order_store, make_viewer):
        with pytest.raises(InvalidStatusTransitionError):
            await use_case.execute(
                make_viewer(UserRole.ADMIN),
                "o1",
                UpdateOrderStatusRequest(status=OrderStatus.DELIVERED),
            )
        mock_order_store.update_status.assert_not_called()

    async def test_delivered_cannot_move(
        self, use_case, mock_order_store, make_order, make_viewer
    ):
        mock_order_store.get_order.return_value = make_order("o1", status=OrderStatus.DELIVERED)
        with pytest.raises(InvalidStatusTransitionError):
            await use_case.execute(
                make_viewer(UserRole.ADMIN),
                "o1",
                UpdateOrderStatusRequest(status=OrderStatus.PREPARATION),
            )

    async def test_missing_order(self, use_case, mock_order_store, make_viewer):
        mock_order_store.get_order.return_value = None
        with pytest.raises(OrderNotFoundError):
            await use_case.execute(
                make_viewer(UserRole.ADMIN), "nope", UpdateOrderStatusRequest(status=OrderStatus.TAKEN)
            )

    async def test_customers_cannot_update(self, use_case, make_viewer):
        with pytest.raises(AuthorizationError):
            await use_case.execute(
                make_viewer(UserRole.CUSTOMER, user_id="cust-1"),
                "o1",
                UpdateOrderStatusRequest(status=OrderStatus.TAKEN),
            )

    async def test_area_manager_limited_to_own_agency(
        self, use_case, mock_order_store, make_viewer
    ):
        with pytest.raises(AgencyAccessDeniedError):
            await use_case.execute(
                make_viewer(UserRole.AREA_MANAGER, agency_id="A2"),
                "o1",
                UpdateOrderStatusRequest(status=OrderStatus.TAKEN),
            )
        mock_order_store.update_status.assert_not_called()

        result = await use_case.execute(
            make_viewer(UserRole.AREA_MANAGER, agency_id="A1"),
            "o1",
            UpdateOrderStatusRequest(status=OrderStatus.TAKEN),
        )
        assert result.order.status == OrderStatus.TAKEN
