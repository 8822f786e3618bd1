"""Tests for PlaceOrderUseCase."""

import json
from unittest.mock import AsyncMock

import pytest

from src.application.dto.requests import PlaceOrderRequest
from src.application.use_cases.place_order import PlaceOrderUseCase
from src.core.entities.order import OrderStatus
from src.core.entities.tenancy import User, UserRole
from src.core.exceptions import (
    CustomerNotFoundError,
    EmptyCartError,
    NotAuthenticatedError,
    OrderPlacementError,
    ValidationError,
)


def _seed_cart(slots, user_id: str, *items: tuple[str, float, int]) -> None:
    slots.data[f"cart:{user_id}"] = json.dumps(
        [
            {
                "product": {"id": pid, "company_id": "company-1", "name": pid, "price_ht": price},
                "quantity": qty,
            }
            for pid, price, qty in items
        ]
    )


def _customer(**kwargs) -> User:
    kwargs.setdefault("id", "cust-1")
    kwargs.setdefault("company_id", "company-1")
    return User(role=UserRole.CUSTOMER, agencies_id="A1", first_name="Alice", last_name="Martin", **kwargs)


async def _echo_create(order, lines):
    order.id = "order-123"
    for i, line in enumerate(lines):
        line.id = f"line-{i}"
        line.order_id = order.id
    return order, lines


@pytest.fixture
def mock_order_store():
    store = AsyncMock()
    store.create_order_with_lines.side_effect = _echo_create
    return store


@pytest.fixture
def mock_directory_store():
    store = AsyncMock()
    store.get_user.return_value = _customer()
    return store


@pytest.fixture
def use_case(mock_order_store, mock_directory_store, slots):
    return PlaceOrderUseCase(
        order_store=mock_order_store,
        directory_store=mock_directory_store,
        key_value_store=slots,
    )


class TestPlaceOrderUseCase:
    async def test_successful_placement_freezes_lines_and_clears_cart(
        self, use_case, mock_order_store, slots, make_viewer
    ):
        """Two products, quantities 3 and 1, at 20% VAT total 42.00."""
        viewer = make_viewer(UserRole.CUSTOMER, user_id="cust-1", agency_id="A1")
        _seed_cart(slots, "cust-1", ("p1", 10.0, 3), ("p2", 5.0, 1))

        result = await use_case.execute(viewer)

        assert result.order.id == "order-123"
        assert result.order.status == OrderStatus.PREPARATION
        assert result.order.customer_id == "cust-1"
        assert result.order.created_by == "cust-1"
        assert len(result.lines) == 2
        assert [line.total_ttc for line in result.lines] == [36.0, 6.0]
        assert sum(line.total_ttc for line in result.lines) == 42.0
        assert all(line.tva == 20.0 for line in result.lines)
        assert "cart:cust-1" not in slots.data
        mock_order_store.create_order_with_lines.assert_awaited_once()

    async def test_response_totals(self, use_case, slots, make_viewer):
        viewer = make_viewer(UserRole.CUSTOMER, user_id="cust-1")
        _seed_cart(slots, "cust-1", ("p1", 10.0, 3), ("p2", 5.0, 1))

        response = use_case.to_response(await use_case.execute(viewer))

        assert response.total_ttc == 42.0
        assert response.total_ht == 35.0
        assert response.total_tva == 7.0
        assert response.customer_name == "Alice Martin"
        assert response.reference == "ORDER-12"

    async def test_store_failure_keeps_cart(self, use_case, mock_order_store, slots, make_viewer):
        viewer = make_viewer(UserRole.CUSTOMER, user_id="cust-1")
        _seed_cart(slots, "cust-1", ("p1", 10.0, 1))
        snapshot = slots.data["cart:cust-1"]
        mock_order_store.create_order_with_lines.side_effect = RuntimeError("disk I/O error")

        with pytest.raises(OrderPlacementError) as exc_info:
            await use_case.execute(viewer)

        assert "disk I/O error" in exc_info.value.message
        assert slots.data["cart:cust-1"] == snapshot

    async def test_empty_cart_rejected(self, use_case, mock_order_store, make_viewer):
        viewer = make_viewer(UserRole.CUSTOMER, user_id="cust-1")
        with pytest.raises(EmptyCartError):
            await use_case.execute(viewer)
        mock_order_store.create_order_with_lines.assert_not_called()

    async def test_exempt_customer_pays_no_tax(
        self, use_case, mock_directory_store, slots, make_viewer
    ):
        mock_directory_store.get_user.return_value = _customer(non_assujetti_tva=True, tva=20)
        viewer = make_viewer(UserRole.CUSTOMER, user_id="cust-1")
        _seed_cart(slots, "cust-1", ("p1", 10.0, 2))

        result = await use_case.execute(viewer)

        assert result.tax_rate == 0.0
        assert result.lines[0].tva == 0.0
        assert result.lines[0].total_ttc == result.lines[0].total_ht == 20.0

    async def test_customer_rate_applies(self, use_case, mock_directory_store, slots, make_viewer):
        mock_directory_store.get_user.return_value = _customer(tva=10.0)
        viewer = make_viewer(UserRole.CUSTOMER, user_id="cust-1")
        _seed_cart(slots, "cust-1", ("p1", 10.0, 1))

        result = await use_case.execute(viewer)
        assert result.lines[0].total_ttc == 11.0

    async def test_staff_orders_on_behalf_of_customer(
        self, use_case, mock_directory_store, slots, make_viewer
    ):
        viewer = make_viewer(UserRole.SALES, user_id="rep-1", agency_id="A1")
        _seed_cart(slots, "rep-1", ("p1", 10.0, 1))

        result = await use_case.execute(viewer, PlaceOrderRequest(customer_id="cust-1"))

        assert result.order.customer_id == "cust-1"
        assert result.order.created_by == "rep-1"
        mock_directory_store.get_user.assert_awaited_with("cust-1")
        assert "cart:rep-1" not in slots.data

    async def test_staff_must_name_customer(self, use_case, slots, make_viewer):
        viewer = make_viewer(UserRole.SALES, user_id="rep-1")
        _seed_cart(slots, "rep-1", ("p1", 10.0, 1))
        with pytest.raises(ValidationError):
            await use_case.execute(viewer, PlaceOrderRequest())

    async def test_customer_of_other_company_not_found(
        self, use_case, mock_directory_store, slots, make_viewer
    ):
        mock_directory_store.get_user.return_value = _customer(company_id="other")
        viewer = make_viewer(UserRole.SALES, user_id="rep-1")
        _seed_cart(slots, "rep-1", ("p1", 10.0, 1))
        with pytest.raises(CustomerNotFoundError):
            await use_case.execute(viewer, PlaceOrderRequest(customer_id="cust-1"))

    async def test_order_only_for_customers(
        self, use_case, mock_directory_store, slots, make_viewer
    ):
        mock_directory_store.get_user.return_value = User(
            id="drv-1", company_id="company-1", role=UserRole.DRIVER
        )
        viewer = make_viewer(UserRole.ADMIN, user_id="admin-1")
        _seed_cart(slots, "admin-1", ("p1", 10.0, 1))
        with pytest.raises(ValidationError):
            await use_case.execute(viewer, PlaceOrderRequest(customer_id="drv-1"))

    async def test_signed_out_rejected(self, use_case):
        with pytest.raises(NotAuthenticatedError):
            await use_case.execute(None)
