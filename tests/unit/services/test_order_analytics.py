"""Tests for dashboard aggregations and order list filters."""

from datetime import UTC, datetime

from src.core.entities.order import OrderLine, OrderStatus
from src.core.services.order_analytics import (
    filter_orders,
    order_reference,
    orders_per_month,
    sort_recent_first,
    top_agencies,
    top_products,
)


def _line(product_id: str, quantity: int) -> OrderLine:
    return OrderLine(
        order_id="o", product_id=product_id, quantity=quantity,
        price_ht=1, tva=0, total_ht=quantity, total_ttc=quantity,
    )


class TestOrderReference:
    def test_first_eight_chars_upper(self, make_order):
        assert order_reference(make_order("abcdef123456")) == "ABCDEF12"

    def test_missing_id(self, make_order):
        order = make_order()
        order.id = None
        assert order_reference(order) == ""


class TestTopProducts:
    def test_ranked_by_quantity(self, make_product):
        lines = [_line("p1", 2), _line("p2", 5), _line("p1", 1), _line("gone123456", 1)]
        products = [make_product("p1", image_urls=["http://img/1.png"]), make_product("p2")]

        ranking = top_products(lines, products)

        assert [(p.product_id, p.quantity) for p in ranking] == [
            ("p2", 5), ("p1", 3), ("gone123456", 1)
        ]
        assert ranking[1].image_url == "http://img/1.png"
        assert ranking[2].name == "Product gone1234"

    def test_limit(self, make_product):
        lines = [_line(f"p{i}", i) for i in range(1, 8)]
        assert len(top_products(lines, [], limit=5)) == 5


class TestTopAgencies:
    def test_counts_delivered_orders_per_agency(self, make_order, customers, agencies):
        orders = [
            make_order("o1", "cust-3", status=OrderStatus.DELIVERED),
            make_order("o2", "cust-3", status=OrderStatus.DELIVERED),
            make_order("o3", "cust-1", status=OrderStatus.DELIVERED),
            make_order("o4", "cust-1", status=OrderStatus.TAKEN),
        ]
        ranking = top_agencies(orders, customers, agencies)
        assert [(a.agency_id, a.delivered_orders) for a in ranking] == [("A2", 2), ("A1", 1)]

    def test_agencies_without_orders_included(self, customers, agencies):
        ranking = top_agencies([], customers, agencies)
        assert {a.agency_id for a in ranking} == {"A1", "A2"}
        assert all(a.delivered_orders == 0 for a in ranking)


class TestOrdersPerMonth:
    def test_groups_by_month_oldest_first(self, make_order):
        orders = [
            make_order("o1", created_at=datetime(2024, 3, 2, tzinfo=UTC)),
            make_order("o2", created_at=datetime(2024, 1, 9, tzinfo=UTC)),
            make_order("o3", created_at=datetime(2024, 3, 30, tzinfo=UTC)),
        ]
        assert [(m.month, m.count) for m in orders_per_month(orders)] == [
            ("2024-01", 1), ("2024-03", 2)
        ]


class TestFilterOrders:
    def test_status_filter(self, make_order):
        orders = [make_order("o1"), make_order("o2", status=OrderStatus.TAKEN)]
        assert [o.id for o in filter_orders(orders, status=OrderStatus.TAKEN)] == ["o2"]

    def test_period_filter(self, make_order):
        orders = [
            make_order("o1", created_at=datetime(2024, 3, 2, tzinfo=UTC)),
            make_order("o2", created_at=datetime(2023, 3, 2, tzinfo=UTC)),
            make_order("o3", created_at=datetime(2024, 4, 2, tzinfo=UTC)),
        ]
        assert [o.id for o in filter_orders(orders, year=2024)] == ["o1", "o3"]
        assert [o.id for o in filter_orders(orders, year=2024, month=3)] == ["o1"]
        assert [o.id for o in filter_orders(orders, month=3)] == ["o1", "o2"]

    def test_search_by_reference_or_customer_name(self, make_order):
        orders = [make_order("abc12345xyz", "cust-1"), make_order("zzz99999", "cust-2")]
        names = {"cust-1": "Alice Martin", "cust-2": "Bruno Petit"}

        assert [o.id for o in filter_orders(orders, search="ABC1", customer_names=names)] == [
            "abc12345xyz"
        ]
        assert [o.id for o in filter_orders(orders, search=" petit ", customer_names=names)] == [
            "zzz99999"
        ]


class TestSortRecentFirst:
    def test_newest_first_undated_last(self, make_order):
        old = make_order("old", created_at=datetime(2023, 1, 1, tzinfo=UTC))
        new = make_order("new", created_at=datetime(2024, 1, 1, tzinfo=UTC))
        undated = make_order("undated")
        undated.created_at = None

        assert [o.id for o in sort_recent_first([old, undated, new])] == ["new", "old", "undated"]
