"""Order → response mapping shared by the order use cases."""

from collections.abc import Mapping

from src.application.dto.responses import OrderLineResponse, OrderResponse
from src.core.entities.order import Order, OrderLine
from src.core.services.order_analytics import order_reference
from src.core.services.pricing import order_totals


def build_order_response(
    order: Order,
    lines: list[OrderLine],
    customer_name: str | None = None,
    product_names: Mapping[str, str] | None = None,
    include_lines: bool = True,
) -> OrderResponse:
    """Order header plus totals summed from its frozen lines."""
    totals = order_totals(lines)
    names = product_names or {}
    return OrderResponse(
        id=order.id or "",
        reference=order_reference(order),
        company_id=order.company_id,
        customer_id=order.customer_id,
        customer_name=customer_name,
        sales_id=order.sales_id,
        created_by=order.created_by,
        status=order.status.value,
        created_at=order.created_at,
        updated_at=order.updated_at,
        total_ht=totals.total_ht,
        total_ttc=totals.total_ttc,
        total_tva=totals.total_tva,
        lines=[
            OrderLineResponse(
                id=line.id,
                product_id=line.product_id,
                product_name=names.get(line.product_id),
                quantity=line.quantity,
                price_ht=line.price_ht,
                tva=line.tva,
                total_ht=line.total_ht,
                total_ttc=line.total_ttc,
            )
            for line in lines
        ]
        if include_lines
        else [],
    )
