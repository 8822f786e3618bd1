"""Order domain entities."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class OrderStatus(str, Enum):
    """Order lifecycle, strictly forward: PREPARATION → TAKEN → IN_DELIVERY → DELIVERED."""

    PREPARATION = "PREPARATION"
    TAKEN = "TAKEN"
    IN_DELIVERY = "IN_DELIVERY"
    DELIVERED = "DELIVERED"

    @property
    def is_terminal(self) -> bool:
        return self is OrderStatus.DELIVERED

    def next(self) -> "OrderStatus | None":
        """The single status this one may advance to."""
        members = list(OrderStatus)
        idx = members.index(self)
        return members[idx + 1] if idx + 1 < len(members) else None

    def can_advance_to(self, target: "OrderStatus") -> bool:
        return self.next() == target


class Order(BaseModel):
    """Order header. Totals are never stored here; they come from the lines."""

    id: str | None = None
    company_id: str
    customer_id: str
    sales_id: str | None = None  # assigned sales rep
    created_by: str
    status: OrderStatus = OrderStatus.PREPARATION
    created_at: datetime | None = None
    updated_at: datetime | None = None


class OrderLine(BaseModel):
    """One priced line of an order.

    Price, tax rate and totals are a snapshot taken when the order was placed
    and are never recomputed, even when the product price changes later.
    """

    id: str | None = None
    order_id: str | None = None
    product_id: str
    quantity: int = Field(ge=1)
    price_ht: float = Field(ge=0)
    tva: float = Field(ge=0)
    total_ht: float
    total_ttc: float


class OrderStats(BaseModel):
    """Order counts per status."""

    in_preparation: int = 0
    taken: int = 0
    in_delivery: int = 0
    delivered: int = 0
    total: int = 0
