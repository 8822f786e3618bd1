"""Abstract interface for order storage."""

from abc import ABC, abstractmethod

from src.core.entities.order import Order, OrderLine, OrderStatus


class IOrderStore(ABC):
    """Interface for order header and order line persistence."""

    @abstractmethod
    async def create_order_with_lines(
        self, order: Order, lines: list[OrderLine]
    ) -> tuple[Order, list[OrderLine]]:
        """Write an order and all its lines atomically.

        Either every record is committed or none is. Ids and the creation
        timestamp are assigned by the store.
        """
        pass

    @abstractmethod
    async def get_order(self, order_id: str) -> Order | None:
        """Get order header by id."""
        pass

    @abstractmethod
    async def list_orders(
        self,
        company_id: str,
        customer_id: str | None = None,
        status: OrderStatus | None = None,
    ) -> list[Order]:
        """List a company's orders, newest first."""
        pass

    @abstractmethod
    async def get_lines(self, order_id: str) -> list[OrderLine]:
        """Lines of one order in insertion order."""
        pass

    @abstractmethod
    async def get_lines_for_orders(self, order_ids: list[str]) -> list[OrderLine]:
        """Lines of several orders."""
        pass

    @abstractmethod
    async def update_status(
        self, order_id: str, status: OrderStatus, sales_id: str | None = None
    ) -> Order:
        """Set an order's status and, when given, its sales rep."""
        pass
