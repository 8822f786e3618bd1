"""SQLite implementation of order storage."""

import aiosqlite

from src.config import get_logger
from src.core.entities.order import Order, OrderLine, OrderStatus
from src.core.exceptions import OrderNotFoundError
from src.core.interfaces.order_store import IOrderStore
from src.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from src.infrastructure.storage.sqlite.records import decode, new_id, to_iso, utcnow

logger = get_logger(__name__)


class SQLiteOrderStore(IOrderStore):
    """SQLite implementation of order header and line storage."""

    async def create_order_with_lines(
        self, order: Order, lines: list[OrderLine]
    ) -> tuple[Order, list[OrderLine]]:
        """Create an order with all its lines in a single transaction."""
        now = utcnow()
        order.id = new_id()
        order.created_at = now
        order.updated_at = now
        async with get_transaction() as conn:
            await conn.execute(
                """
                INSERT INTO orders (
                    id, company_id, customer_id, sales_id, created_by,
                    status, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    order.id,
                    order.company_id,
                    order.customer_id,
                    order.sales_id,
                    order.created_by,
                    order.status.value,
                    to_iso(order.created_at),
                    to_iso(order.updated_at),
                ),
            )

            for position, line in enumerate(lines):
                line.id = new_id()
                line.order_id = order.id
                await conn.execute(
                    """
                    INSERT INTO order_items (
                        id, order_id, position, product_id, quantity,
                        price_ht, tva, total_ht, total_ttc
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        line.id,
                        line.order_id,
                        position,
                        line.product_id,
                        line.quantity,
                        line.price_ht,
                        line.tva,
                        line.total_ht,
                        line.total_ttc,
                    ),
                )

        logger.info(
            "order_created",
            order_id=order.id,
            customer_id=order.customer_id,
            lines=len(lines),
        )
        return order, lines

    async def get_order(self, order_id: str) -> Order | None:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM orders WHERE id = ?", (order_id,))
            row = await cursor.fetchone()
            return self._row_to_order(row) if row else None

    async def list_orders(
        self,
        company_id: str,
        customer_id: str | None = None,
        status: OrderStatus | None = None,
    ) -> list[Order]:
        query = "SELECT * FROM orders WHERE company_id = ?"
        params: list = [company_id]
        if customer_id:
            query += " AND customer_id = ?"
            params.append(customer_id)
        if status:
            query += " AND status = ?"
            params.append(status.value)
        query += " ORDER BY created_at DESC"

        async with get_connection() as conn:
            cursor = await conn.execute(query, params)
            rows = await cursor.fetchall()
            return [self._row_to_order(row) for row in rows]

    async def get_lines(self, order_id: str) -> list[OrderLine]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM order_items WHERE order_id = ? ORDER BY position",
                (order_id,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_line(row) for row in rows]

    async def get_lines_for_orders(self, order_ids: list[str]) -> list[OrderLine]:
        if not order_ids:
            return []
        placeholders = ",".join("?" for _ in order_ids)
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"SELECT * FROM order_items WHERE order_id IN ({placeholders}) "
                "ORDER BY order_id, position",
                order_ids,
            )
            rows = await cursor.fetchall()
            return [self._row_to_line(row) for row in rows]

    async def update_status(
        self, order_id: str, status: OrderStatus, sales_id: str | None = None
    ) -> Order:
        now = to_iso(utcnow())
        async with get_transaction() as conn:
            if sales_id:
                cursor = await conn.execute(
                    "UPDATE orders SET status = ?, sales_id = ?, updated_at = ? WHERE id = ?",
                    (status.value, sales_id, now, order_id),
                )
            else:
                cursor = await conn.execute(
                    "UPDATE orders SET status = ?, updated_at = ? WHERE id = ?",
                    (status.value, now, order_id),
                )
            if cursor.rowcount == 0:
                raise OrderNotFoundError(order_id)

            cursor = await conn.execute("SELECT * FROM orders WHERE id = ?", (order_id,))
            row = await cursor.fetchone()

        logger.info("order_status_updated", order_id=order_id, status=status.value)
        return self._row_to_order(row)

    @staticmethod
    def _row_to_order(row: aiosqlite.Row) -> Order:
        return decode(Order, "orders", row)

    @staticmethod
    def _row_to_line(row: aiosqlite.Row) -> OrderLine:
        data = dict(row)
        data.pop("position", None)
        return decode(OrderLine, "order_items", data)
