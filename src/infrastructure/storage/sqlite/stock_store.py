"""SQLite implementation of stock storage."""

import aiosqlite

from src.config import get_logger
from src.core.entities.stock import Stock
from src.core.interfaces.stock_store import IStockStore
from src.infrastructure.storage.sqlite.connection import get_connection
from src.infrastructure.storage.sqlite.records import decode, new_id, to_iso, utcnow

logger = get_logger(__name__)


class SQLiteStockStore(IStockStore):
    """SQLite implementation of stock row storage."""

    async def get(self, stock_id: str) -> Stock | None:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM stocks WHERE id = ?", (stock_id,))
            row = await cursor.fetchone()
            return self._row_to_stock(row) if row else None

    async def list_by_company(
        self, company_id: str, agency_id: str | None = None
    ) -> list[Stock]:
        query = "SELECT * FROM stocks WHERE company_id = ?"
        params: list = [company_id]
        if agency_id:
            query += " AND agencies_id = ?"
            params.append(agency_id)
        query += " ORDER BY product_id, location_type, location_id"

        async with get_connection() as conn:
            cursor = await conn.execute(query, params)
            rows = await cursor.fetchall()
            return [self._row_to_stock(row) for row in rows]

    async def save(self, stock: Stock) -> Stock:
        stock.id = stock.id or new_id()
        stock.updated_at = utcnow()
        async with get_connection() as conn:
            await conn.execute(
                """
                INSERT INTO stocks (
                    id, company_id, product_id, agencies_id, location_type,
                    location_id, quantity, alert_threshold, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    company_id = excluded.company_id,
                    product_id = excluded.product_id,
                    agencies_id = excluded.agencies_id,
                    location_type = excluded.location_type,
                    location_id = excluded.location_id,
                    quantity = excluded.quantity,
                    alert_threshold = excluded.alert_threshold,
                    updated_at = excluded.updated_at
                """,
                (
                    stock.id,
                    stock.company_id,
                    stock.product_id,
                    stock.agencies_id,
                    stock.location_type.value,
                    stock.location_id,
                    stock.quantity,
                    stock.alert_threshold,
                    to_iso(stock.updated_at),
                ),
            )
            await conn.commit()

        logger.info(
            "stock_saved",
            stock_id=stock.id,
            product_id=stock.product_id,
            quantity=stock.quantity,
        )
        return stock

    async def delete(self, stock_id: str) -> None:
        async with get_connection() as conn:
            await conn.execute("DELETE FROM stocks WHERE id = ?", (stock_id,))
            await conn.commit()

    @staticmethod
    def _row_to_stock(row: aiosqlite.Row) -> Stock:
        return decode(Stock, "stocks", row)
