"""SQLite implementation of the product catalog store."""

import json

import aiosqlite

from src.config import get_logger
from src.core.entities.catalog import Product
from src.core.exceptions import ProductNotFoundError
from src.core.interfaces.product_store import IProductStore
from src.infrastructure.storage.sqlite.connection import get_connection
from src.infrastructure.storage.sqlite.records import (
    decode,
    decode_json_list,
    new_id,
    to_iso,
    utcnow,
)

logger = get_logger(__name__)


class SQLiteProductStore(IProductStore):
    """SQLite implementation of product storage."""

    async def create(self, product: Product) -> Product:
        product.id = product.id or new_id()
        product.created_at = product.created_at or utcnow()
        async with get_connection() as conn:
            await conn.execute(
                """
                INSERT INTO products (
                    id, company_id, name, sub_name, description, price_ht,
                    tva, barcode, is_active, image_urls, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    product.id,
                    product.company_id,
                    product.name,
                    product.sub_name,
                    product.description,
                    product.price_ht,
                    product.tva,
                    product.barcode,
                    int(product.is_active),
                    json.dumps(product.image_urls),
                    to_iso(product.created_at),
                ),
            )
            await conn.commit()

        logger.info("product_created", product_id=product.id, company_id=product.company_id)
        return product

    async def update(self, product: Product) -> Product:
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                UPDATE products SET
                    name = ?, sub_name = ?, description = ?, price_ht = ?,
                    tva = ?, barcode = ?, is_active = ?, image_urls = ?
                WHERE id = ?
                """,
                (
                    product.name,
                    product.sub_name,
                    product.description,
                    product.price_ht,
                    product.tva,
                    product.barcode,
                    int(product.is_active),
                    json.dumps(product.image_urls),
                    product.id,
                ),
            )
            await conn.commit()
            if cursor.rowcount == 0:
                raise ProductNotFoundError(product.id)

        logger.info("product_updated", product_id=product.id, company_id=product.company_id)
        return product

    async def get(self, product_id: str) -> Product | None:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM products WHERE id = ?", (product_id,))
            row = await cursor.fetchone()
            return self._row_to_product(row) if row else None

    async def list_by_company(
        self, company_id: str, active_only: bool = False
    ) -> list[Product]:
        query = "SELECT * FROM products WHERE company_id = ?"
        if active_only:
            query += " AND is_active = 1"
        query += " ORDER BY name"
        async with get_connection() as conn:
            cursor = await conn.execute(query, (company_id,))
            rows = await cursor.fetchall()
            return [self._row_to_product(row) for row in rows]

    @staticmethod
    def _row_to_product(row: aiosqlite.Row) -> Product:
        data = dict(row)
        data["image_urls"] = decode_json_list("products", data["id"], data["image_urls"])
        return decode(Product, "products", data)
