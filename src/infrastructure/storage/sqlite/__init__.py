"""SQLite storage implementations."""

from src.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)
from src.infrastructure.storage.sqlite.directory_store import SQLiteDirectoryStore
from src.infrastructure.storage.sqlite.key_value_store import SQLiteKeyValueStore
from src.infrastructure.storage.sqlite.order_store import SQLiteOrderStore
from src.infrastructure.storage.sqlite.product_store import SQLiteProductStore
from src.infrastructure.storage.sqlite.stock_store import SQLiteStockStore

# Singleton instances
_product_store: SQLiteProductStore | None = None
_order_store: SQLiteOrderStore | None = None
_stock_store: SQLiteStockStore | None = None
_directory_store: SQLiteDirectoryStore | None = None
_key_value_store: SQLiteKeyValueStore | None = None


async def get_product_store() -> SQLiteProductStore:
    """Get singleton product store instance."""
    global _product_store
    if _product_store is None:
        _product_store = SQLiteProductStore()
    return _product_store


async def get_order_store() -> SQLiteOrderStore:
    """Get singleton order store instance."""
    global _order_store
    if _order_store is None:
        _order_store = SQLiteOrderStore()
    return _order_store


async def get_stock_store() -> SQLiteStockStore:
    """Get singleton stock store instance."""
    global _stock_store
    if _stock_store is None:
        _stock_store = SQLiteStockStore()
    return _stock_store


async def get_directory_store() -> SQLiteDirectoryStore:
    """Get singleton directory store instance."""
    global _directory_store
    if _directory_store is None:
        _directory_store = SQLiteDirectoryStore()
    return _directory_store


async def get_key_value_store() -> SQLiteKeyValueStore:
    """Get singleton key/value slot store instance."""
    global _key_value_store
    if _key_value_store is None:
        _key_value_store = SQLiteKeyValueStore()
    return _key_value_store


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    # Store classes
    "SQLiteDirectoryStore",
    "SQLiteKeyValueStore",
    "SQLiteOrderStore",
    "SQLiteProductStore",
    "SQLiteStockStore",
    # Factory functions
    "get_directory_store",
    "get_key_value_store",
    "get_order_store",
    "get_product_store",
    "get_stock_store",
]
