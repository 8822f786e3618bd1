"""Storage infrastructure implementations."""

from src.infrastructure.storage.sqlite import (
    SQLiteDirectoryStore,
    SQLiteKeyValueStore,
    SQLiteOrderStore,
    SQLiteProductStore,
    SQLiteStockStore,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)

__all__ = [
    # SQLite stores
    "SQLiteDirectoryStore",
    "SQLiteKeyValueStore",
    "SQLiteOrderStore",
    "SQLiteProductStore",
    "SQLiteStockStore",
    # Connection pool
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
]
