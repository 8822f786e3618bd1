"""Abstract interface for stock storage."""

from abc import ABC, abstractmethod

from src.core.entities.stock import Stock


class IStockStore(ABC):
    """Interface for stock row persistence."""

    @abstractmethod
    async def get(self, stock_id: str) -> Stock | None:
        """Get stock row by id."""
        pass

    @abstractmethod
    async def list_by_company(
        self, company_id: str, agency_id: str | None = None
    ) -> list[Stock]:
        """List a company's stock rows, optionally for one agency."""
        pass

    @abstractmethod
    async def save(self, stock: Stock) -> Stock:
        """Insert a new row (no id) or overwrite an existing one."""
        pass

    @abstractmethod
    async def delete(self, stock_id: str) -> None:
        """Delete a stock row."""
        pass
