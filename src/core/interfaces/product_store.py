"""Abstract interface for product catalog storage."""

from abc import ABC, abstractmethod

from src.core.entities.catalog import Product


class IProductStore(ABC):
    """Interface for product persistence."""

    @abstractmethod
    async def create(self, product: Product) -> Product:
        """Create a product; the store assigns its id."""
        pass

    @abstractmethod
    async def update(self, product: Product) -> Product:
        """Overwrite a product's editable fields; raises ProductNotFoundError."""
        pass

    @abstractmethod
    async def get(self, product_id: str) -> Product | None:
        """Get product by id."""
        pass

    @abstractmethod
    async def list_by_company(
        self, company_id: str, active_only: bool = False
    ) -> list[Product]:
        """List a company's products ordered by name."""
        pass
