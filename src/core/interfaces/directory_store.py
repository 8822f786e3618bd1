"""Abstract interface for the tenant directory (users, agencies, warehouses)."""

from abc import ABC, abstractmethod

from src.core.entities.tenancy import Agency, Company, User, UserRole, Warehouse


class IDirectoryStore(ABC):
    """Lookup tables used as join targets by filters and alerts."""

    @abstractmethod
    async def get_company(self, company_id: str) -> Company | None:
        pass

    @abstractmethod
    async def save_company(self, company: Company) -> Company:
        pass

    @abstractmethod
    async def get_user(self, user_id: str) -> User | None:
        """Get a user profile by id."""
        pass

    @abstractmethod
    async def save_user(self, user: User) -> User:
        """Insert or overwrite a user profile."""
        pass

    @abstractmethod
    async def list_users(
        self,
        company_id: str,
        role: UserRole | None = None,
        agency_id: str | None = None,
    ) -> list[User]:
        """List a company's users with optional role / agency filters."""
        pass

    @abstractmethod
    async def save_agency(self, agency: Agency) -> Agency:
        pass

    @abstractmethod
    async def list_agencies(self, company_id: str) -> list[Agency]:
        pass

    @abstractmethod
    async def save_warehouse(self, warehouse: Warehouse) -> Warehouse:
        pass

    @abstractmethod
    async def list_warehouses(
        self, company_id: str, agency_id: str | None = None
    ) -> list[Warehouse]:
        pass
