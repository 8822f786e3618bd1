"""SQLite implementation of the tenant directory."""

import aiosqlite

from src.config import get_logger
from src.core.entities.tenancy import Agency, Company, User, UserRole, Warehouse
from src.core.interfaces.directory_store import IDirectoryStore
from src.infrastructure.storage.sqlite.connection import get_connection
from src.infrastructure.storage.sqlite.records import decode, new_id, to_iso, utcnow

logger = get_logger(__name__)


class SQLiteDirectoryStore(IDirectoryStore):
    """Companies, agencies, warehouses and user profiles."""

    # Companies

    async def get_company(self, company_id: str) -> Company | None:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM companies WHERE id = ?", (company_id,))
            row = await cursor.fetchone()
            if not row:
                return None
            data = dict(row)
            data.pop("created_at", None)
            return decode(Company, "companies", data)

    async def save_company(self, company: Company) -> Company:
        company.id = company.id or new_id()
        async with get_connection() as conn:
            await conn.execute(
                """
                INSERT INTO companies (
                    id, name, phone, street, postal_code, city, country,
                    is_active, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    name = excluded.name,
                    phone = excluded.phone,
                    street = excluded.street,
                    postal_code = excluded.postal_code,
                    city = excluded.city,
                    country = excluded.country,
                    is_active = excluded.is_active
                """,
                (
                    company.id,
                    company.name,
                    company.phone,
                    company.street,
                    company.postal_code,
                    company.city,
                    company.country,
                    int(company.is_active),
                    to_iso(utcnow()),
                ),
            )
            await conn.commit()
        return company

    # Users

    async def get_user(self, user_id: str) -> User | None:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM users WHERE id = ?", (user_id,))
            row = await cursor.fetchone()
            return self._row_to_user(row) if row else None

    async def save_user(self, user: User) -> User:
        user.created_at = user.created_at or utcnow()
        async with get_connection() as conn:
            await conn.execute(
                """
                INSERT INTO users (
                    id, company_id, role, agencies_id, first_name, last_name,
                    email, phone, is_active, non_assujetti_tva, tva, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    company_id = excluded.company_id,
                    role = excluded.role,
                    agencies_id = excluded.agencies_id,
                    first_name = excluded.first_name,
                    last_name = excluded.last_name,
                    email = excluded.email,
                    phone = excluded.phone,
                    is_active = excluded.is_active,
                    non_assujetti_tva = excluded.non_assujetti_tva,
                    tva = excluded.tva
                """,
                (
                    user.id,
                    user.company_id,
                    user.role.value,
                    user.agencies_id,
                    user.first_name,
                    user.last_name,
                    user.email,
                    user.phone,
                    int(user.is_active),
                    int(user.non_assujetti_tva),
                    user.tva,
                    to_iso(user.created_at),
                ),
            )
            await conn.commit()

        logger.debug("user_saved", user_id=user.id, role=user.role.value)
        return user

    async def list_users(
        self,
        company_id: str,
        role: UserRole | None = None,
        agency_id: str | None = None,
    ) -> list[User]:
        query = "SELECT * FROM users WHERE company_id = ?"
        params: list = [company_id]
        if role:
            query += " AND role = ?"
            params.append(role.value)
        if agency_id:
            query += " AND agencies_id = ?"
            params.append(agency_id)
        query += " ORDER BY last_name, first_name"

        async with get_connection() as conn:
            cursor = await conn.execute(query, params)
            rows = await cursor.fetchall()
            return [self._row_to_user(row) for row in rows]

    # Agencies and warehouses

    async def save_agency(self, agency: Agency) -> Agency:
        agency.id = agency.id or new_id()
        async with get_connection() as conn:
            await conn.execute(
                """
                INSERT INTO agencies (id, company_id, name, created_at)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET name = excluded.name
                """,
                (agency.id, agency.company_id, agency.name, to_iso(utcnow())),
            )
            await conn.commit()
        return agency

    async def list_agencies(self, company_id: str) -> list[Agency]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT id, company_id, name FROM agencies WHERE company_id = ? ORDER BY name",
                (company_id,),
            )
            rows = await cursor.fetchall()
            return [decode(Agency, "agencies", row) for row in rows]

    async def save_warehouse(self, warehouse: Warehouse) -> Warehouse:
        warehouse.id = warehouse.id or new_id()
        async with get_connection() as conn:
            await conn.execute(
                """
                INSERT INTO warehouses (id, company_id, agencies_id, name, created_at)
                VALUES (?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    agencies_id = excluded.agencies_id,
                    name = excluded.name
                """,
                (
                    warehouse.id,
                    warehouse.company_id,
                    warehouse.agencies_id,
                    warehouse.name,
                    to_iso(utcnow()),
                ),
            )
            await conn.commit()
        return warehouse

    async def list_warehouses(
        self, company_id: str, agency_id: str | None = None
    ) -> list[Warehouse]:
        query = "SELECT id, company_id, agencies_id, name FROM warehouses WHERE company_id = ?"
        params: list = [company_id]
        if agency_id:
            query += " AND agencies_id = ?"
            params.append(agency_id)
        query += " ORDER BY name"

        async with get_connection() as conn:
            cursor = await conn.execute(query, params)
            rows = await cursor.fetchall()
            return [decode(Warehouse, "warehouses", row) for row in rows]

    @staticmethod
    def _row_to_user(row: aiosqlite.Row) -> User:
        return decode(User, "users", row)
