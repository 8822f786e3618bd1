"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator, Callable
from datetime import UTC, datetime
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.api.main import app
from src.core.entities import (
    Agency,
    CurrentUserContext,
    Order,
    OrderStatus,
    Product,
    Stock,
    User,
    UserRole,
    Warehouse,
)
from src.core.interfaces.key_value_store import IKeyValueStore

COMPANY_ID = "company-1"


class InMemoryKeyValueStore(IKeyValueStore):
    """Dict-backed slots for tests."""

    def __init__(self, initial: dict[str, str] | None = None):
        self.data: dict[str, str] = dict(initial or {})
        self.writes = 0

    async def get(self, key: str) -> str | None:
        return self.data.get(key)

    async def set(self, key: str, value: str) -> None:
        self.writes += 1
        self.data[key] = value

    async def delete(self, key: str) -> None:
        self.data.pop(key, None)


@pytest.fixture
def slots() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest_asyncio.fixture
async def async_client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client; dependency overrides are reset afterwards."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def make_viewer() -> Callable[..., CurrentUserContext]:
    """Build a signed-in caller."""

    def _make(
        role: UserRole = UserRole.ADMIN,
        agency_id: str | None = None,
        user_id: str = "viewer-1",
        company_id: str = COMPANY_ID,
    ) -> CurrentUserContext:
        return CurrentUserContext(
            user_id=user_id, company_id=company_id, role=role, agency_id=agency_id
        )

    return _make


@pytest.fixture
def make_product() -> Callable[..., Product]:
    def _make(
        product_id: str = "prod-1",
        price_ht: float = 10.0,
        tva: float | None = None,
        **kwargs,
    ) -> Product:
        kwargs.setdefault("name", f"Product {product_id}")
        kwargs.setdefault("company_id", COMPANY_ID)
        return Product(id=product_id, price_ht=price_ht, tva=tva, **kwargs)

    return _make


@pytest.fixture
def make_order() -> Callable[..., Order]:
    def _make(
        order_id: str = "order-1",
        customer_id: str = "cust-1",
        status: OrderStatus = OrderStatus.PREPARATION,
        created_at: datetime | None = None,
        **kwargs,
    ) -> Order:
        kwargs.setdefault("company_id", COMPANY_ID)
        kwargs.setdefault("created_by", customer_id)
        return Order(
            id=order_id,
            customer_id=customer_id,
            status=status,
            created_at=created_at or datetime(2024, 3, 15, 10, 0, tzinfo=UTC),
            **kwargs,
        )

    return _make


@pytest.fixture
def make_stock() -> Callable[..., Stock]:
    def _make(
        stock_id: str,
        product_id: str = "prod-1",
        quantity: float = 0.0,
        alert_threshold: float | None = None,
        agencies_id: str | None = "A1",
        **kwargs,
    ) -> Stock:
        kwargs.setdefault("company_id", COMPANY_ID)
        kwargs.setdefault("location_id", "wh-1")
        return Stock(
            id=stock_id,
            product_id=product_id,
            quantity=quantity,
            alert_threshold=alert_threshold,
            agencies_id=agencies_id,
            **kwargs,
        )

    return _make


@pytest.fixture
def customers() -> list[User]:
    """Two customers in agency A1 and one in A2."""
    return [
        User(id="cust-1", company_id=COMPANY_ID, role=UserRole.CUSTOMER, agencies_id="A1",
             first_name="Alice", last_name="Martin"),
        User(id="cust-2", company_id=COMPANY_ID, role=UserRole.CUSTOMER, agencies_id="A1",
             first_name="Bruno", last_name="Petit"),
        User(id="cust-3", company_id=COMPANY_ID, role=UserRole.CUSTOMER, agencies_id="A2",
             first_name="Chloe", last_name="Durand"),
    ]


@pytest.fixture
def agencies() -> list[Agency]:
    return [
        Agency(id="A1", company_id=COMPANY_ID, name="North"),
        Agency(id="A2", company_id=COMPANY_ID, name="South"),
    ]


@pytest.fixture
def warehouses() -> list[Warehouse]:
    return [
        Warehouse(id="wh-1", company_id=COMPANY_ID, agencies_id="A1", name="Main depot"),
        Warehouse(id="wh-2", company_id=COMPANY_ID, agencies_id="A2", name="Harbour"),
    ]


@pytest_asyncio.fixture
async def sqlite_db(tmp_path: Path) -> AsyncGenerator[Path, None]:
    """Migrated temporary database installed as the global pool."""
    import src.infrastructure.storage.sqlite.connection as conn_module
    from src.infrastructure.storage.sqlite.connection import ConnectionPool, close_pool
    from src.infrastructure.storage.sqlite.migrations import initialize_database

    db_path = tmp_path / "test.db"
    results = await initialize_database(db_path)
    assert all(r.success for r in results)

    conn_module._pool = ConnectionPool(db_path, pool_size=1, busy_timeout=5000)
    try:
        yield db_path
    finally:
        await close_pool()
