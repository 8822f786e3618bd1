"""List Stocks Use Case - stock management view rows."""

from dataclasses import dataclass, field

from src.application.dto.responses import StockListResponse, StockRowResponse
from src.core.entities.catalog import Product
from src.core.entities.stock import Stock
from src.core.entities.tenancy import Agency, CurrentUserContext, User, Warehouse
from src.core.interfaces.directory_store import IDirectoryStore
from src.core.interfaces.product_store import IProductStore
from src.core.interfaces.stock_store import IStockStore
from src.core.services.stock_alerts import (
    UNKNOWN_NAME,
    count_alert_products,
    is_stock_alert,
    location_name,
    scope_stocks_for_viewer,
    total_stock_by_product,
)


@dataclass
class ListStocksResult:
    stocks: list[Stock] = field(default_factory=list)
    totals: dict[str, float] = field(default_factory=dict)
    products: dict[str, Product] = field(default_factory=dict)
    agencies: dict[str, Agency] = field(default_factory=dict)
    warehouses: dict[str, Warehouse] = field(default_factory=dict)
    users: dict[str, User] = field(default_factory=dict)


class ListStocksUseCase:
    """Stock rows visible to the caller, with per-product totals and alert flags."""

    def __init__(
        self,
        stock_store: IStockStore | None = None,
        product_store: IProductStore | None = None,
        directory_store: IDirectoryStore | None = None,
    ):
        self._stock_store = stock_store
        self._product_store = product_store
        self._directory_store = directory_store

    async def _get_stock_store(self) -> IStockStore:
        if self._stock_store is None:
            from src.infrastructure.storage.sqlite import get_stock_store

            self._stock_store = await get_stock_store()
        return self._stock_store

    async def _get_product_store(self) -> IProductStore:
        if self._product_store is None:
            from src.infrastructure.storage.sqlite import get_product_store

            self._product_store = await get_product_store()
        return self._product_store

    async def _get_directory_store(self) -> IDirectoryStore:
        if self._directory_store is None:
            from src.infrastructure.storage.sqlite import get_directory_store

            self._directory_store = await get_directory_store()
        return self._directory_store

    async def execute(self, viewer: CurrentUserContext | None) -> ListStocksResult:
        if viewer is None or viewer.is_customer:
            return ListStocksResult()

        stock_store = await self._get_stock_store()
        product_store = await self._get_product_store()
        directory = await self._get_directory_store()

        stocks = scope_stocks_for_viewer(
            await stock_store.list_by_company(viewer.company_id), viewer
        )
        products = await product_store.list_by_company(viewer.company_id)
        agencies = await directory.list_agencies(viewer.company_id)
        warehouses = await directory.list_warehouses(viewer.company_id)
        users = await directory.list_users(viewer.company_id)

        return ListStocksResult(
            stocks=stocks,
            totals=total_stock_by_product(stocks),
            products={p.id: p for p in products if p.id},
            agencies={a.id: a for a in agencies if a.id},
            warehouses={w.id: w for w in warehouses if w.id},
            users={u.id: u for u in users},
        )

    def to_response(self, result: ListStocksResult) -> StockListResponse:
        """Convert result to API response."""
        rows = []
        for stock in result.stocks:
            product = result.products.get(stock.product_id)
            agency = result.agencies.get(stock.agencies_id or "")
            rows.append(
                StockRowResponse(
                    id=stock.id,
                    product_id=stock.product_id,
                    product_name=product.display_name if product else UNKNOWN_NAME,
                    agencies_id=stock.agencies_id,
                    agency_name=agency.name if agency else UNKNOWN_NAME,
                    location_type=stock.location_type.value,
                    location_id=stock.location_id,
                    location_name=location_name(stock, result.warehouses, result.users),
                    quantity=stock.quantity,
                    alert_threshold=stock.alert_threshold,
                    total_stock=result.totals.get(stock.product_id, 0.0),
                    is_alert=is_stock_alert(stock, result.totals),
                    updated_at=stock.updated_at,
                )
            )
        return StockListResponse(
            stocks=rows,
            total=len(rows),
            alert_count=count_alert_products(result.stocks),
        )
