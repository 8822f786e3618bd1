"""Get Stock Alerts Use Case - products at or below their alert threshold."""

from dataclasses import dataclass, field

from src.application.dto.responses import (
    AlertListResponse,
    AlertProductResponse,
    StockLocationResponse,
)
from src.config import get_logger
from src.core.entities.stock import AlertProduct
from src.core.entities.tenancy import ALL_AGENCIES, CurrentUserContext
from src.core.interfaces.directory_store import IDirectoryStore
from src.core.interfaces.product_store import IProductStore
from src.core.interfaces.stock_store import IStockStore
from src.core.services.agency_filter import dashboard_agency
from src.core.services.stock_alerts import calculate_stock_alerts

logger = get_logger(__name__)


@dataclass
class StockAlertsResult:
    agency_id: str = ALL_AGENCIES
    alerts: list[AlertProduct] = field(default_factory=list)


def alerts_to_response(alerts: list[AlertProduct]) -> list[AlertProductResponse]:
    return [
        AlertProductResponse(
            product_id=alert.product_id,
            product_name=alert.product_name,
            total_stock=alert.total_stock,
            alert_threshold=alert.alert_threshold,
            stock_locations=[
                StockLocationResponse(**location.model_dump())
                for location in alert.stock_locations
            ],
        )
        for alert in alerts
    ]


class GetStockAlertsUseCase:
    """Compute low-stock alerts for the caller's agency scope."""

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

    async def execute(
        self,
        viewer: CurrentUserContext | None,
        agency_id: str = ALL_AGENCIES,
    ) -> StockAlertsResult:
        """Alerts for ``agency_id``; area managers always get their own agency.

        Signed-out callers and customers get no alerts.
        """
        if viewer is None or viewer.is_customer:
            return StockAlertsResult(agency_id=agency_id)

        scope = dashboard_agency(viewer, agency_id)
        directory = await self._get_directory_store()
        stocks = await (await self._get_stock_store()).list_by_company(viewer.company_id)
        products = await (await self._get_product_store()).list_by_company(viewer.company_id)

        alerts = calculate_stock_alerts(
            stocks,
            products,
            await directory.list_agencies(viewer.company_id),
            await directory.list_warehouses(viewer.company_id),
            users=await directory.list_users(viewer.company_id),
            agency_id=scope,
        )
        logger.info("stock_alerts_computed", agency_id=scope, alerts=len(alerts))
        return StockAlertsResult(agency_id=scope, alerts=alerts)

    def to_response(self, result: StockAlertsResult) -> AlertListResponse:
        """Convert result to API response."""
        return AlertListResponse(
            agency_id=result.agency_id,
            alerts=alerts_to_response(result.alerts),
            total=len(result.alerts),
        )
