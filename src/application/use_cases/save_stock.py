"""Save Stock Use Case - create or update one stock row."""

from src.application.dto.requests import SaveStockRequest
from src.application.dto.responses import StockResponse
from src.application.use_cases.access import require_agency_access, require_staff
from src.config import get_logger
from src.core.entities.stock import Stock
from src.core.entities.tenancy import CurrentUserContext
from src.core.exceptions import ProductNotFoundError, StockNotFoundError
from src.core.interfaces.product_store import IProductStore
from src.core.interfaces.stock_store import IStockStore

logger = get_logger(__name__)


class SaveStockUseCase:
    """
    Create (no id) or overwrite a stock row.

    Every check runs before the write: an area manager touching another
    agency's row, whether the stored one or the requested one, is rejected
    and nothing is written.
    """

    def __init__(
        self,
        stock_store: IStockStore | None = None,
        product_store: IProductStore | None = None,
    ):
        self._stock_store = stock_store
        self._product_store = product_store

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

    async def execute(
        self, viewer: CurrentUserContext | None, request: SaveStockRequest
    ) -> Stock:
        viewer = require_staff(viewer)
        stock_store = await self._get_stock_store()

        # Area managers write into their own agency unless told otherwise
        agency_id = request.agencies_id
        if agency_id is None and viewer.is_area_manager:
            agency_id = viewer.agency_id

        if request.id:
            existing = await stock_store.get(request.id)
            if existing is None or existing.company_id != viewer.company_id:
                raise StockNotFoundError(request.id)
            require_agency_access(viewer, existing.agencies_id)
        require_agency_access(viewer, agency_id)

        product = await (await self._get_product_store()).get(request.product_id)
        if product is None or product.company_id != viewer.company_id:
            raise ProductNotFoundError(request.product_id)

        stock = Stock(
            id=request.id,
            company_id=viewer.company_id,
            product_id=request.product_id,
            agencies_id=agency_id,
            location_type=request.location_type,
            location_id=request.location_id,
            quantity=request.quantity,
            alert_threshold=request.alert_threshold,
        )
        saved = await stock_store.save(stock)
        logger.info(
            "stock_row_saved",
            stock_id=saved.id,
            product_id=saved.product_id,
            agency_id=saved.agencies_id,
            by=viewer.user_id,
        )
        return saved

    def to_response(self, stock: Stock) -> StockResponse:
        """Convert the saved row to API response."""
        return StockResponse(
            id=stock.id or "",
            company_id=stock.company_id,
            product_id=stock.product_id,
            agencies_id=stock.agencies_id,
            location_type=stock.location_type.value,
            location_id=stock.location_id,
            quantity=stock.quantity,
            alert_threshold=stock.alert_threshold,
            updated_at=stock.updated_at,
        )
