"""Stock endpoints: scoped rows, low-stock alerts and row writes."""

from fastapi import APIRouter, Depends

from src.api.dependencies import (
    get_current_user,
    get_list_stocks_use_case,
    get_save_stock_use_case,
    get_stock_alerts_use_case,
)
from src.application.dto.requests import SaveStockRequest
from src.application.dto.responses import (
    AlertListResponse,
    ErrorResponse,
    StockListResponse,
    StockResponse,
)
from src.application.use_cases.get_stock_alerts import GetStockAlertsUseCase
from src.application.use_cases.list_stocks import ListStocksUseCase
from src.application.use_cases.save_stock import SaveStockUseCase
from src.core.entities.tenancy import ALL_AGENCIES, CurrentUserContext

router = APIRouter(prefix="/api/stocks", tags=["stocks"])


@router.get("", response_model=StockListResponse)
async def list_stocks(
    viewer: CurrentUserContext | None = Depends(get_current_user),
    use_case: ListStocksUseCase = Depends(get_list_stocks_use_case),
) -> StockListResponse:
    """Stock rows the caller may see, with product totals and alert flags."""
    result = await use_case.execute(viewer)
    return use_case.to_response(result)


@router.get("/alerts", response_model=AlertListResponse)
async def stock_alerts(
    agency_id: str = ALL_AGENCIES,
    viewer: CurrentUserContext | None = Depends(get_current_user),
    use_case: GetStockAlertsUseCase = Depends(get_stock_alerts_use_case),
) -> AlertListResponse:
    """Products at or below their alert threshold."""
    result = await use_case.execute(viewer, agency_id)
    return use_case.to_response(result)


@router.put(
    "",
    response_model=StockResponse,
    responses={
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def save_stock(
    request: SaveStockRequest,
    viewer: CurrentUserContext | None = Depends(get_current_user),
    use_case: SaveStockUseCase = Depends(get_save_stock_use_case),
) -> StockResponse:
    """Create or update a stock row."""
    stock = await use_case.execute(viewer, request)
    return use_case.to_response(stock)
