"""Order endpoints: placement, listing, detail and status workflow."""

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import (
    get_current_user,
    get_list_orders_use_case,
    get_order_detail_use_case,
    get_place_order_use_case,
    get_update_order_status_use_case,
)
from src.application.dto.requests import (
    ListOrdersRequest,
    PlaceOrderRequest,
    UpdateOrderStatusRequest,
)
from src.application.dto.responses import (
    ErrorResponse,
    OrderListResponse,
    OrderResponse,
    OrderStatsResponse,
)
from src.application.use_cases.get_order_detail import GetOrderDetailUseCase
from src.application.use_cases.list_orders import ListOrdersUseCase
from src.application.use_cases.place_order import PlaceOrderUseCase
from src.application.use_cases.update_order_status import UpdateOrderStatusUseCase
from src.core.entities.order import OrderStatus
from src.core.entities.tenancy import ALL_AGENCIES, CurrentUserContext

router = APIRouter(prefix="/api/orders", tags=["orders"])


def _list_filters(
    status_filter: OrderStatus | None = Query(default=None, alias="status"),
    search: str | None = None,
    year: int | None = Query(default=None, ge=2000, le=2100),
    month: int | None = Query(default=None, ge=1, le=12),
    agency_id: str = ALL_AGENCIES,
) -> ListOrdersRequest:
    return ListOrdersRequest(
        status=status_filter,
        search=search,
        year=year,
        month=month,
        agency_id=agency_id,
    )


@router.post(
    "",
    response_model=OrderResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def place_order(
    request: PlaceOrderRequest | None = None,
    viewer: CurrentUserContext | None = Depends(get_current_user),
    use_case: PlaceOrderUseCase = Depends(get_place_order_use_case),
) -> OrderResponse:
    """Place an order from the caller's cart and empty the cart."""
    result = await use_case.execute(viewer, request)
    return use_case.to_response(result)


@router.get("", response_model=OrderListResponse)
async def list_orders(
    filters: ListOrdersRequest = Depends(_list_filters),
    viewer: CurrentUserContext | None = Depends(get_current_user),
    use_case: ListOrdersUseCase = Depends(get_list_orders_use_case),
) -> OrderListResponse:
    """Orders visible to the caller, newest first."""
    result = await use_case.execute(viewer, filters)
    return use_case.to_response(result)


@router.get("/stats", response_model=OrderStatsResponse)
async def order_stats(
    agency_id: str = ALL_AGENCIES,
    viewer: CurrentUserContext | None = Depends(get_current_user),
    use_case: ListOrdersUseCase = Depends(get_list_orders_use_case),
) -> OrderStatsResponse:
    """Order counts per status."""
    stats = await use_case.stats(viewer, ListOrdersRequest(agency_id=agency_id))
    return use_case.stats_to_response(stats)


@router.get(
    "/{order_id}",
    response_model=OrderResponse,
    responses={
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def get_order(
    order_id: str,
    viewer: CurrentUserContext | None = Depends(get_current_user),
    use_case: GetOrderDetailUseCase = Depends(get_order_detail_use_case),
) -> OrderResponse:
    """Order with its lines and totals."""
    result = await use_case.execute(viewer, order_id)
    return use_case.to_response(result)


@router.patch(
    "/{order_id}/status",
    response_model=OrderResponse,
    responses={
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def update_order_status(
    order_id: str,
    request: UpdateOrderStatusRequest,
    viewer: CurrentUserContext | None = Depends(get_current_user),
    use_case: UpdateOrderStatusUseCase = Depends(get_update_order_status_use_case),
) -> OrderResponse:
    """Advance an order one status step."""
    result = await use_case.execute(viewer, order_id, request)
    return use_case.to_response(result)
