"""Cart endpoints for the signed-in caller."""

from fastapi import APIRouter, Depends

from src.api.dependencies import get_current_user, get_manage_cart_use_case
from src.application.dto.requests import AddCartItemRequest, SetCartQuantityRequest
from src.application.dto.responses import CartResponse, ErrorResponse
from src.application.use_cases.manage_cart import ManageCartUseCase
from src.core.entities.tenancy import CurrentUserContext

router = APIRouter(prefix="/api/cart", tags=["cart"])


@router.get("", response_model=CartResponse)
async def get_cart(
    viewer: CurrentUserContext | None = Depends(get_current_user),
    use_case: ManageCartUseCase = Depends(get_manage_cart_use_case),
) -> CartResponse:
    """Current cart with line and grand totals. Empty when signed out."""
    cart = await use_case.get_cart(viewer)
    return use_case.to_response(cart)


@router.post(
    "/items",
    response_model=CartResponse,
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def add_item(
    request: AddCartItemRequest,
    viewer: CurrentUserContext | None = Depends(get_current_user),
    use_case: ManageCartUseCase = Depends(get_manage_cart_use_case),
) -> CartResponse:
    """Add one unit of a product."""
    cart = await use_case.add_item(viewer, request)
    return use_case.to_response(cart)


@router.put(
    "/items/{product_id}",
    response_model=CartResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def set_quantity(
    product_id: str,
    request: SetCartQuantityRequest,
    viewer: CurrentUserContext | None = Depends(get_current_user),
    use_case: ManageCartUseCase = Depends(get_manage_cart_use_case),
) -> CartResponse:
    """Set a line's quantity; zero or less removes it. 404 when the product is not in the cart."""
    cart = await use_case.set_quantity(viewer, product_id, request)
    return use_case.to_response(cart)


@router.delete(
    "/items/{product_id}",
    response_model=CartResponse,
    responses={401: {"model": ErrorResponse}},
)
async def remove_item(
    product_id: str,
    viewer: CurrentUserContext | None = Depends(get_current_user),
    use_case: ManageCartUseCase = Depends(get_manage_cart_use_case),
) -> CartResponse:
    cart = await use_case.remove_item(viewer, product_id)
    return use_case.to_response(cart)
