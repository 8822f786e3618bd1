"""Catalogue endpoints: the company's products and their upkeep."""

from fastapi import APIRouter, Depends, status

from src.api.dependencies import (
    get_current_user,
    get_list_products_use_case,
    get_save_product_use_case,
)
from src.application.dto.requests import SaveProductRequest
from src.application.dto.responses import ErrorResponse, ProductListResponse, ProductResponse
from src.application.use_cases.list_products import ListProductsUseCase
from src.application.use_cases.save_product import SaveProductUseCase
from src.core.entities.tenancy import CurrentUserContext

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("", response_model=ProductListResponse)
async def list_products(
    viewer: CurrentUserContext | None = Depends(get_current_user),
    use_case: ListProductsUseCase = Depends(get_list_products_use_case),
) -> ProductListResponse:
    """Products of the caller's company; customers only see active ones."""
    products = await use_case.execute(viewer)
    return use_case.to_response(products)


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses={401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
)
async def create_product(
    request: SaveProductRequest,
    viewer: CurrentUserContext | None = Depends(get_current_user),
    use_case: SaveProductUseCase = Depends(get_save_product_use_case),
) -> ProductResponse:
    product = await use_case.create(viewer, request)
    return use_case.to_response(product)


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    responses={
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def update_product(
    product_id: str,
    request: SaveProductRequest,
    viewer: CurrentUserContext | None = Depends(get_current_user),
    use_case: SaveProductUseCase = Depends(get_save_product_use_case),
) -> ProductResponse:
    """Overwrite a product's editable fields; deactivate with ``is_active: false``."""
    product = await use_case.update(viewer, product_id, request)
    return use_case.to_response(product)
