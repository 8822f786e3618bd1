"""
Dependency injection container for FastAPI.

Provides stores, use cases and the signed-in caller to route handlers.
"""

from functools import lru_cache

from fastapi import Depends, Request

from src.application.use_cases import (
    CreateTeamMemberUseCase,
    DashboardUseCase,
    GetOrderDetailUseCase,
    GetStockAlertsUseCase,
    ListOrdersUseCase,
    ListProductsUseCase,
    ListStocksUseCase,
    ManageCartUseCase,
    PlaceOrderUseCase,
    SaveProductUseCase,
    SaveStockUseCase,
    UpdateOrderStatusUseCase,
)
from src.config import Settings, get_logger, get_settings
from src.core.entities.tenancy import CurrentUserContext
from src.core.interfaces import (
    IDirectoryStore,
    IKeyValueStore,
    IOrderStore,
    IProductStore,
    IStockStore,
    IUserProvisioner,
)
from src.infrastructure.provisioning import get_user_provisioner
from src.infrastructure.storage.sqlite import (
    get_directory_store,
    get_key_value_store,
    get_order_store,
    get_product_store,
    get_stock_store,
)

logger = get_logger(__name__)


@lru_cache
def get_app_settings() -> Settings:
    """Get cached application settings."""
    return get_settings()


# Store dependencies
async def get_products() -> IProductStore:
    return await get_product_store()


async def get_orders() -> IOrderStore:
    return await get_order_store()


async def get_stocks() -> IStockStore:
    return await get_stock_store()


async def get_directory() -> IDirectoryStore:
    return await get_directory_store()


async def get_slots() -> IKeyValueStore:
    return await get_key_value_store()


def get_provisioner() -> IUserProvisioner:
    return get_user_provisioner()


# Caller
async def get_current_user(
    request: Request,
    directory: IDirectoryStore = Depends(get_directory),
) -> CurrentUserContext | None:
    """
    Resolve the signed-in caller from the auth gateway's user id header.

    No header, an unknown id or a deactivated profile all resolve to None,
    the signed-out state.
    """
    user_id = request.headers.get(get_settings().api.user_header)
    if not user_id:
        return None

    user = await directory.get_user(user_id)
    if user is None or not user.is_active:
        logger.info("unknown_or_inactive_user", user_id=user_id)
        return None
    return CurrentUserContext.from_user(user)


# Use case dependencies
async def get_manage_cart_use_case(
    slots: IKeyValueStore = Depends(get_slots),
    products: IProductStore = Depends(get_products),
) -> ManageCartUseCase:
    return ManageCartUseCase(key_value_store=slots, product_store=products)


async def get_list_products_use_case(
    products: IProductStore = Depends(get_products),
) -> ListProductsUseCase:
    return ListProductsUseCase(product_store=products)


async def get_save_product_use_case(
    products: IProductStore = Depends(get_products),
) -> SaveProductUseCase:
    return SaveProductUseCase(product_store=products)


async def get_place_order_use_case(
    orders: IOrderStore = Depends(get_orders),
    directory: IDirectoryStore = Depends(get_directory),
    slots: IKeyValueStore = Depends(get_slots),
) -> PlaceOrderUseCase:
    return PlaceOrderUseCase(order_store=orders, directory_store=directory, key_value_store=slots)


async def get_list_orders_use_case(
    orders: IOrderStore = Depends(get_orders),
    directory: IDirectoryStore = Depends(get_directory),
) -> ListOrdersUseCase:
    return ListOrdersUseCase(order_store=orders, directory_store=directory)


async def get_order_detail_use_case(
    orders: IOrderStore = Depends(get_orders),
    directory: IDirectoryStore = Depends(get_directory),
    products: IProductStore = Depends(get_products),
) -> GetOrderDetailUseCase:
    return GetOrderDetailUseCase(
        order_store=orders, directory_store=directory, product_store=products
    )


async def get_update_order_status_use_case(
    orders: IOrderStore = Depends(get_orders),
    directory: IDirectoryStore = Depends(get_directory),
) -> UpdateOrderStatusUseCase:
    return UpdateOrderStatusUseCase(order_store=orders, directory_store=directory)


async def get_list_stocks_use_case(
    stocks: IStockStore = Depends(get_stocks),
    products: IProductStore = Depends(get_products),
    directory: IDirectoryStore = Depends(get_directory),
) -> ListStocksUseCase:
    return ListStocksUseCase(stock_store=stocks, product_store=products, directory_store=directory)


async def get_stock_alerts_use_case(
    stocks: IStockStore = Depends(get_stocks),
    products: IProductStore = Depends(get_products),
    directory: IDirectoryStore = Depends(get_directory),
) -> GetStockAlertsUseCase:
    return GetStockAlertsUseCase(
        stock_store=stocks, product_store=products, directory_store=directory
    )


async def get_save_stock_use_case(
    stocks: IStockStore = Depends(get_stocks),
    products: IProductStore = Depends(get_products),
) -> SaveStockUseCase:
    return SaveStockUseCase(stock_store=stocks, product_store=products)


async def get_dashboard_use_case(
    orders: IOrderStore = Depends(get_orders),
    stocks: IStockStore = Depends(get_stocks),
    products: IProductStore = Depends(get_products),
    directory: IDirectoryStore = Depends(get_directory),
) -> DashboardUseCase:
    return DashboardUseCase(
        order_store=orders,
        stock_store=stocks,
        product_store=products,
        directory_store=directory,
    )


async def get_create_team_member_use_case(
    provisioner: IUserProvisioner = Depends(get_provisioner),
    directory: IDirectoryStore = Depends(get_directory),
) -> CreateTeamMemberUseCase:
    return CreateTeamMemberUseCase(provisioner=provisioner, directory_store=directory)
