"""End-to-end order placement against the SQLite stores."""

import pytest

from src.application.dto.requests import (
    AddCartItemRequest,
    ListOrdersRequest,
    SetCartQuantityRequest,
    UpdateOrderStatusRequest,
)
from src.application.use_cases import (
    ListOrdersUseCase,
    ManageCartUseCase,
    PlaceOrderUseCase,
    UpdateOrderStatusUseCase,
)
from src.core.entities import CurrentUserContext, OrderStatus, Product, User, UserRole
from src.core.exceptions import EmptyCartError, InvalidStatusTransitionError
from src.infrastructure.storage.sqlite import (
    SQLiteDirectoryStore,
    SQLiteKeyValueStore,
    SQLiteOrderStore,
    SQLiteProductStore,
)

COMPANY_ID = "company-1"


@pytest.fixture
async def seeded(sqlite_db):
    directory = SQLiteDirectoryStore()
    await directory.save_user(
        User(id="cust-1", company_id=COMPANY_ID, role=UserRole.CUSTOMER, agencies_id="A1",
             first_name="Alice", last_name="Martin")
    )
    products = SQLiteProductStore()
    water = await products.create(Product(company_id=COMPANY_ID, name="Water", price_ht=1.04))
    soap = await products.create(Product(company_id=COMPANY_ID, name="Soap", price_ht=5.0))
    return {"water": water, "soap": soap}


def _customer() -> CurrentUserContext:
    return CurrentUserContext(
        user_id="cust-1", company_id=COMPANY_ID, role=UserRole.CUSTOMER, agency_id="A1"
    )


def _admin() -> CurrentUserContext:
    return CurrentUserContext(user_id="admin-1", company_id=COMPANY_ID, role=UserRole.ADMIN)


async def test_cart_to_delivered_order(seeded):
    slots = SQLiteKeyValueStore()
    cart_uc = ManageCartUseCase(key_value_store=slots, product_store=SQLiteProductStore())
    viewer = _customer()

    await cart_uc.add_item(viewer, AddCartItemRequest(product_id=seeded["water"].id))
    await cart_uc.set_quantity(viewer, seeded["water"].id, SetCartQuantityRequest(quantity=10))
    await cart_uc.add_item(viewer, AddCartItemRequest(product_id=seeded["soap"].id))

    place_uc = PlaceOrderUseCase(
        order_store=SQLiteOrderStore(),
        directory_store=SQLiteDirectoryStore(),
        key_value_store=slots,
    )
    result = await place_uc.execute(viewer)
    response = place_uc.to_response(result)

    # 1.04 at 20% rounds to 1.25 per unit before multiplying
    assert [line.total_ttc for line in response.lines] == [12.5, 6.0]
    assert response.total_ttc == 18.5
    assert response.total_ht == 15.4
    assert await slots.get("cart:cust-1") is None

    stored = await SQLiteOrderStore().get_lines(result.order.id)
    assert [line.product_id for line in stored] == [seeded["water"].id, seeded["soap"].id]

    status_uc = UpdateOrderStatusUseCase(
        order_store=SQLiteOrderStore(), directory_store=SQLiteDirectoryStore()
    )
    for step in (OrderStatus.TAKEN, OrderStatus.IN_DELIVERY, OrderStatus.DELIVERED):
        await status_uc.execute(_admin(), result.order.id, UpdateOrderStatusRequest(status=step))

    with pytest.raises(InvalidStatusTransitionError):
        await status_uc.execute(
            _admin(), result.order.id, UpdateOrderStatusRequest(status=OrderStatus.TAKEN)
        )

    list_uc = ListOrdersUseCase(
        order_store=SQLiteOrderStore(), directory_store=SQLiteDirectoryStore()
    )
    listed = await list_uc.execute(viewer, ListOrdersRequest())
    assert [o.status for o in listed.orders] == [OrderStatus.DELIVERED]
    stats = await list_uc.stats(_admin())
    assert stats.delivered == 1
    assert stats.total == 1


async def test_empty_cart_writes_nothing(seeded):
    place_uc = PlaceOrderUseCase(
        order_store=SQLiteOrderStore(),
        directory_store=SQLiteDirectoryStore(),
        key_value_store=SQLiteKeyValueStore(),
    )

    with pytest.raises(EmptyCartError):
        await place_uc.execute(_customer())

    assert await SQLiteOrderStore().list_orders(COMPANY_ID) == []
