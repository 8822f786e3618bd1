"""Manage Cart Use Case - the signed-in customer's persisted cart."""

from src.application.dto.requests import AddCartItemRequest, SetCartQuantityRequest
from src.application.dto.responses import CartLineResponse, CartResponse
from src.application.use_cases.access import require_viewer
from src.config import get_logger, get_settings
from src.core.entities.tenancy import CurrentUserContext
from src.core.exceptions import ProductNotFoundError, ValidationError
from src.core.interfaces.key_value_store import IKeyValueStore
from src.core.interfaces.product_store import IProductStore
from src.core.services.cart import Cart

logger = get_logger(__name__)


class ManageCartUseCase:
    """Load and mutate the caller's cart slot."""

    def __init__(
        self,
        key_value_store: IKeyValueStore | None = None,
        product_store: IProductStore | None = None,
    ):
        self._key_value_store = key_value_store
        self._product_store = product_store

    async def _get_key_value_store(self) -> IKeyValueStore:
        if self._key_value_store is None:
            from src.infrastructure.storage.sqlite import get_key_value_store

            self._key_value_store = await get_key_value_store()
        return self._key_value_store

    async def _get_product_store(self) -> IProductStore:
        if self._product_store is None:
            from src.infrastructure.storage.sqlite import get_product_store

            self._product_store = await get_product_store()
        return self._product_store

    async def load(self, viewer: CurrentUserContext) -> Cart:
        settings = get_settings()
        return await Cart.load(
            await self._get_key_value_store(),
            settings.cart.slot_key(viewer.user_id),
            default_tax_rate=settings.pricing.default_tax_rate,
        )

    async def get_cart(self, viewer: CurrentUserContext | None) -> Cart | None:
        """The caller's cart; None when nobody is signed in."""
        if viewer is None:
            return None
        return await self.load(viewer)

    async def add_item(
        self, viewer: CurrentUserContext | None, request: AddCartItemRequest
    ) -> Cart:
        viewer = require_viewer(viewer)
        product_store = await self._get_product_store()
        product = await product_store.get(request.product_id)
        if product is None or product.company_id != viewer.company_id:
            raise ProductNotFoundError(request.product_id)
        if not product.is_active:
            raise ValidationError(
                field="product_id",
                message="Product is not available",
                value=request.product_id,
            )

        cart = await self.load(viewer)
        line = await cart.add(product)
        logger.info(
            "cart_item_added",
            user_id=viewer.user_id,
            product_id=product.id,
            quantity=line.quantity,
        )
        return cart

    async def set_quantity(
        self,
        viewer: CurrentUserContext | None,
        product_id: str,
        request: SetCartQuantityRequest,
    ) -> Cart:
        viewer = require_viewer(viewer)
        cart = await self.load(viewer)
        await cart.set_quantity(product_id, request.quantity)
        return cart

    async def remove_item(self, viewer: CurrentUserContext | None, product_id: str) -> Cart:
        viewer = require_viewer(viewer)
        cart = await self.load(viewer)
        await cart.remove(product_id)
        return cart

    def to_response(self, cart: Cart | None) -> CartResponse:
        """Convert cart to API response."""
        if cart is None:
            return CartResponse()

        lines = []
        for line in cart.lines:
            totals = cart.line_totals(line)
            product = line.product
            lines.append(
                CartLineResponse(
                    product_id=product.id or "",
                    name=product.display_name,
                    quantity=line.quantity,
                    unit_price_ht=product.price_ht,
                    tax_rate=product.effective_tax_rate(get_settings().pricing.default_tax_rate),
                    unit_price_ttc=totals.unit_ttc,
                    total_ht=totals.line_ht,
                    total_ttc=totals.line_ttc,
                    image_url=product.image_urls[0] if product.image_urls else None,
                )
            )
        return CartResponse(
            lines=lines,
            item_count=cart.item_count(),
            total_ht=cart.total_excl_tax(),
            total_ttc=cart.total_incl_tax(),
        )
