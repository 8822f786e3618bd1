"""List Products Use Case - the caller's company catalogue."""

from src.application.dto.responses import ProductListResponse, ProductResponse
from src.config import get_settings
from src.core.entities.catalog import Product
from src.core.entities.tenancy import CurrentUserContext
from src.core.interfaces.product_store import IProductStore
from src.core.services.pricing import unit_price_ttc


def product_to_response(product: Product, default_tax_rate: float) -> ProductResponse:
    """Product with its effective tax rate and tax-inclusive unit price."""
    rate = product.effective_tax_rate(default_tax_rate)
    return ProductResponse(
        id=product.id or "",
        company_id=product.company_id,
        name=product.name,
        display_name=product.display_name,
        sub_name=product.sub_name,
        description=product.description,
        price_ht=product.price_ht,
        tax_rate=rate,
        price_ttc=unit_price_ttc(product.price_ht, rate),
        barcode=product.barcode,
        is_active=product.is_active,
        image_urls=list(product.image_urls),
    )


class ListProductsUseCase:
    """
    Products of the caller's company, ordered by name.

    Customers only see active products; staff also see deactivated ones so
    they can edit them. Signed-out callers get an empty catalogue.
    """

    def __init__(self, product_store: IProductStore | None = None):
        self._product_store = product_store

    async def _get_product_store(self) -> IProductStore:
        if self._product_store is None:
            from src.infrastructure.storage.sqlite import get_product_store

            self._product_store = await get_product_store()
        return self._product_store

    async def execute(self, viewer: CurrentUserContext | None) -> list[Product]:
        if viewer is None:
            return []
        store = await self._get_product_store()
        return await store.list_by_company(viewer.company_id, active_only=viewer.is_customer)

    def to_response(self, products: list[Product]) -> ProductListResponse:
        default_rate = get_settings().pricing.default_tax_rate
        return ProductListResponse(
            products=[product_to_response(p, default_rate) for p in products],
            total=len(products),
        )
