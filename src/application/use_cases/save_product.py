"""Save Product Use Case - create or edit a catalogue product."""

from src.application.dto.requests import SaveProductRequest
from src.application.dto.responses import ProductResponse
from src.application.use_cases.access import require_staff
from src.application.use_cases.list_products import product_to_response
from src.config import get_logger, get_settings
from src.core.entities.catalog import Product
from src.core.entities.tenancy import CurrentUserContext
from src.core.exceptions import AuthorizationError, ProductNotFoundError
from src.core.interfaces.product_store import IProductStore

logger = get_logger(__name__)


def require_catalogue_manager(viewer: CurrentUserContext | None) -> CurrentUserContext:
    """Admins and area managers edit the catalogue."""
    viewer = require_staff(viewer)
    if not (viewer.is_admin or viewer.is_area_manager):
        raise AuthorizationError(
            "Only admins and area managers can edit products",
            user_id=viewer.user_id,
        )
    return viewer


class SaveProductUseCase:
    """Create a product in the caller's company, or edit one of its products."""

    def __init__(self, product_store: IProductStore | None = None):
        self._product_store = product_store

    async def _get_product_store(self) -> IProductStore:
        if self._product_store is None:
            from src.infrastructure.storage.sqlite import get_product_store

            self._product_store = await get_product_store()
        return self._product_store

    async def create(
        self, viewer: CurrentUserContext | None, request: SaveProductRequest
    ) -> Product:
        viewer = require_catalogue_manager(viewer)
        product = Product(company_id=viewer.company_id, **request.model_dump())
        created = await (await self._get_product_store()).create(product)
        logger.info("catalogue_product_added", product_id=created.id, by=viewer.user_id)
        return created

    async def update(
        self,
        viewer: CurrentUserContext | None,
        product_id: str,
        request: SaveProductRequest,
    ) -> Product:
        viewer = require_catalogue_manager(viewer)
        store = await self._get_product_store()

        existing = await store.get(product_id)
        if existing is None or existing.company_id != viewer.company_id:
            raise ProductNotFoundError(product_id)

        product = existing.model_copy(update=request.model_dump())
        updated = await store.update(product)
        logger.info(
            "catalogue_product_edited",
            product_id=product_id,
            is_active=updated.is_active,
            by=viewer.user_id,
        )
        return updated

    def to_response(self, product: Product) -> ProductResponse:
        return product_to_response(product, get_settings().pricing.default_tax_rate)
