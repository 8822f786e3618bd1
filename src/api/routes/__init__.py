"""API route modules."""

from src.api.routes.cart import router as cart_router
from src.api.routes.dashboard import router as dashboard_router
from src.api.routes.health import router as health_router
from src.api.routes.orders import router as orders_router
from src.api.routes.products import router as products_router
from src.api.routes.stocks import router as stocks_router
from src.api.routes.team import router as team_router

__all__ = [
    "health_router",
    "products_router",
    "cart_router",
    "orders_router",
    "stocks_router",
    "dashboard_router",
    "team_router",
]
