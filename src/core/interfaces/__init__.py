"""Core interfaces (ports) for dependency injection."""

from src.core.interfaces.directory_store import IDirectoryStore
from src.core.interfaces.key_value_store import IKeyValueStore
from src.core.interfaces.order_store import IOrderStore
from src.core.interfaces.product_store import IProductStore
from src.core.interfaces.stock_store import IStockStore
from src.core.interfaces.user_provisioner import IUserProvisioner, ProvisionedUser

__all__ = [
    "IDirectoryStore",
    "IKeyValueStore",
    "IOrderStore",
    "IProductStore",
    "IStockStore",
    "IUserProvisioner",
    "ProvisionedUser",
]
