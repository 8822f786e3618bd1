"""Cart entities."""

from pydantic import BaseModel, Field

from src.core.entities.catalog import Product


class CartLine(BaseModel):
    """A product snapshot, as loaded when it was added, with a quantity."""

    product: Product
    quantity: int = Field(ge=1)
