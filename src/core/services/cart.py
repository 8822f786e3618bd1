"""
Cart aggregate.

Holds at most one line per product id, in insertion order. Every mutation
writes the whole snapshot back to its key-value slot; the slot is a
convenience copy for the session, never the source of truth for prices.
"""

import json
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from src.config import get_logger
from src.core.entities.cart import CartLine
from src.core.entities.catalog import Product
from src.core.exceptions import InvalidQuantityError, ProductNotFoundError, ValidationError
from src.core.interfaces.key_value_store import IKeyValueStore
from src.core.services.pricing import LineTotals, line_total, round2

logger = get_logger(__name__)

DEFAULT_TAX_RATE = 20.0


def _decode_line(entry: Any) -> CartLine | None:
    """Decode one persisted entry, or None when it has no usable product."""
    if not isinstance(entry, dict):
        return None
    product = entry.get("product")
    if not isinstance(product, dict) or not product.get("id"):
        return None
    try:
        return CartLine.model_validate(entry)
    except PydanticValidationError:
        return None


class Cart:
    """A customer's cart bound to one persistence slot."""

    def __init__(
        self,
        storage: IKeyValueStore,
        key: str,
        default_tax_rate: float = DEFAULT_TAX_RATE,
        lines: list[CartLine] | None = None,
    ):
        self._storage = storage
        self._key = key
        self._default_tax_rate = default_tax_rate
        self._lines: list[CartLine] = list(lines or [])

    @classmethod
    async def load(
        cls,
        storage: IKeyValueStore,
        key: str,
        default_tax_rate: float = DEFAULT_TAX_RATE,
    ) -> "Cart":
        """Load a cart from its slot, repairing whatever cannot be decoded.

        Unparseable content yields an empty cart and clears the slot. Entries
        without a valid product are dropped and the cleaned snapshot is
        written back.
        """
        raw = await storage.get(key)
        if raw is None:
            return cls(storage, key, default_tax_rate)

        try:
            entries = json.loads(raw)
        except ValueError:
            entries = None
        if not isinstance(entries, list):
            logger.warning("cart_slot_corrupt", key=key)
            await storage.delete(key)
            return cls(storage, key, default_tax_rate)

        cart = cls(storage, key, default_tax_rate)
        kept = 0
        for entry in entries:
            line = _decode_line(entry)
            if line is None:
                continue
            kept += 1
            existing = cart.get(line.product.id)  # type: ignore[arg-type]
            if existing is None:
                cart._lines.append(line)
            else:
                existing.quantity += line.quantity

        if kept != len(entries) or len(cart._lines) != len(entries):
            logger.warning(
                "cart_slot_repaired",
                key=key,
                dropped=len(entries) - kept,
                lines=len(cart._lines),
            )
            await cart._persist()
        return cart

    @property
    def key(self) -> str:
        return self._key

    @property
    def lines(self) -> list[CartLine]:
        return list(self._lines)

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def get(self, product_id: str) -> CartLine | None:
        for line in self._lines:
            if line.product.id == product_id:
                return line
        return None

    async def add(self, product: Product) -> CartLine:
        """Add one unit of ``product``, creating its line if needed."""
        if not product.id:
            raise ValidationError(field="product.id", message="Product has no id")
        line = self.get(product.id)
        if line is None:
            line = CartLine(product=product, quantity=1)
            self._lines.append(line)
        else:
            line.quantity += 1
        await self._persist()
        return line

    async def set_quantity(self, product_id: str, quantity: int) -> None:
        """Set a line's quantity; zero or less removes the line."""
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise InvalidQuantityError(quantity)
        if quantity <= 0:
            await self.remove(product_id)
            return
        line = self.get(product_id)
        if line is None:
            raise ProductNotFoundError(product_id)
        line.quantity = quantity
        await self._persist()

    async def remove(self, product_id: str) -> None:
        self._lines = [line for line in self._lines if line.product.id != product_id]
        await self._persist()

    async def clear(self) -> None:
        """Empty the cart and clear its slot."""
        self._lines = []
        await self._storage.delete(self._key)

    def line_totals(self, line: CartLine) -> LineTotals:
        """Totals for one line at the product's own tax rate."""
        rate = line.product.effective_tax_rate(self._default_tax_rate)
        return line_total(line.product.price_ht, rate, line.quantity)

    def total_excl_tax(self) -> float:
        return round2(sum(self.line_totals(line).line_ht for line in self._lines))

    def total_incl_tax(self) -> float:
        # Lines are already rounded; the sum is rounded once more.
        return round2(sum(self.line_totals(line).line_ttc for line in self._lines))

    def item_count(self) -> int:
        return sum(line.quantity for line in self._lines)

    def snapshot(self) -> str:
        return json.dumps([line.model_dump(mode="json") for line in self._lines])

    async def _persist(self) -> None:
        await self._storage.set(self._key, self.snapshot())
