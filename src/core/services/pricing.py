"""
Money and VAT arithmetic.

All amounts are rounded to the cent, half away from zero. Order totals are
the sum of the already rounded line totals.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from src.core.entities.order import OrderLine
from src.core.entities.tenancy import User

_CENT = Decimal("1")


def round2(value: float) -> float:
    """Round to 2 decimals, half away from zero.

    ``value * 100`` is computed in binary floating point first, exactly like
    the figures shown to users, then rounded to the nearest integer.
    """
    scaled = Decimal(value * 100).quantize(_CENT, rounding=ROUND_HALF_UP)
    return float(scaled) / 100


@dataclass(frozen=True)
class LineTotals:
    """Rounded unit and line amounts for one priced line."""

    unit_ttc: float
    line_ht: float
    line_ttc: float

    @property
    def line_tva(self) -> float:
        return round2(self.line_ttc - self.line_ht)


@dataclass(frozen=True)
class OrderTotals:
    """Order totals computed on read from the frozen line snapshots."""

    total_ht: float
    total_ttc: float
    total_tva: float


def unit_price_ttc(unit_price_ht: float, tax_rate: float) -> float:
    """Rounded unit price including tax."""
    return round2(unit_price_ht * (1 + tax_rate / 100))


def line_total(unit_price_ht: float, tax_rate: float, quantity: int) -> LineTotals:
    """Price one line.

    Callers validate inputs: ``unit_price_ht >= 0``, ``tax_rate >= 0`` and a
    positive integer ``quantity``.
    """
    unit_ttc = unit_price_ttc(unit_price_ht, tax_rate)
    return LineTotals(
        unit_ttc=unit_ttc,
        line_ht=round2(unit_price_ht * quantity),
        line_ttc=round2(unit_ttc * quantity),
    )


def resolve_customer_tax_rate(customer: User | None, default: float) -> float:
    """Effective tax rate for a customer at order time.

    Tax-exempt customers pay 0 whatever their ``tva`` field holds; otherwise
    the customer's own rate applies, then ``default``.
    """
    if customer is None:
        return default
    if customer.non_assujetti_tva:
        return 0.0
    return customer.tva if customer.tva is not None else default


def order_totals(lines: Iterable[OrderLine]) -> OrderTotals:
    """Sum frozen line totals into the order's displayed totals."""
    total_ht = 0.0
    total_ttc = 0.0
    for line in lines:
        total_ht += line.total_ht
        total_ttc += line.total_ttc
    total_ht = round2(total_ht)
    total_ttc = round2(total_ttc)
    return OrderTotals(
        total_ht=total_ht,
        total_ttc=total_ttc,
        total_tva=round2(total_ttc - total_ht),
    )
