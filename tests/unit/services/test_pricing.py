"""Tests for money and VAT arithmetic."""

from src.core.entities.order import OrderLine
from src.core.entities.tenancy import User, UserRole
from src.core.services.pricing import (
    line_total,
    order_totals,
    resolve_customer_tax_rate,
    round2,
)


def _line(total_ht: float, total_ttc: float) -> OrderLine:
    return OrderLine(
        product_id="p", quantity=1, price_ht=total_ht, tva=20, total_ht=total_ht, total_ttc=total_ttc
    )


class TestRound2:
    def test_rounds_half_away_from_zero(self):
        assert round2(0.125) == 0.13
        assert round2(-0.125) == -0.13

    def test_keeps_exact_cents(self):
        assert round2(42.0) == 42.0
        assert round2(0.1 + 0.2) == 0.3


class TestLineTotal:
    def test_unit_price_is_rounded_before_multiplying(self):
        """1.04 at 20% is 1.248 per unit, shown as 1.25; ten units cost 12.50."""
        totals = line_total(1.04, 20, 10)
        assert totals.unit_ttc == 1.25
        assert totals.line_ttc == 12.5
        # Taxing the raw line would give one cent less
        assert round2(1.04 * 1.2 * 10) == 12.48

    def test_line_ht(self):
        totals = line_total(10.0, 20, 3)
        assert totals.line_ht == 30.0
        assert totals.line_ttc == 36.0
        assert totals.line_tva == 6.0

    def test_zero_rate(self):
        totals = line_total(9.99, 0, 2)
        assert totals.unit_ttc == 9.99
        assert totals.line_ttc == 19.98


class TestOrderTotals:
    def test_two_line_order(self):
        """Quantities 3 and 1 at 10.00 and 5.00 excl. tax, 20% VAT."""
        first = line_total(10.0, 20, 3)
        second = line_total(5.0, 20, 1)
        totals = order_totals(
            [_line(first.line_ht, first.line_ttc), _line(second.line_ht, second.line_ttc)]
        )
        assert totals.total_ttc == 42.0
        assert totals.total_ht == 35.0
        assert totals.total_tva == 7.0

    def test_empty_order(self):
        totals = order_totals([])
        assert (totals.total_ht, totals.total_ttc, totals.total_tva) == (0.0, 0.0, 0.0)

    def test_sums_rounded_lines(self):
        totals = order_totals([_line(0.1, 0.12), _line(0.2, 0.24)])
        assert totals.total_ht == 0.3
        assert totals.total_ttc == 0.36


class TestResolveCustomerTaxRate:
    def test_exempt_customer_pays_no_tax(self):
        customer = User(
            id="c", company_id="x", role=UserRole.CUSTOMER, non_assujetti_tva=True, tva=20
        )
        assert resolve_customer_tax_rate(customer, 20) == 0.0

    def test_customer_rate_overrides_default(self):
        customer = User(id="c", company_id="x", role=UserRole.CUSTOMER, tva=5.5)
        assert resolve_customer_tax_rate(customer, 20) == 5.5

    def test_default_when_customer_has_no_rate(self):
        customer = User(id="c", company_id="x", role=UserRole.CUSTOMER)
        assert resolve_customer_tax_rate(customer, 20) == 20

    def test_default_when_no_customer(self):
        assert resolve_customer_tax_rate(None, 19.6) == 19.6
