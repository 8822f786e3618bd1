"""Tests for product and stock entities."""

import pytest
from pydantic import ValidationError

from src.core.entities.catalog import Product
from src.core.entities.stock import LocationType, Stock


class TestProduct:
    def test_display_name_with_sub_name(self):
        product = Product(company_id="c1", name="Water", sub_name="1.5L", price_ht=1)
        assert product.display_name == "Water - 1.5L"

    def test_display_name_without_sub_name(self):
        assert Product(company_id="c1", name="Water", price_ht=1).display_name == "Water"

    def test_effective_tax_rate_falls_back_to_default(self):
        assert Product(company_id="c1", name="A", price_ht=1).effective_tax_rate(20) == 20
        assert Product(company_id="c1", name="A", price_ht=1, tva=5.5).effective_tax_rate(20) == 5.5

    def test_zero_tax_rate_is_kept(self):
        assert Product(company_id="c1", name="A", price_ht=1, tva=0).effective_tax_rate(20) == 0

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            Product(company_id="c1", name="A", price_ht=-0.01)


class TestStock:
    def test_defaults(self):
        stock = Stock(company_id="c1", product_id="p1")
        assert stock.location_type == LocationType.WAREHOUSE
        assert stock.quantity == 0.0
        assert stock.alert_threshold is None

    def test_negative_quantity_rejected(self):
        with pytest.raises(ValidationError):
            Stock(company_id="c1", product_id="p1", quantity=-1)
