"""Unit tests for Product and explicit partial updates."""

import pytest

from farmbox.domain.exceptions import ValidationError
from farmbox.domain.model.product import Product, ProductUpdate
from farmbox.domain.model.value_objects import UNSET, Money


def _product() -> Product:
    return Product(
        id="1",
        farm_id="F1",
        name="Tomatoes",
        price=Money.of("3.500"),
        description="Heirloom, picked this morning",
        stock_quantity=40,
    )


class TestProductUpdate:

    def test_default_is_empty(self):
        assert ProductUpdate().is_empty
        assert not ProductUpdate(is_available=False).is_empty

    def test_unset_is_a_singleton(self):
        assert ProductUpdate().name is UNSET
        assert repr(UNSET) == "UNSET"

    def test_only_set_fields_change(self):
        product = _product()
        product.apply(ProductUpdate(price=Money.of("4")))
        assert product.price == Money.of("4")
        assert product.name == "Tomatoes"
        assert product.description == "Heirloom, picked this morning"

    def test_description_can_be_cleared(self):
        product = _product()
        product.apply(ProductUpdate(description=""))
        assert product.description == ""

    def test_can_mark_unavailable_and_zero_stock(self):
        product = _product()
        product.apply(ProductUpdate(is_available=False, stock_quantity=0))
        assert not product.is_available
        assert product.stock_quantity == 0

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError, match="name cannot be empty"):
            _product().apply(ProductUpdate(name="  "))

    def test_empty_unit_rejected(self):
        with pytest.raises(ValidationError, match="unit cannot be empty"):
            _product().apply(ProductUpdate(unit=""))

    def test_negative_stock_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            _product().apply(ProductUpdate(stock_quantity=-1))

    def test_zero_price_rejected(self):
        with pytest.raises(ValidationError, match="greater than zero"):
            _product().apply(ProductUpdate(price=Money.zero()))
