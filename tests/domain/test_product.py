"""Unit tests for the Product aggregate."""

import pytest

from storefront.domain.exceptions import InvalidVariantSelectionError, ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money, VariantSelection


def _shirt(**overrides) -> Product:
    fields = dict(
        id="1",
        name="Shirt",
        price=Money.of("20.00"),
        stock=5,
        variants={"size": ["S", "M", "L"], "color": ["Green", "Blue"]},
    )
    fields.update(overrides)
    return Product(**fields)


class TestProductInvariants:

    def test_negative_stock_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            _shirt(stock=-1)

    def test_set_stock(self):
        shirt = _shirt()
        shirt.set_stock(0)
        assert shirt.stock == 0

    def test_set_negative_stock_rejected(self):
        shirt = _shirt()
        with pytest.raises(ValidationError):
            shirt.set_stock(-2)
        assert shirt.stock == 5

    def test_price_can_drop_to_zero(self):
        shirt = _shirt()
        shirt.update_price(Money.of("0"))
        assert shirt.price == Money.of("0")


class TestVariantValidation:

    def test_full_selection_accepted(self):
        _shirt().validate_selection(VariantSelection.of({"size": "M", "color": "Blue"}))

    def test_partial_selection_accepted(self):
        _shirt().validate_selection(VariantSelection.of({"size": "M"}))

    def test_empty_selection_accepted(self):
        _shirt().validate_selection(VariantSelection())

    def test_unknown_axis_rejected(self):
        with pytest.raises(InvalidVariantSelectionError, match="no 'material' option"):
            _shirt().validate_selection(VariantSelection.of({"material": "Wool"}))

    def test_unknown_value_rejected(self):
        with pytest.raises(InvalidVariantSelectionError, match="not a valid size"):
            _shirt().validate_selection(VariantSelection.of({"size": "XXL"}))

    def test_product_without_variants_rejects_any_choice(self):
        with pytest.raises(InvalidVariantSelectionError):
            _shirt(variants={}).validate_selection(VariantSelection.of({"size": "M"}))
