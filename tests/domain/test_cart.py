"""Unit tests for the Cart aggregate and the stock clamp."""

import pytest

from storefront.domain.model.cart import Cart, clamp_quantity
from storefront.domain.model.value_objects import Quantity, VariantSelection

NO_VARIANT = VariantSelection()
LARGE = VariantSelection.of({"size": "L"})


def _cart() -> Cart:
    return Cart(session_id="s1")


class TestClamp:

    @pytest.mark.parametrize(
        "requested, stock, expected",
        [(3, 5, 3), (7, 5, 5), (0, 5, 0), (-1, 5, 0), (3, 0, 0)],
    )
    def test_clamp_quantity(self, requested, stock, expected):
        assert clamp_quantity(requested, stock) == expected


class TestCartAdd:

    def test_add_creates_line(self):
        cart = _cart()
        line = cart.add("A", Quantity(2), NO_VARIANT, stock=5)
        assert line.quantity.value == 2
        assert len(cart.lines) == 1

    def test_same_key_merges(self):
        cart = _cart()
        cart.add("A", Quantity(2), LARGE, stock=10)
        cart.add("A", Quantity(3), VariantSelection.of({"size": "L"}), stock=10)
        assert len(cart.lines) == 1
        assert cart.lines[0].quantity.value == 5

    def test_different_variant_is_separate_line(self):
        cart = _cart()
        cart.add("A", Quantity(1), LARGE, stock=10)
        cart.add("A", Quantity(1), NO_VARIANT, stock=10)
        assert len(cart.lines) == 2

    def test_merged_sum_is_clamped(self):
        cart = _cart()
        cart.add("A", Quantity(3), NO_VARIANT, stock=4)
        line = cart.add("A", Quantity(3), NO_VARIANT, stock=4)
        assert line.quantity.value == 4

    def test_out_of_stock_is_not_added(self):
        cart = _cart()
        assert cart.add("A", Quantity(1), NO_VARIANT, stock=0) is None
        assert cart.is_empty

    def test_out_of_stock_removes_existing_line(self):
        cart = _cart()
        cart.add("A", Quantity(2), NO_VARIANT, stock=5)
        assert cart.add("A", Quantity(1), NO_VARIANT, stock=0) is None
        assert cart.is_empty

    def test_lines_keep_insertion_order(self):
        cart = _cart()
        for pid in ("C", "A", "B"):
            cart.add(pid, Quantity(1), NO_VARIANT, stock=5)
        assert [line.product_id for line in cart.lines] == ["C", "A", "B"]


class TestCartSetQuantityAndRemove:

    def test_set_quantity_clamps(self):
        cart = _cart()
        cart.add("A", Quantity(1), NO_VARIANT, stock=5)
        line = cart.set_quantity(("A", NO_VARIANT), 9, stock=5)
        assert line.quantity.value == 5

    def test_set_quantity_zero_removes(self):
        cart = _cart()
        cart.add("A", Quantity(1), NO_VARIANT, stock=5)
        assert cart.set_quantity(("A", NO_VARIANT), 0, stock=5) is None
        assert cart.is_empty

    def test_remove_absent_line_is_noop(self):
        cart = _cart()
        assert cart.remove(("A", NO_VARIANT)) is False

    def test_clear(self):
        cart = _cart()
        cart.add("A", Quantity(1), NO_VARIANT, stock=5)
        cart.clear()
        assert cart.is_empty


class TestClampProduct:

    def test_stock_drop_clamps_lines(self):
        cart = _cart()
        cart.add("A", Quantity(3), NO_VARIANT, stock=5)
        assert cart.clamp_product("A", 2) is True
        assert cart.lines[0].quantity.value == 2

    def test_clamp_applies_to_every_variant_of_product(self):
        cart = _cart()
        cart.add("A", Quantity(3), NO_VARIANT, stock=5)
        cart.add("A", Quantity(4), LARGE, stock=5)
        cart.clamp_product("A", 2)
        assert [line.quantity.value for line in cart.lines] == [2, 2]

    def test_stock_increase_changes_nothing(self):
        cart = _cart()
        cart.add("A", Quantity(3), NO_VARIANT, stock=5)
        assert cart.clamp_product("A", 50) is False
        assert cart.lines[0].quantity.value == 3

    def test_zero_stock_removes_lines(self):
        cart = _cart()
        cart.add("A", Quantity(3), NO_VARIANT, stock=5)
        cart.add("B", Quantity(1), NO_VARIANT, stock=5)
        cart.clamp_product("A", 0)
        assert cart.product_ids == ["B"]

    def test_deleted_product_removes_lines(self):
        cart = _cart()
        cart.add("A", Quantity(3), NO_VARIANT, stock=5)
        assert cart.clamp_product("A", None) is True
        assert cart.is_empty

    def test_item_count(self):
        cart = _cart()
        cart.add("A", Quantity(3), NO_VARIANT, stock=5)
        cart.add("B", Quantity(2), NO_VARIANT, stock=5)
        assert cart.item_count == 5
