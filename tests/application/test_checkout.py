"""Integration tests for the Checkout use case.

Uses in-memory fake repositories, no file I/O.
"""

import pytest

from storefront.application.cart_store import CartStore
from storefront.application.checkout import CheckoutHandler
from storefront.application.show_order import ShowOrderHandler
from storefront.domain.exceptions import (
    EmptyCartError,
    InvalidVariantSelectionError,
    LoadError,
)
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from tests.fakes import FakeCartRepository, FakeOrderRepository, FakeProductRepository


def _setup():
    products = [
        Product(id="A", name="Widget", price=Money.of("2.50"), stock=5),
        Product(id="B", name="Gadget", price=Money.of("5.00"), stock=10),
        Product(
            id="S",
            name="Shirt",
            price=Money.of("20.00"),
            stock=4,
            variants={"size": ["S", "M", "L"]},
        ),
    ]
    catalog = FakeProductRepository(products)
    cart_repo = FakeCartRepository()
    order_repo = FakeOrderRepository()
    store = CartStore("s1", cart_repo, catalog)
    handler = CheckoutHandler(order_repo, catalog)
    return handler, store, order_repo, catalog, cart_repo


class TestCheckoutHappyPath:

    def test_creates_order_and_clears_cart(self):
        handler, store, order_repo, _, cart_repo = _setup()
        store.add_to_cart("A", 3)
        store.add_to_cart("B", 1)

        dto = handler.handle(store)

        assert dto.total == "12.50"
        assert dto.id == 1
        assert [line.product_name for line in dto.lines] == ["Widget", "Gadget"]
        assert store.lines == []
        assert cart_repo.get("s1").lines == []
        assert order_repo.get_by_id(1).total == Money.of("12.50")

    def test_captures_price_at_checkout(self):
        handler, store, order_repo, catalog, _ = _setup()
        store.add_to_cart("A", 3)
        store.add_to_cart("B", 1)
        dto = handler.handle(store)

        catalog.set_price("A", Money.of("99.99"))
        catalog.set_price("B", Money.of("0.01"))

        saved = order_repo.get_by_id(dto.id)
        assert saved.total.to_fixed() == "12.50"
        assert ShowOrderHandler(order_repo, catalog).handle(dto.id).total == "12.50"

    def test_uses_price_current_at_checkout_not_at_add(self):
        handler, store, _, catalog, _ = _setup()
        store.add_to_cart("A", 2)
        catalog.set_price("A", Money.of("3.00"))
        dto = handler.handle(store)
        assert dto.lines[0].unit_price == "3.00"
        assert dto.total == "6.00"

    def test_keeps_variant_selection(self):
        handler, store, order_repo, _, _ = _setup()
        store.add_to_cart("S", 1, {"size": "M"})
        dto = handler.handle(store)
        line = order_repo.get_by_id(dto.id).lines[0]
        assert line.variants.as_dict() == {"size": "M"}
        assert dto.lines[0].variants == "size=M"

    def test_sequential_ids(self):
        handler, store, _, _, _ = _setup()
        store.add_to_cart("A", 1)
        first = handler.handle(store)
        store.add_to_cart("B", 1)
        second = handler.handle(store)
        assert second.id == first.id + 1


class TestCheckoutRevalidation:

    def test_stale_cart_is_reclamped_before_commit(self):
        handler, store, order_repo, catalog, _ = _setup()
        store.add_to_cart("A", 5)
        catalog._store["A"].stock = 2  # no notification reached the store

        dto = handler.handle(store)

        assert dto.lines[0].quantity == 2
        assert order_repo.get_by_id(dto.id).lines[0].quantity.value == 2

    def test_vanished_product_is_dropped(self):
        handler, store, _, catalog, _ = _setup()
        store.add_to_cart("A", 1)
        store.add_to_cart("B", 1)
        catalog._store.pop("A")

        dto = handler.handle(store)

        assert [line.product_id for line in dto.lines] == ["B"]

    def test_empty_cart_rejected(self):
        handler, store, order_repo, _, _ = _setup()
        with pytest.raises(EmptyCartError, match="empty"):
            handler.handle(store)
        assert order_repo.list_all() == []

    def test_cart_emptied_by_clamp_rejected(self):
        handler, store, order_repo, catalog, _ = _setup()
        store.add_to_cart("A", 2)
        catalog._store["A"].stock = 0

        with pytest.raises(EmptyCartError, match="after checking stock"):
            handler.handle(store)

        assert order_repo.list_all() == []
        assert store.lines == []

    def test_withdrawn_variant_blocks_checkout(self):
        handler, store, order_repo, catalog, _ = _setup()
        store.add_to_cart("S", 1, {"size": "L"})
        catalog._store["S"].variants = {"size": ["S", "M"]}

        with pytest.raises(InvalidVariantSelectionError):
            handler.handle(store)

        assert order_repo.list_all() == []
        assert len(store.lines) == 1


class TestCheckoutAtomicity:

    def test_catalog_failure_leaves_cart_untouched(self):
        handler, store, order_repo, catalog, cart_repo = _setup()
        store.add_to_cart("A", 3)
        saves = cart_repo.save_count
        catalog.unreachable = True

        with pytest.raises(LoadError) as exc_info:
            handler.handle(store)

        assert exc_info.value.retryable
        assert order_repo.list_all() == []
        assert cart_repo.save_count == saves
        assert store.lines[0].quantity.value == 3

    def test_order_store_failure_keeps_reclamped_cart(self):
        handler, store, order_repo, catalog, _ = _setup()
        store.add_to_cart("A", 5)
        catalog._store["A"].stock = 3
        order_repo.fail_adds = True

        with pytest.raises(LoadError):
            handler.handle(store)

        assert order_repo.list_all() == []
        assert store.lines[0].quantity.value == 3

    def test_retry_after_failure_succeeds(self):
        handler, store, order_repo, catalog, _ = _setup()
        store.add_to_cart("A", 1)
        catalog.unreachable = True
        with pytest.raises(LoadError):
            handler.handle(store)

        catalog.unreachable = False
        dto = handler.handle(store)
        assert order_repo.get_by_id(dto.id) is not None
        assert store.lines == []

    def test_order_store_failure_restores_persisted_cart(self):
        handler, store, order_repo, _, cart_repo = _setup()
        store.add_to_cart("A", 2)
        order_repo.fail_adds = True

        with pytest.raises(LoadError):
            handler.handle(store)

        assert [line.quantity.value for line in cart_repo.get("s1").lines] == [2]

    def test_cart_store_failure_places_no_order(self):
        handler, store, order_repo, _, cart_repo = _setup()
        store.add_to_cart("A", 2)
        cart_repo.fail_saves = True

        with pytest.raises(LoadError):
            handler.handle(store)

        assert order_repo.list_all() == []
        assert store.lines[0].quantity.value == 2

        cart_repo.fail_saves = False
        handler.handle(store)
        assert len(order_repo.list_all()) == 1
        assert cart_repo.get("s1").lines == []


class TestCheckoutLargeCart:

    def test_many_distinct_lines_check_out(self):
        catalog = FakeProductRepository([
            Product(id=str(i), name=f"Item {i}", price=Money.of("1.00"), stock=5)
            for i in range(60)
        ])
        order_repo = FakeOrderRepository()
        store = CartStore("s1", FakeCartRepository(), catalog)
        for i in range(60):
            store.add_to_cart(str(i), 1)

        dto = CheckoutHandler(order_repo, catalog).handle(store)

        assert len(dto.lines) == 60
        assert dto.total == "60.00"
        assert store.lines == []
