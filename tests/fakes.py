"""In-memory fake repositories for testing.

These implement the same abstract interfaces as the JSON repositories
but keep everything in a dict. No file I/O, no side effects.
"""

from __future__ import annotations

import copy

from storefront.domain.exceptions import LoadError, ValidationError
from storefront.domain.model.cart import Cart
from storefront.domain.model.order import Order
from storefront.domain.model.product import Product
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.catalog_reader import (
    ChangeCallback,
    ChangeFeed,
    Subscription,
)
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository


class FakeProductRepository(ProductRepository):

    def __init__(self, products: list[Product] | None = None) -> None:
        self._store: dict[str, Product] = {}
        self._feed = ChangeFeed()
        self.unreachable = False
        for p in products or []:
            self._store[p.id] = p

    def get(self, product_id: str) -> Product | None:
        if self.unreachable:
            raise LoadError("catalog offline")
        product = self._store.get(product_id)
        return copy.deepcopy(product)

    def subscribe(self, product_id: str, on_change: ChangeCallback) -> Subscription:
        return self._feed.subscribe(product_id, on_change)

    def subscriber_count(self, product_id: str) -> int:
        return self._feed.subscriber_count(product_id)

    def get_by_name(self, name: str) -> Product | None:
        for p in self._store.values():
            if p.name.lower() == name.lower():
                return copy.deepcopy(p)
        return None

    def list_all(self) -> list[Product]:
        return [copy.deepcopy(p) for p in self._store.values()]

    def save(self, product: Product) -> None:
        self._store[product.id] = copy.deepcopy(product)
        self._feed.publish(product.id, copy.deepcopy(product))

    def delete(self, product_id: str) -> bool:
        if self._store.pop(product_id, None) is None:
            return False
        self._feed.publish(product_id, None)
        return True

    # --- Test helpers ---------------------------------------------------------

    def set_stock(self, product_id: str, stock: int) -> None:
        """Simulate an admin (or another buyer) changing stock."""
        product = self.get(product_id)
        product.set_stock(stock)
        self.save(product)

    def set_price(self, product_id: str, price) -> None:
        product = self.get(product_id)
        product.update_price(price)
        self.save(product)


class FakeCartRepository(CartRepository):

    def __init__(self) -> None:
        self._store: dict[str, Cart] = {}
        self.save_count = 0
        self.fail_saves = False

    def get(self, session_id: str) -> Cart | None:
        cart = self._store.get(session_id)
        return copy.deepcopy(cart)

    def save(self, cart: Cart) -> None:
        if self.fail_saves:
            raise LoadError("cart store offline")
        self._store[cart.session_id] = copy.deepcopy(cart)
        self.save_count += 1


class FakeOrderRepository(OrderRepository):

    def __init__(self) -> None:
        self._store: dict[int, Order] = {}
        self._next_id = 1
        self.fail_adds = False

    def next_id(self) -> int:
        return self._next_id

    def get_by_id(self, order_id: int) -> Order | None:
        return self._store.get(order_id)

    def add(self, order: Order) -> int:
        if self.fail_adds:
            raise LoadError("order store offline")
        if order.id in self._store:
            raise ValidationError(f"Order #{order.id} already exists")
        self._store[order.id] = order
        self._next_id = order.id + 1
        return order.id

    def list_all(self) -> list[Order]:
        return list(self._store.values())
