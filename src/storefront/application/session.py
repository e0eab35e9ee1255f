"""Shopper session: the explicit per-shopper context.

A session owns exactly one CartStore and the handlers that act on it.
Opening a session re-clamps the reloaded cart against the live catalog
and starts watching the referenced products; closing it releases every
subscription and closes the catalog reader the session was given.
"""

from __future__ import annotations

from storefront.application.cart_store import CartStore
from storefront.application.checkout import CheckoutHandler
from storefront.application.dto import CartDTO, OrderDTO
from storefront.application.show_cart import ShowCartHandler
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.catalog_reader import CatalogReader
from storefront.domain.repository.order_repository import OrderRepository


class ShopperSession:

    def __init__(
        self,
        session_id: str,
        cart_repo: CartRepository,
        order_repo: OrderRepository,
        catalog: CatalogReader,
    ) -> None:
        self.store = CartStore(session_id, cart_repo, catalog)
        self._catalog = catalog
        self._checkout = CheckoutHandler(order_repo, catalog)
        self._show_cart = ShowCartHandler(catalog)

    @property
    def session_id(self) -> str:
        return self.store.session_id

    def open(self) -> ShopperSession:
        self.store.reconcile_with_catalog()
        self.store.watch()
        return self

    def close(self) -> None:
        self.store.close()
        self._catalog.close()

    def checkout(self) -> OrderDTO:
        return self._checkout.handle(self.store)

    def summary(self) -> CartDTO:
        return self._show_cart.handle(self.store.cart)

    def __enter__(self) -> ShopperSession:
        return self.open()

    def __exit__(self, *exc_info: object) -> None:
        self.close()
