"""Application service: the shopper's Cart Store.

Holds one session's Cart and keeps every line consistent with the live
catalog:

- ``add_to_cart`` / ``update_cart_quantity`` read the product's current
  stock and clamp before storing;
- ``reconcile_with_catalog`` re-clamps existing lines, and is what the
  catalog change subscription calls when stock moves underneath the cart.

Every change is persisted through the CartRepository and then reported to
observers.  A failed save rolls the in-memory cart back, so the store never
holds state that a reload would not reproduce.
"""

from __future__ import annotations

import copy
import threading
from contextlib import contextmanager
from typing import Callable, Iterator, Mapping

import structlog

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.cart import Cart, CartLine, LineKey
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import (
    Quantity,
    VariantSelection,
    parse_quantity,
)
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.catalog_reader import CatalogReader, Subscription

logger = structlog.get_logger(__name__)

CartObserver = Callable[[Cart], None]


class CartStore:

    def __init__(
        self,
        session_id: str,
        cart_repo: CartRepository,
        catalog: CatalogReader,
    ) -> None:
        self._cart_repo = cart_repo
        self._catalog = catalog
        self._cart = cart_repo.get(session_id) or Cart(session_id=session_id)
        self._lock = threading.RLock()
        self._observers: list[CartObserver] = []
        self._subscriptions: dict[str, Subscription] = {}
        self._watching = False

    # --- Queries --------------------------------------------------------------

    @property
    def session_id(self) -> str:
        return self._cart.session_id

    @property
    def cart(self) -> Cart:
        return self._cart

    @property
    def lines(self) -> list[CartLine]:
        return list(self._cart.lines)

    @property
    def watched_products(self) -> list[str]:
        return list(self._subscriptions)

    # --- Mutations ------------------------------------------------------------

    def add_to_cart(
        self,
        product_id: str,
        quantity: int,
        variants: Mapping[str, str] | VariantSelection | None = None,
    ) -> CartLine | None:
        """Add units of a product, merging with an existing line.

        The resulting quantity is clamped to the product's live stock;
        returns the line, or None if nothing could be added.
        """
        qty = Quantity(quantity)
        selection = (
            variants
            if isinstance(variants, VariantSelection)
            else VariantSelection.of(variants)
        )

        with self._lock:
            product = self._catalog.get(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product '{product_id}' not found")
            product.validate_selection(selection)

            existing = self._cart.find((product_id, selection))
            requested = qty.value + (existing.quantity.value if existing else 0)

            before = self._begin()
            line = self._cart.add(product_id, qty, selection, product.stock)
            self._commit(before)

        if line is None:
            logger.info("Product out of stock, nothing added", product_id=product_id)
        elif line.quantity.value < requested:
            logger.info(
                "Cart line capped at available stock",
                product_id=product_id,
                requested=requested,
                quantity=line.quantity.value,
            )
        return line

    def update_cart_quantity(
        self, line: CartLine | LineKey, new_quantity: object
    ) -> CartLine | None:
        """Set a line's quantity; zero or less removes the line (a no-op if absent).

        Input is validated before anything is touched: non-numeric,
        fractional or non-finite values raise InvalidQuantityError.
        """
        requested = parse_quantity(new_quantity)
        key = line.key if isinstance(line, CartLine) else line

        with self._lock:
            if requested <= 0:
                self.remove_from_cart(key)
                return None

            if self._cart.find(key) is None:
                raise EntityNotFoundError(f"Product '{key[0]}' is not in the cart")

            product = self._catalog.get(key[0])
            before = self._begin()
            if product is None:
                logger.info("Product no longer in catalog, line removed", product_id=key[0])
                self._cart.remove(key)
                result = None
            else:
                result = self._cart.set_quantity(key, requested, product.stock)
            self._commit(before)
            return result

    def remove_from_cart(self, line: CartLine | LineKey) -> None:
        """Remove a line.  Removing a line that is not there is a no-op."""
        key = line.key if isinstance(line, CartLine) else line
        with self._lock:
            before = self._begin()
            self._cart.remove(key)
            self._commit(before)

    def clear(self) -> None:
        with self._lock:
            before = self._begin()
            self._cart.clear()
            self._commit(before)

    def restore(self, lines: list[CartLine]) -> None:
        """Replace the cart's lines wholesale, e.g. to undo a clear."""
        with self._lock:
            before = self._begin()
            self._cart.lines = copy.deepcopy(list(lines))
            self._commit(before)

    def reconcile_with_catalog(self, product_id: str | None = None) -> bool:
        """Re-read live stock and re-clamp the affected lines.

        With no *product_id*, every referenced product is checked.
        Returns True if the cart changed.
        """
        with self._lock:
            product_ids = [product_id] if product_id is not None else self._cart.product_ids
            products = {pid: self._catalog.get(pid) for pid in product_ids}
            return self.reconcile_with(products)

    def reconcile_with(self, products: Mapping[str, Product | None]) -> bool:
        """Re-clamp lines against already-fetched product records.

        A None record means the product was deleted; its lines go.
        """
        with self._lock:
            before = self._begin()
            for product_id, product in products.items():
                stock = None if product is None else product.stock
                if self._cart.clamp_product(product_id, stock):
                    logger.info(
                        "Cart reconciled with catalog",
                        session_id=self.session_id,
                        product_id=product_id,
                        stock=stock,
                        remaining_lines=len(self._cart.lines_for(product_id)),
                    )
            return self._commit(before)

    def on_catalog_change(self, product_id: str, product: Product | None) -> None:
        """Subscription callback: a referenced product was written or deleted."""
        self.reconcile_with({product_id: product})

    # --- Observers and subscriptions ------------------------------------------

    def observe(self, callback: CartObserver) -> Subscription:
        """Call *callback* with the cart after every change."""
        self._observers.append(callback)
        return Subscription(lambda: self._observers.remove(callback))

    def watch(self) -> None:
        """Subscribe to catalog changes for every product in the cart.

        Subscriptions follow the cart: products added later are watched,
        products no longer referenced are released.
        """
        with self._lock:
            self._watching = True
            self._sync_subscriptions()

    def close(self) -> None:
        with self._lock:
            self._watching = False
            for subscription in self._subscriptions.values():
                subscription.cancel()
            self._subscriptions.clear()

    @contextmanager
    def serialized(self) -> Iterator[CartStore]:
        """Hold the store's lock across several operations."""
        with self._lock:
            yield self

    def __enter__(self) -> CartStore:
        self.watch()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # --- Internal helpers -----------------------------------------------------

    def _begin(self) -> list[CartLine]:
        return copy.deepcopy(self._cart.lines)

    def _commit(self, before: list[CartLine]) -> bool:
        """Persist and notify if the cart differs from *before*."""
        if self._cart.lines == before:
            return False
        try:
            self._cart_repo.save(self._cart)
        except Exception:
            self._cart.lines = before
            raise
        self._sync_subscriptions()
        for observer in list(self._observers):
            observer(self._cart)
        return True

    def _sync_subscriptions(self) -> None:
        if not self._watching:
            return
        wanted = set(self._cart.product_ids)
        for product_id in wanted - self._subscriptions.keys():
            self._subscriptions[product_id] = self._catalog.subscribe(
                product_id, self.on_catalog_change
            )
        for product_id in set(self._subscriptions) - wanted:
            self._subscriptions.pop(product_id).cancel()
