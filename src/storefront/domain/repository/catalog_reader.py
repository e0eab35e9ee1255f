"""Read-only view of the product catalog, with change subscriptions.

The cart and checkout only ever read the catalog.  Writes happen through
ProductRepository (admin side) and reach live carts as change
notifications delivered to subscribers.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from storefront.domain.model.product import Product

# Called with (product_id, product) after a write; product is None on delete.
ChangeCallback = Callable[[str, "Product | None"], None]


class Subscription:
    """Handle for a live subscription.  ``cancel()`` is idempotent."""

    def __init__(self, unsubscribe: Callable[[], None]) -> None:
        self._unsubscribe: Callable[[], None] | None = unsubscribe

    @property
    def active(self) -> bool:
        return self._unsubscribe is not None

    def cancel(self) -> None:
        if self._unsubscribe is not None:
            unsubscribe, self._unsubscribe = self._unsubscribe, None
            unsubscribe()

    def __enter__(self) -> Subscription:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.cancel()


class ChangeFeed:
    """Fan-out of product change notifications to per-product subscribers.

    Callbacks run synchronously, in subscription order, inside
    ``publish()`` so a write is fully reconciled before the writer
    continues.
    """

    def __init__(self) -> None:
        self._subscribers: dict[str, list[ChangeCallback]] = {}

    def subscribe(self, product_id: str, on_change: ChangeCallback) -> Subscription:
        callbacks = self._subscribers.setdefault(product_id, [])
        callbacks.append(on_change)

        def unsubscribe() -> None:
            callbacks.remove(on_change)
            if not callbacks:
                self._subscribers.pop(product_id, None)

        return Subscription(unsubscribe)

    def publish(self, product_id: str, product: Product | None) -> None:
        for callback in list(self._subscribers.get(product_id, [])):
            callback(product_id, product)

    def subscriber_count(self, product_id: str) -> int:
        return len(self._subscribers.get(product_id, []))


class CatalogReader(ABC):

    @abstractmethod
    def get(self, product_id: str) -> Product | None:
        """Return the current product record, or None if not found."""

    @abstractmethod
    def subscribe(self, product_id: str, on_change: ChangeCallback) -> Subscription:
        """Call *on_change* whenever the product is written or deleted."""

    def close(self) -> None:
        """Release whatever the reader holds.  Readers that hold nothing keep this no-op."""
