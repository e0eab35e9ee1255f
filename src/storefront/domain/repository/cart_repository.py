"""Abstract repository for Cart aggregate, keyed by shopper session."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.cart import Cart


class CartRepository(ABC):

    @abstractmethod
    def get(self, session_id: str) -> Cart | None:
        """Return the saved cart for a session, or None if it has none."""

    @abstractmethod
    def save(self, cart: Cart) -> None:
        """Persist the cart, replacing any previous state for its session."""
