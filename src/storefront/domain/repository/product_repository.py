"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, in-memory) live in the
infrastructure layer and the tests.
"""

from __future__ import annotations

from abc import abstractmethod

from storefront.domain.model.product import Product
from storefront.domain.repository.catalog_reader import CatalogReader


class ProductRepository(CatalogReader):
    """The writable catalog.  Every save/delete notifies subscribers."""

    @abstractmethod
    def get_by_name(self, name: str) -> Product | None:
        """Return a product by its exact name (case-insensitive), or None."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product."""

    @abstractmethod
    def delete(self, product_id: str) -> bool:
        """Remove a product.  Returns False if it did not exist."""
