"""JSON-file-backed implementation of ProductRepository.

Also the catalog's change feed for this process: every save and delete
is published to subscribers after it has been written.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from pathlib import Path

from storefront.domain.exceptions import LoadError, ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.catalog_reader import (
    ChangeCallback,
    ChangeFeed,
    Subscription,
)
from storefront.domain.repository.product_repository import ProductRepository
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path, empty=[])
        self._feed = ChangeFeed()

    # --- CatalogReader interface ----------------------------------------------

    def get(self, product_id: str) -> Product | None:
        return self._load().get(product_id)

    def subscribe(self, product_id: str, on_change: ChangeCallback) -> Subscription:
        return self._feed.subscribe(product_id, on_change)

    # --- ProductRepository interface ------------------------------------------

    def get_by_name(self, name: str) -> Product | None:
        for product in self._load().values():
            if product.name.lower() == name.lower():
                return product
        return None

    def list_all(self) -> list[Product]:
        return list(self._load().values())

    def save(self, product: Product) -> None:
        products = self._load()
        products[product.id] = product
        self._persist(products)
        self._feed.publish(product.id, product)

    def delete(self, product_id: str) -> bool:
        products = self._load()
        if products.pop(product_id, None) is None:
            return False
        self._persist(products)
        self._feed.publish(product_id, None)
        return True

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> dict[str, Product]:
        try:
            return {item["id"]: self._to_domain(item) for item in self._file.load()}
        except (KeyError, TypeError, InvalidOperation, ValidationError) as exc:
            raise LoadError(f"{self._file.path.name}: malformed record ({exc})") from exc

    def _persist(self, products: dict[str, Product]) -> None:
        self._file.persist([self._to_raw(p) for p in products.values()])

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "category": product.category,
            "price": str(product.price.amount),
            "currency": product.price.currency,
            "stock": product.stock,
            "variants": product.variants,
            "image": product.image,
            "description": product.description,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            name=raw["name"],
            price=Money(Decimal(raw["price"]), raw.get("currency", "USD")),
            stock=raw.get("stock", 0),
            category=raw.get("category", ""),
            variants={axis: list(values) for axis, values in raw.get("variants", {}).items()},
            image=raw.get("image", ""),
            description=raw.get("description", ""),
        )
