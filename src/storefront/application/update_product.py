"""Application service: Update Product use case (admin).

Saving the product notifies every live cart that references it, so a
stock cut is reconciled into those carts immediately.  Existing orders
are never affected; they captured their prices at checkout.
"""

from __future__ import annotations

from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        product_id: str,
        *,
        price: str | None = None,
        stock: int | None = None,
        name: str | None = None,
        category: str | None = None,
        variants: dict[str, list[str]] | None = None,
        image: str | None = None,
        description: str | None = None,
    ) -> Product:
        product = self._product_repo.get(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        # Validate every input before touching the product
        new_price = Money.of(price) if price is not None else None
        if name is not None and not name.strip():
            raise ValidationError("Product name is required")
        if stock is not None and (isinstance(stock, bool) or not isinstance(stock, int) or stock < 0):
            raise ValidationError(f"Stock must be a non-negative integer, got {stock!r}")

        if name is not None:
            product.name = name.strip()
        if new_price is not None:
            product.update_price(new_price)
        if stock is not None:
            product.set_stock(stock)
        if category is not None:
            product.category = category
        if variants is not None:
            product.variants = dict(variants)
        if image is not None:
            product.image = image
        if description is not None:
            product.description = description

        self._product_repo.save(product)
        return product
