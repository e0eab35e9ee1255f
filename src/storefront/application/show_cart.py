"""Application service: Show Cart use case (query)."""

from __future__ import annotations

from storefront.application.dto import PLACEHOLDER_NAME, CartDTO, CartLineDTO
from storefront.domain.model.cart import Cart
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.catalog_reader import CatalogReader


class ShowCartHandler:

    def __init__(self, catalog: CatalogReader) -> None:
        self._catalog = catalog

    def handle(self, cart: Cart) -> CartDTO:
        """Price the cart at live catalog prices, for display only."""
        lines: list[CartLineDTO] = []
        subtotal: Money | None = None

        for line in cart.lines:
            product = self._catalog.get(line.product_id)
            if product is None:
                lines.append(
                    CartLineDTO(
                        product_id=line.product_id,
                        product_name=PLACEHOLDER_NAME,
                        variants=str(line.variants),
                        quantity=line.quantity.value,
                        unit_price="0.00",
                        line_total="0.00",
                        available=False,
                    )
                )
                continue

            line_total = product.price * line.quantity.value
            subtotal = line_total if subtotal is None else subtotal + line_total
            lines.append(
                CartLineDTO(
                    product_id=line.product_id,
                    product_name=product.name,
                    variants=str(line.variants),
                    quantity=line.quantity.value,
                    unit_price=product.price.to_fixed(),
                    line_total=line_total.to_fixed(),
                )
            )

        return CartDTO(
            session_id=cart.session_id,
            lines=lines,
            subtotal=(subtotal or Money.zero()).to_fixed(),
            item_count=cart.item_count,
        )
