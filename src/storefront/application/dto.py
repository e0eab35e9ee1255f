"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.  Monetary fields are
pre-formatted with exactly two fractional digits (e.g. ``"12.50"``).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from storefront.domain.model.order import Order
from storefront.domain.model.product import Product

# Shown in place of display metadata for products no longer in the catalog.
PLACEHOLDER_NAME = "Unavailable product"


@dataclass(frozen=True)
class CartLineDTO:
    """Output: a single cart line, priced at the live catalog price."""

    product_id: str
    product_name: str
    variants: str  # e.g. "color=Green, size=L"
    quantity: int
    unit_price: str
    line_total: str
    available: bool = True


@dataclass(frozen=True)
class CartDTO:
    session_id: str
    lines: list[CartLineDTO]
    subtotal: str
    item_count: int


@dataclass(frozen=True)
class OrderLineDTO:
    """Output: a single order line as displayed to the user."""

    product_id: str
    product_name: str
    image: str
    description: str
    variants: str
    quantity: int
    unit_price: str  # captured at checkout
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: int
    session_id: str
    lines: list[OrderLineDTO]
    total: str
    currency: str
    created_at: str


def order_to_dto(order: Order, products: Mapping[str, Product | None]) -> OrderDTO:
    """Map an order to its display form.

    *products* supplies live display metadata only; prices and totals
    always come from the order itself.
    """
    lines = []
    for line in order.lines:
        product = products.get(line.product_id)
        lines.append(
            OrderLineDTO(
                product_id=line.product_id,
                product_name=product.name if product else PLACEHOLDER_NAME,
                image=product.image if product else "",
                description=product.description if product else "",
                variants=str(line.variants),
                quantity=line.quantity.value,
                unit_price=line.unit_price.to_fixed(),
                line_total=line.line_total.to_fixed(),
            )
        )
    total = order.total
    return OrderDTO(
        id=order.id,
        session_id=order.session_id,
        lines=lines,
        total=total.to_fixed(),
        currency=total.currency,
        created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
    )
