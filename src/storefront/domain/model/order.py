"""Order aggregate: the immutable record of a checkout.

An Order is created once, from the lines that survived checkout, and is
never changed afterwards.  Each line carries the unit price captured at
checkout, so the order's monetary facts do not depend on the catalog.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money, Quantity, VariantSelection


@dataclass(frozen=True)
class OrderLine:
    """Captures the price of a product at checkout time.

    ``product_id`` is a display-only link back to the catalog; the
    monetary truth is ``unit_price``.
    """

    product_id: str
    quantity: Quantity
    unit_price: Money  # locked at checkout time
    variants: VariantSelection = field(default_factory=VariantSelection)

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass(frozen=True)
class Order:
    """Aggregate root for placed orders.

    Use the ``Order.create()`` factory for new orders; it enforces all
    business rules.  The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without re-validating.
    """

    id: int
    session_id: str
    lines: tuple[OrderLine, ...]
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(order_id: int, session_id: str, lines: list[OrderLine]) -> Order:
        """Create a new order, enforcing all invariants."""
        if not lines:
            raise ValidationError("Order must contain at least one item")

        currencies = {line.unit_price.currency for line in lines}
        if len(currencies) > 1:
            raise ValidationError(
                f"Order cannot mix currencies ({', '.join(sorted(currencies))})"
            )

        return Order(id=order_id, session_id=session_id, lines=tuple(lines))

    # --- Computed properties --------------------------------------------------

    @property
    def total(self) -> Money:
        result = Money.zero(self.lines[0].unit_price.currency if self.lines else "USD")
        for line in self.lines:
            result = result + line.line_total
        return result

    @property
    def item_count(self) -> int:
        return sum(line.quantity.value for line in self.lines)
