"""Cart aggregate: one shopper's selection of products and quantities.

The Cart owns its lines.  It enforces the stock clamp on every change:
a line's quantity is always within ``[1, stock]`` for the stock it was
last checked against, and a line that would drop to zero is removed
rather than kept.  Looking up live stock is the caller's job; the Cart
only ever sees the numbers it is given.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from storefront.domain.model.value_objects import Quantity, VariantSelection

LineKey = tuple[str, VariantSelection]


def clamp_quantity(requested: int, stock: int) -> int:
    """Clamp *requested* to ``[0, stock]``."""
    return max(0, min(requested, stock))


@dataclass
class CartLine:
    product_id: str
    quantity: Quantity
    variants: VariantSelection = field(default_factory=VariantSelection)

    @property
    def key(self) -> LineKey:
        """Lines with the same key are the same line."""
        return (self.product_id, self.variants)


@dataclass
class Cart:
    """Aggregate root for a shopper's cart.

    Invariants:
    - no two lines share a key
    - no line has a quantity below 1
    - no line has a quantity above the stock it was last clamped to
    """

    session_id: str
    lines: list[CartLine] = field(default_factory=list)

    # --- Mutations ------------------------------------------------------------

    def add(
        self,
        product_id: str,
        quantity: Quantity,
        variants: VariantSelection,
        stock: int,
    ) -> CartLine | None:
        """Add *quantity* to the line for this key, creating it if needed.

        Returns the resulting line, or None if the clamp left nothing.
        """
        key = (product_id, variants)
        existing = self.find(key)
        requested = quantity.value + (existing.quantity.value if existing else 0)
        return self._put(key, requested, stock)

    def set_quantity(self, key: LineKey, requested: int, stock: int) -> CartLine | None:
        """Set a line's quantity; a clamped result of zero removes the line."""
        return self._put(key, requested, stock)

    def remove(self, key: LineKey) -> bool:
        """Remove the line with *key*.  Returns False if it was not there."""
        for i, line in enumerate(self.lines):
            if line.key == key:
                del self.lines[i]
                return True
        return False

    def clamp_product(self, product_id: str, stock: int | None) -> bool:
        """Re-clamp every line of *product_id* to *stock*.

        ``stock=None`` means the product no longer exists and its lines
        are dropped.  Returns True if anything changed.
        """
        changed = False
        for line in self.lines_for(product_id):
            before = line.quantity.value
            after = 0 if stock is None else clamp_quantity(before, stock)
            if after == before:
                continue
            self._put(line.key, after, after)
            changed = True
        return changed

    def clear(self) -> None:
        self.lines.clear()

    # --- Queries --------------------------------------------------------------

    def find(self, key: LineKey) -> CartLine | None:
        for line in self.lines:
            if line.key == key:
                return line
        return None

    def lines_for(self, product_id: str) -> list[CartLine]:
        return [line for line in self.lines if line.product_id == product_id]

    @property
    def product_ids(self) -> list[str]:
        """Distinct referenced product IDs, in cart order."""
        return list(dict.fromkeys(line.product_id for line in self.lines))

    @property
    def item_count(self) -> int:
        return sum(line.quantity.value for line in self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.lines

    # --- Internal helpers -----------------------------------------------------

    def _put(self, key: LineKey, requested: int, stock: int) -> CartLine | None:
        clamped = clamp_quantity(requested, stock)
        if clamped <= 0:
            self.remove(key)
            return None

        existing = self.find(key)
        if existing is not None:
            existing.quantity = Quantity(clamped)
            return existing

        product_id, variants = key
        line = CartLine(product_id=product_id, quantity=Quantity(clamped), variants=variants)
        self.lines.append(line)
        return line
