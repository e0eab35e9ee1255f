"""Product aggregate.

Products live independently of carts and orders. They have their own
lifecycle: prices and stock change, products are added and removed from
the catalog. Carts and orders only ever hold a product's ID.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from storefront.domain.exceptions import InvalidVariantSelectionError, ValidationError
from storefront.domain.model.value_objects import Money, VariantSelection


@dataclass
class Product:
    """A product in the catalog.

    Invariants:
    - ``price`` is never negative (enforced by Money)
    - ``stock`` is never negative
    """

    id: str
    name: str
    price: Money
    stock: int = 0
    category: str = ""
    variants: dict[str, list[str]] = field(default_factory=dict)
    image: str = ""
    description: str = ""

    def __post_init__(self) -> None:
        _check_stock(self.stock)

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        This does NOT affect any existing orders because orders
        capture a price snapshot at checkout time.
        """
        self.price = new_price

    def set_stock(self, stock: int) -> None:
        _check_stock(stock)
        self.stock = stock

    def validate_selection(self, selection: VariantSelection) -> None:
        """Raise unless every chosen value is one of this product's options.

        Axes may be left unchosen; an axis the product does not offer, or a
        value outside the axis's options, is rejected.
        """
        for axis, value in selection.choices:
            options = self.variants.get(axis)
            if options is None:
                raise InvalidVariantSelectionError(
                    f"{self.name} has no '{axis}' option"
                )
            if value not in options:
                raise InvalidVariantSelectionError(
                    f"'{value}' is not a valid {axis} for {self.name} "
                    f"(choose from {', '.join(options)})"
                )


def _check_stock(stock: int) -> None:
    if isinstance(stock, bool) or not isinstance(stock, int):
        raise ValidationError(f"Stock must be an integer, got {type(stock).__name__}")
    if stock < 0:
        raise ValidationError(f"Stock cannot be negative, got {stock}")
