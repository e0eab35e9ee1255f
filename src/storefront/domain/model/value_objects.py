"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Mapping

from storefront.domain.exceptions import InvalidQuantityError, ValidationError

_CENT = Decimal("0.01")


@dataclass(frozen=True)
class Money:
    """Monetary amount with currency.

    Uses Decimal to avoid floating-point rounding errors that would be
    unacceptable in financial calculations.
    """

    amount: Decimal
    currency: str = "USD"

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise ValidationError(f"Money amount must be finite, got {self.amount}")
        if self.amount < Decimal("0"):
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, factor: int) -> Money:
        if isinstance(factor, bool) or not isinstance(factor, int):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(self.amount * factor, self.currency)

    def __lt__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount < other.amount

    def __le__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount <= other.amount

    def __gt__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount > other.amount

    def __ge__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount >= other.amount

    # --- Display --------------------------------------------------------------

    def to_fixed(self) -> str:
        """Amount with exactly two fractional digits, e.g. ``"12.50"``."""
        return str(self.amount.quantize(_CENT, rounding=ROUND_HALF_UP))

    def __str__(self) -> str:
        return f"${self.to_fixed()}"

    # --- Internal helpers -----------------------------------------------------

    def _assert_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValidationError(
                f"Cannot combine {self.currency} with {other.currency}"
            )

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def zero(currency: str = "USD") -> Money:
        return Money(Decimal("0.00"), currency)

    @staticmethod
    def of(amount: str | float | int | Decimal, currency: str = "USD") -> Money:
        """Convenient factory that coerces to Decimal safely."""
        try:
            return Money(Decimal(str(amount)), currency)
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity.

    Enforces the invariant that a cart or order line can never hold zero
    or negative items.
    """

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise InvalidQuantityError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise InvalidQuantityError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)


def parse_quantity(raw: object) -> int:
    """Coerce user input to an integer quantity (may be zero or negative).

    Accepts ints, integral floats/Decimals and numeric strings.  Anything
    non-numeric, fractional or non-finite raises InvalidQuantityError.
    """
    if isinstance(raw, bool):
        raise InvalidQuantityError(f"Quantity must be a number, got {raw!r}")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str):
        raw = raw.strip()
    if not isinstance(raw, (str, float, Decimal)):
        raise InvalidQuantityError(f"Quantity must be a number, got {raw!r}")
    try:
        number = Decimal(str(raw))
    except (InvalidOperation, ValueError) as exc:
        raise InvalidQuantityError(f"Quantity must be a number, got {raw!r}") from exc
    if not number.is_finite():
        raise InvalidQuantityError(f"Quantity must be finite, got {raw!r}")
    if number != number.to_integral_value():
        raise InvalidQuantityError(f"Quantity must be a whole number, got {raw!r}")
    return int(number)


@dataclass(frozen=True)
class VariantSelection:
    """The chosen value for each variant axis, e.g. ``size=L, color=Green``.

    Stored as sorted pairs so two selections made in a different order
    compare (and hash) equal.
    """

    choices: tuple[tuple[str, str], ...] = ()

    def __post_init__(self) -> None:
        axes = [axis for axis, _ in self.choices]
        if len(axes) != len(set(axes)):
            raise ValidationError("A variant axis can only be chosen once")
        object.__setattr__(self, "choices", tuple(sorted(self.choices)))

    @staticmethod
    def of(mapping: Mapping[str, str] | None = None) -> VariantSelection:
        return VariantSelection(tuple((mapping or {}).items()))

    def as_dict(self) -> dict[str, str]:
        return dict(self.choices)

    def __bool__(self) -> bool:
        return bool(self.choices)

    def __str__(self) -> str:
        return ", ".join(f"{axis}={value}" for axis, value in self.choices)
