"""JSON-file-backed implementation of CartRepository.

The file holds one object keyed by session ID; each value is that
session's ordered list of cart lines.
"""

from __future__ import annotations

from pathlib import Path

from storefront.domain.exceptions import LoadError, ValidationError
from storefront.domain.model.cart import Cart, CartLine
from storefront.domain.model.value_objects import Quantity, VariantSelection
from storefront.domain.repository.cart_repository import CartRepository
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonCartRepository(CartRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path, empty={})

    # --- CartRepository interface ---------------------------------------------

    def get(self, session_id: str) -> Cart | None:
        raw = self._carts().get(session_id)
        if raw is None:
            return None
        return self._to_domain(session_id, raw)

    def save(self, cart: Cart) -> None:
        carts = self._carts()
        carts[cart.session_id] = self._to_raw(cart)
        self._file.persist(carts)

    # --- Serialization --------------------------------------------------------

    def _carts(self) -> dict[str, list]:
        carts = self._file.load()
        if not isinstance(carts, dict):
            raise LoadError(f"{self._file.path.name}: expected carts keyed by session")
        return carts

    @staticmethod
    def _to_raw(cart: Cart) -> list[dict]:
        return [
            {
                "product_id": line.product_id,
                "quantity": line.quantity.value,
                "variants": line.variants.as_dict(),
            }
            for line in cart.lines
        ]

    @staticmethod
    def _to_domain(session_id: str, raw: list[dict]) -> Cart:
        try:
            lines = [
                CartLine(
                    product_id=item["product_id"],
                    quantity=Quantity(item["quantity"]),
                    variants=VariantSelection.of(item.get("variants")),
                )
                for item in raw
            ]
        except (KeyError, TypeError, ValidationError) as exc:
            raise LoadError(f"cart '{session_id}': malformed record ({exc})") from exc
        return Cart(session_id=session_id, lines=lines)
