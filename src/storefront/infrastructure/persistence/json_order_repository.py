"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path

from storefront.domain.exceptions import LoadError, ValidationError
from storefront.domain.model.order import Order, OrderLine
from storefront.domain.model.value_objects import Money, Quantity, VariantSelection
from storefront.domain.repository.order_repository import OrderRepository
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path, empty=[])

    # --- OrderRepository interface --------------------------------------------

    def next_id(self) -> int:
        orders = self._records()
        if not orders:
            return 1
        return max(o["id"] for o in orders) + 1

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._records():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def add(self, order: Order) -> int:
        orders = self._records()
        if any(raw["id"] == order.id for raw in orders):
            raise ValidationError(f"Order #{order.id} already exists")
        orders.append(self._to_raw(order))
        self._file.persist(orders)
        return order.id

    # --- Serialization --------------------------------------------------------

    def _records(self) -> list[dict]:
        orders = self._file.load()
        if not isinstance(orders, list):
            raise LoadError(f"{self._file.path.name}: expected a list of orders")
        for raw in orders:
            if not isinstance(raw, dict) or not isinstance(raw.get("id"), int):
                raise LoadError(f"{self._file.path.name}: malformed record (missing order id)")
        return orders

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "session_id": order.session_id,
            "created_at": order.created_at.isoformat(),
            "lines": [
                {
                    "product_id": line.product_id,
                    "quantity": line.quantity.value,
                    "unit_price": str(line.unit_price.amount),
                    "currency": line.unit_price.currency,
                    "variants": line.variants.as_dict(),
                }
                for line in order.lines
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        try:
            lines = tuple(
                OrderLine(
                    product_id=i["product_id"],
                    quantity=Quantity(i["quantity"]),
                    unit_price=Money(Decimal(i["unit_price"]), i.get("currency", "USD")),
                    variants=VariantSelection.of(i.get("variants")),
                )
                for i in raw["lines"]
            )
            return Order(
                id=raw["id"],
                session_id=raw["session_id"],
                lines=lines,
                created_at=datetime.fromisoformat(raw["created_at"]),
            )
        except (KeyError, TypeError, ValueError, InvalidOperation, ValidationError) as exc:
            raise LoadError(f"order #{raw.get('id')}: malformed record ({exc})") from exc
