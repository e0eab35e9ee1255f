"""Application service: Checkout use case.

Turns a shopper's cart into an immutable Order.  Uses the same two-phase
approach as every other cross-aggregate operation here:

  Phase 1, read: fetch the live record of every product in the cart.
            A catalog failure (LoadError, including a timeout) aborts
            before anything is touched.
  Phase 2, reconcile and commit: re-clamp the cart against those
            records, capture current prices into OrderLines, persist the
            emptied cart, then the order.  If the order cannot be stored
            the re-clamped lines are put back.

Either an order exists and the cart is empty, or no order exists and the
cart holds its (possibly re-clamped) lines for the shopper to retry.
"""

from __future__ import annotations

import structlog

from storefront.application.cart_store import CartStore
from storefront.application.dto import OrderDTO, order_to_dto
from storefront.domain.exceptions import EmptyCartError
from storefront.domain.model.order import Order, OrderLine
from storefront.domain.repository.catalog_reader import CatalogReader
from storefront.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)


class CheckoutHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        catalog: CatalogReader,
    ) -> None:
        self._order_repo = order_repo
        self._catalog = catalog

    def handle(self, store: CartStore) -> OrderDTO:
        with store.serialized():
            cart = store.cart
            if cart.is_empty:
                raise EmptyCartError("Cart is empty")

            # Phase 1: fresh catalog reads, no mutation yet
            products = {pid: self._catalog.get(pid) for pid in cart.product_ids}

            # Phase 2: re-clamp against what we just read
            store.reconcile_with(products)
            if cart.is_empty:
                raise EmptyCartError("Nothing left in the cart after checking stock")

            order_lines: list[OrderLine] = []
            for line in cart.lines:
                product = products[line.product_id]
                product.validate_selection(line.variants)
                order_lines.append(
                    OrderLine(
                        product_id=line.product_id,
                        quantity=line.quantity,
                        unit_price=product.price,  # <-- price snapshot
                        variants=line.variants,
                    )
                )

            order = Order.create(
                order_id=self._order_repo.next_id(),
                session_id=cart.session_id,
                lines=order_lines,
            )

            # cart is saved empty before the order is written
            reclamped = store.lines
            store.clear()
            try:
                self._order_repo.add(order)
            except Exception:
                store.restore(reclamped)
                raise

        logger.info(
            "Order placed",
            order_id=order.id,
            session_id=order.session_id,
            lines=len(order.lines),
            total=order.total.to_fixed(),
        )
        return order_to_dto(order, products)
