"""Application service: Show Order use case (query).

Resolves a stored order into its display form.  Product names, images and
descriptions are looked up in the live catalog; prices and the total are
the ones captured at checkout.  A product that is gone (or a catalog that
cannot be reached) only costs the display metadata.
"""

from __future__ import annotations

import structlog

from storefront.application.dto import OrderDTO, order_to_dto
from storefront.domain.exceptions import EntityNotFoundError, LoadError
from storefront.domain.model.product import Product
from storefront.domain.repository.catalog_reader import CatalogReader
from storefront.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository, catalog: CatalogReader) -> None:
        self._order_repo = order_repo
        self._catalog = catalog

    def handle(self, order_id: int) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")

        products: dict[str, Product | None] = {}
        for line in order.lines:
            if line.product_id in products:
                continue
            try:
                products[line.product_id] = self._catalog.get(line.product_id)
            except LoadError as exc:
                logger.warning(
                    "Display metadata unavailable",
                    order_id=order_id,
                    product_id=line.product_id,
                    reason=exc.reason,
                )
                products[line.product_id] = None
        return order_to_dto(order, products)
