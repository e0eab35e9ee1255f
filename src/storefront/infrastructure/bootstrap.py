"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from storefront.application.session import ShopperSession
from storefront.infrastructure.catalog_timeout import TimeoutCatalogReader
from storefront.infrastructure.config import Settings
from storefront.infrastructure.persistence.json_cart_repository import (
    JsonCartRepository,
)
from storefront.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from storefront.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)


def product_repository(settings: Settings) -> JsonProductRepository:
    return JsonProductRepository(settings.products_file)


def cart_repository(settings: Settings) -> JsonCartRepository:
    return JsonCartRepository(settings.carts_file)


def order_repository(settings: Settings) -> JsonOrderRepository:
    return JsonOrderRepository(settings.orders_file)


def catalog_reader(settings: Settings) -> TimeoutCatalogReader:
    return TimeoutCatalogReader(product_repository(settings), settings.catalog_timeout)


def shopper_session(settings: Settings, session_id: str) -> ShopperSession:
    """Build a session whose catalog reads are bounded by the configured timeout."""
    return ShopperSession(
        session_id=session_id,
        cart_repo=cart_repository(settings),
        order_repo=order_repository(settings),
        catalog=catalog_reader(settings),
    )
