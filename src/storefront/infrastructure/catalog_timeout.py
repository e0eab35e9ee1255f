"""Catalog reader decorator that bounds every read with a timeout.

A read that never resolves must not hang checkout.  Each ``get`` runs on
its own daemon thread and the caller waits at most ``timeout`` seconds
before getting a (retryable) LoadError.  An abandoned read keeps running
in the background but never holds up interpreter exit.  Subscriptions
pass straight through.
"""

from __future__ import annotations

import threading
from concurrent.futures import Future
from concurrent.futures import TimeoutError as FutureTimeoutError

import structlog

from storefront.domain.exceptions import LoadError
from storefront.domain.model.product import Product
from storefront.domain.repository.catalog_reader import (
    CatalogReader,
    ChangeCallback,
    Subscription,
)

logger = structlog.get_logger(__name__)


class TimeoutCatalogReader(CatalogReader):

    def __init__(self, inner: CatalogReader, timeout: float) -> None:
        if timeout <= 0:
            raise ValueError(f"Catalog timeout must be positive, got {timeout}")
        self._inner = inner
        self._timeout = timeout
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def get(self, product_id: str) -> Product | None:
        if self._closed:
            raise LoadError("catalog reader is closed")

        future: Future[Product | None] = Future()
        worker = threading.Thread(
            target=self._read,
            args=(product_id, future),
            name=f"catalog-read-{product_id}",
            daemon=True,
        )
        worker.start()
        try:
            return future.result(timeout=self._timeout)
        except FutureTimeoutError as exc:
            logger.warning(
                "Catalog read timed out", product_id=product_id, timeout=self._timeout
            )
            raise LoadError(
                f"catalog read for product '{product_id}' timed out "
                f"after {self._timeout:g}s"
            ) from exc
        except OSError as exc:
            raise LoadError(f"catalog unreachable: {exc}") from exc

    def subscribe(self, product_id: str, on_change: ChangeCallback) -> Subscription:
        return self._inner.subscribe(product_id, on_change)

    def close(self) -> None:
        self._closed = True
        self._inner.close()

    def _read(self, product_id: str, future: Future[Product | None]) -> None:
        if not future.set_running_or_notify_cancel():
            return
        try:
            future.set_result(self._inner.get(product_id))
        except Exception as exc:
            future.set_exception(exc)
