"""Domain service: Stock Ledger.

The ledger is the only code path that changes a product's stock quantity.
Each primitive runs load -> check -> mutate -> save while holding a lock
keyed on the product id, so two concurrent reductions of the same product
are serialised and can never together oversell. Reductions of different
products proceed in parallel.

Catalog edits that rewrite the whole product record (price, active flag,
deletion) go through ``locked()`` as well, so they can never save a stale
stock level over a reduction that committed in between.

Locks live on the ledger instance, so every handler in a process must
share one ledger (the composition root hands out a single instance).
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from storefront.domain.exceptions import ProductNotFoundError, ValidationError
from storefront.domain.model.product import Product
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.keyed_lock import KeyedLock

logger = logging.getLogger(__name__)


class StockLedger:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo
        self._product_locks = KeyedLock()

    def reduce(self, product_id: int, quantity: int) -> int:
        """Take *quantity* units out of stock and return the new level.

        Raises InsufficientStockError (leaving stock untouched) when fewer
        than *quantity* units are on hand.
        """
        _require_positive(quantity, "Stock reduction quantity")
        with self.locked(product_id) as product:
            product.take_stock(quantity)
            self._product_repo.save(product)
            logger.info(
                "Reduced stock of product %s by %s (now %s)",
                product_id, quantity, product.stock_quantity,
            )
            return product.stock_quantity

    def increase(self, product_id: int, quantity: int) -> int:
        """Return *quantity* units to stock and return the new level."""
        _require_positive(quantity, "Stock increase quantity")
        with self.locked(product_id) as product:
            product.restock(quantity)
            self._product_repo.save(product)
            logger.info(
                "Increased stock of product %s by %s (now %s)",
                product_id, quantity, product.stock_quantity,
            )
            return product.stock_quantity

    def set_absolute(self, product_id: int, quantity: int) -> int:
        """Administrative override of the stock level."""
        if quantity < 0:
            raise ValidationError("Stock quantity cannot be negative")
        with self.locked(product_id) as product:
            previous = product.stock_quantity
            product.set_stock(quantity)
            self._product_repo.save(product)
            logger.info(
                "Set stock of product %s to %s (was %s)", product_id, quantity, previous
            )
            return product.stock_quantity

    @contextmanager
    def locked(self, product_id: int) -> Iterator[Product]:
        """Hold the product's lock and yield a freshly loaded copy.

        Raises ProductNotFoundError when the product does not exist (or was
        deleted while the caller waited for the lock).
        """
        with self._product_locks.hold(product_id):
            product = self._product_repo.get_by_id(product_id)
            if product is None:
                raise ProductNotFoundError(product_id)
            yield product


def _require_positive(quantity: int, label: str) -> None:
    if quantity <= 0:
        raise ValidationError(f"{label} must be positive")
