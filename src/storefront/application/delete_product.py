"""Application service: Delete Product use case.

Orders keep their own copy of product name and price, so removing a
product from the catalog leaves order history intact. Cancelling such an
order later simply cannot return that product's stock. Product ids are
never handed out again, so that stock can never land on a newer product.
"""

from __future__ import annotations

import logging

from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.stock_ledger import StockLedger

logger = logging.getLogger(__name__)


class DeleteProductHandler:

    def __init__(self, product_repo: ProductRepository, stock_ledger: StockLedger) -> None:
        self._product_repo = product_repo
        self._stock_ledger = stock_ledger

    def handle(self, product_id: int) -> None:
        with self._stock_ledger.locked(product_id):
            self._product_repo.delete(product_id)
        logger.info("Deleted product #%s", product_id)
