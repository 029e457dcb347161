"""Application service: Toggle Product use case (put on / take off sale)."""

from __future__ import annotations

import logging

from storefront.domain.model.product import Product
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.stock_ledger import StockLedger

logger = logging.getLogger(__name__)


class ToggleProductHandler:

    def __init__(self, product_repo: ProductRepository, stock_ledger: StockLedger) -> None:
        self._product_repo = product_repo
        self._stock_ledger = stock_ledger

    def handle(self, product_id: int) -> Product:
        with self._stock_ledger.locked(product_id) as product:
            active = product.toggle_active()
            self._product_repo.save(product)
        logger.info("Product #%s is now %s", product_id, "active" if active else "inactive")
        return product
