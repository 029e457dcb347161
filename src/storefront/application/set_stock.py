"""Application service: Set Stock use case (administrative override)."""

from __future__ import annotations

from storefront.domain.service.stock_ledger import StockLedger


class SetStockHandler:

    def __init__(self, stock_ledger: StockLedger) -> None:
        self._stock_ledger = stock_ledger

    def handle(self, product_id: int, quantity: int) -> int:
        """Set the absolute stock level for a product and return it."""
        return self._stock_ledger.set_absolute(product_id, quantity)
