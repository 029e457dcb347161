"""Application service: Update Product use case."""

from __future__ import annotations

from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.stock_ledger import StockLedger


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository, stock_ledger: StockLedger) -> None:
        self._product_repo = product_repo
        self._stock_ledger = stock_ledger

    def handle(self, product_id: int, new_price: str) -> Product:
        """Update a product's price.

        This does NOT affect any existing orders; they captured a
        price snapshot at creation time.
        """
        with self._stock_ledger.locked(product_id) as product:
            product.update_price(Money.of(new_price))
            self._product_repo.save(product)
        return product
