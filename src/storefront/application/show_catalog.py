"""Application services: catalog queries."""

from __future__ import annotations

from storefront.application.dto import StockLineDTO
from storefront.domain.model.product import Product
from storefront.domain.repository.product_repository import ProductRepository

DEFAULT_LOW_STOCK_THRESHOLD = 5


class ListProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, active_only: bool = False, category: str | None = None) -> list[Product]:
        products = self._product_repo.list_all()
        if active_only:
            products = [p for p in products if p.active]
        if category and category.strip():
            wanted = category.strip().lower()
            products = [p for p in products if p.category.lower() == wanted]
        return sorted(products, key=lambda p: p.id)


class LowStockHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, threshold: int | None = None) -> list[StockLineDTO]:
        """Active products at or below *threshold* units, scarcest first.

        A missing or negative threshold falls back to the default.
        """
        if threshold is None or threshold < 0:
            threshold = DEFAULT_LOW_STOCK_THRESHOLD

        low = [
            p for p in self._product_repo.list_all()
            if p.active and p.stock_quantity <= threshold
        ]
        low.sort(key=lambda p: (p.stock_quantity, p.id))
        return [
            StockLineDTO(
                product_id=p.id,
                product_name=p.name,
                category=p.category,
                stock_quantity=p.stock_quantity,
            )
            for p in low
        ]
