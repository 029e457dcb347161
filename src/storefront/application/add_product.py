"""Application service: Add Product use case."""

from __future__ import annotations

import logging

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        name: str,
        category: str,
        price: str,
        stock: int = 0,
        description: str | None = None,
        active: bool = True,
    ) -> Product:
        """Add a new product to the catalog."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        if not category or not category.strip():
            raise ValidationError("Product category is required")
        if stock < 0:
            raise ValidationError("Stock quantity cannot be negative")

        unit_price = Money.of(price)
        if unit_price.is_zero:
            raise ValidationError("Product price must be greater than zero")

        product = Product(
            id=None,
            name=name.strip(),
            category=category.strip(),
            price=unit_price,
            stock_quantity=stock,
            active=active,
            description=description.strip() if description else None,
        )
        self._product_repo.add(product)
        logger.info("Added product #%s '%s' at %s", product.id, product.name, product.price)
        return product
