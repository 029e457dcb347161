"""Product aggregate.

Products live independently of orders. They have their own lifecycle:
prices change, products are taken off sale, restocked, and removed from
the catalog. Orders only ever hold a product's id plus a price snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from storefront.domain.exceptions import InsufficientStockError, ValidationError
from storefront.domain.model.value_objects import Money


@dataclass
class Product:
    """A product in the catalog.

    Invariants:
    - ``price`` is strictly positive
    - ``stock_quantity`` is never negative

    Stock is changed only through ``take_stock`` / ``restock`` /
    ``set_stock``, and those are only called by the StockLedger, which
    serialises them per product.
    """

    id: int | None
    name: str
    category: str
    price: Money
    stock_quantity: int = 0
    active: bool = True
    description: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        This does NOT affect any existing orders because orders
        capture a price snapshot at creation time.
        """
        if new_price.is_zero:
            raise ValidationError("Product price must be greater than zero")
        self.price = new_price

    def toggle_active(self) -> bool:
        self.active = not self.active
        return self.active

    # --- Stock ----------------------------------------------------------------

    def take_stock(self, quantity: int) -> None:
        if quantity <= 0:
            raise ValidationError("Stock reduction quantity must be positive")
        if quantity > self.stock_quantity:
            raise InsufficientStockError(self.name, self.stock_quantity, quantity)
        self.stock_quantity -= quantity

    def restock(self, quantity: int) -> None:
        if quantity <= 0:
            raise ValidationError("Stock increase quantity must be positive")
        self.stock_quantity += quantity

    def set_stock(self, quantity: int) -> None:
        if quantity < 0:
            raise ValidationError("Stock quantity cannot be negative")
        self.stock_quantity = quantity
