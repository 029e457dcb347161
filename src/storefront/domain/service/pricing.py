"""Domain service: price snapshots for new order lines."""

from __future__ import annotations

from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money


def snapshot_price(product: Product) -> Money:
    """Return the product's current unit price, frozen for an order line.

    Money is immutable, so later ``update_price`` calls on the product
    rebind its ``price`` and never reach the returned value.
    """
    return Money(product.price.amount, product.price.currency)
