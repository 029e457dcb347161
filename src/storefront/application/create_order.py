"""Application service: Create Order use case.

Turns a cart (product id -> quantity) into a PENDING order. Each line is
resolved against the catalog, priced from a snapshot, and reserved through
the StockLedger before the next line is looked at. If a later line fails,
the reservations already made for this cart are handed back before the
error reaches the caller, so a rejected checkout never leaks stock.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from storefront.application.dto import OrderDTO, order_to_dto
from storefront.domain.exceptions import (
    InsufficientStockError,
    ProductInactiveError,
    ProductNotFoundError,
    ValidationError,
)
from storefront.domain.model.order import Order, OrderLineItem
from storefront.domain.model.value_objects import CustomerInfo, Quantity
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.pricing import snapshot_price
from storefront.domain.service.stock_ledger import StockLedger

logger = logging.getLogger(__name__)


class CreateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        stock_ledger: StockLedger,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._stock_ledger = stock_ledger

    def handle(
        self,
        customer_name: str,
        email: str | None,
        phone: str,
        address: str,
        cart_items: Mapping[int, int | None],
        notes: str | None = None,
    ) -> OrderDTO:
        """Create a new order.

        Steps:
        1. Validate customer details, then that the cart is non-empty.
        2. For each cart entry with a positive quantity, in cart order:
           look up the product, check it is active and in stock, freeze
           its price into a line item, and reduce its stock.
        3. Let the Order aggregate compute the total (EmptyOrderError if
           every entry was skipped).
        4. Persist and return a DTO.
        """
        customer = CustomerInfo(
            name=customer_name, phone=phone, address=address, email=email
        )
        if not cart_items:
            raise ValidationError("cart empty")

        line_items: list[OrderLineItem] = []
        reserved: list[tuple[int, int]] = []

        try:
            for product_id, quantity in cart_items.items():
                if quantity is None or quantity <= 0:
                    continue

                product = self._product_repo.get_by_id(product_id)
                if product is None:
                    raise ProductNotFoundError(product_id)
                if not product.active:
                    raise ProductInactiveError(product.name)
                if product.stock_quantity < quantity:
                    raise InsufficientStockError(
                        product.name, product.stock_quantity, quantity
                    )

                line_items.append(
                    OrderLineItem(
                        product_id=product.id,
                        product_name=product.name,
                        quantity=Quantity(quantity),
                        unit_price=snapshot_price(product),
                    )
                )
                self._stock_ledger.reduce(product.id, quantity)
                reserved.append((product.id, quantity))

            order = Order.create(customer=customer, items=line_items, notes=notes)
            self._order_repo.save(order)
        except Exception:
            self._release(reserved)
            raise

        logger.info(
            "Created order #%s for %s: %d item(s), total %s",
            order.id, customer.name, len(order.items), order.total_amount,
        )
        return order_to_dto(order)

    def _release(self, reserved: list[tuple[int, int]]) -> None:
        """Give back stock reserved for a cart that did not become an order."""
        for product_id, quantity in reversed(reserved):
            try:
                self._stock_ledger.increase(product_id, quantity)
            except ProductNotFoundError:
                logger.warning(
                    "Could not return %s unit(s) of product %s after a failed "
                    "checkout: product no longer exists",
                    quantity, product_id,
                )
            else:
                logger.warning(
                    "Returned %s unit(s) of product %s after a failed checkout",
                    quantity, product_id,
                )
