"""Application service: Cancel Order use case.

Returns every line item's quantity to stock, then marks the order
CANCELLED. DELIVERED and already-CANCELLED orders are rejected before any
stock is touched.

A product deleted since checkout cannot take its stock back. That line is
logged and skipped; the remaining lines and the status change still go
through, because the point of cancelling is to free what can be freed and
close the order.

The whole load -> check -> restore -> save sequence runs under the
order's lock, so two concurrent cancellations restore stock once and the
loser sees the order already cancelled.
"""

from __future__ import annotations

import logging

from storefront.application.dto import OrderDTO, order_to_dto
from storefront.domain.exceptions import OrderNotFoundError, ProductNotFoundError
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.service.keyed_lock import KeyedLock
from storefront.domain.service.stock_ledger import StockLedger

logger = logging.getLogger(__name__)


class CancelOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        stock_ledger: StockLedger,
        order_locks: KeyedLock,
    ) -> None:
        self._order_repo = order_repo
        self._stock_ledger = stock_ledger
        self._order_locks = order_locks

    def handle(self, order_id: int) -> OrderDTO:
        with self._order_locks.hold(order_id):
            order = self._order_repo.get_by_id(order_id)
            if order is None:
                raise OrderNotFoundError(order_id)

            order.check_cancellable()

            for item in order.items:
                try:
                    self._stock_ledger.increase(item.product_id, item.quantity.value)
                except ProductNotFoundError:
                    logger.warning(
                        "Order #%s: skipped restoring %s unit(s) of '%s' "
                        "(product %s no longer exists)",
                        order_id, item.quantity, item.product_name, item.product_id,
                    )

            order.cancel()
            self._order_repo.save(order)
        logger.info("Cancelled order #%s", order_id)
        return order_to_dto(order)
