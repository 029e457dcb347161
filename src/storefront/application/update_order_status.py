"""Application service: Update Order Status use case.

Moves an order along PENDING -> CONFIRMED -> SHIPPED -> DELIVERED. A
request for CANCELLED is delegated to CancelOrderHandler so stock is
always restored; no caller can mark an order cancelled without it.
"""

from __future__ import annotations

import logging

from storefront.application.cancel_order import CancelOrderHandler
from storefront.application.dto import OrderDTO, order_to_dto
from storefront.domain.exceptions import OrderNotFoundError, ValidationError
from storefront.domain.model.order import OrderStatus
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.service.keyed_lock import KeyedLock
from storefront.domain.service.stock_ledger import StockLedger

logger = logging.getLogger(__name__)


def parse_status(raw: str) -> OrderStatus:
    try:
        return OrderStatus(raw.strip().upper())
    except ValueError:
        choices = ", ".join(s.value for s in OrderStatus)
        raise ValidationError(f"Unknown order status '{raw}' (expected one of {choices})")


class UpdateOrderStatusHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        stock_ledger: StockLedger,
        order_locks: KeyedLock,
    ) -> None:
        self._order_repo = order_repo
        self._stock_ledger = stock_ledger
        self._order_locks = order_locks

    def handle(
        self, order_id: int, new_status: OrderStatus, force: bool = False
    ) -> OrderDTO:
        if new_status == OrderStatus.CANCELLED:
            return CancelOrderHandler(
                self._order_repo, self._stock_ledger, self._order_locks
            ).handle(order_id)

        # Same lock as CancelOrderHandler: a concurrent cancel either sees
        # the new status or has already committed CANCELLED.
        with self._order_locks.hold(order_id):
            order = self._order_repo.get_by_id(order_id)
            if order is None:
                raise OrderNotFoundError(order_id)

            previous = order.status
            legal = order.can_transition_to(new_status)
            order.advance_to(new_status, force=force)
            self._order_repo.save(order)

        if legal:
            logger.info(
                "Order #%s moved from %s to %s", order_id, previous.value, new_status.value
            )
        else:
            logger.warning(
                "Order #%s forced from %s to %s", order_id, previous.value, new_status.value
            )
        return order_to_dto(order)
