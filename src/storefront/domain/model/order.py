"""Order aggregate, the core of the domain.

The Order is an aggregate root that owns its line items. Line items are
facts recorded at checkout (product id, name, quantity, price) rather than
live links into the catalog, so later catalog edits or deletions never
change an existing order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import EmptyOrderError, IllegalTransitionError
from storefront.domain.model.value_objects import CustomerInfo, Money, Quantity


class OrderStatus(Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"

    @property
    def is_terminal(self) -> bool:
        return self in (OrderStatus.DELIVERED, OrderStatus.CANCELLED)


# Forward-only fulfilment path; CANCELLED is reachable from every
# non-terminal state but only through Order.cancel().
ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.CONFIRMED, OrderStatus.CANCELLED}),
    OrderStatus.CONFIRMED: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


@dataclass(frozen=True)
class OrderLineItem:
    """One purchased product, priced at order-creation time."""

    product_id: int
    product_name: str
    quantity: Quantity
    unit_price: Money  # snapshot, never refreshed from the catalog

    @property
    def subtotal(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use ``Order.create()`` for new orders. The plain constructor exists so
    repositories can reconstitute stored orders exactly as they were saved,
    including the frozen ``total_amount``.
    """

    id: int | None
    customer: CustomerInfo
    items: list[OrderLineItem]
    total_amount: Money
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    notes: str | None = None

    @staticmethod
    def create(
        customer: CustomerInfo,
        items: list[OrderLineItem],
        notes: str | None = None,
    ) -> Order:
        if not items:
            raise EmptyOrderError()

        total = Money.zero()
        for item in items:
            total = total + item.subtotal

        return Order(
            id=None,
            customer=customer,
            items=list(items),
            total_amount=total,
            notes=notes.strip() if notes and notes.strip() else None,
        )

    @property
    def customer_name(self) -> str:
        return self.customer.name

    # --- State transitions ----------------------------------------------------

    def can_transition_to(self, new_status: OrderStatus) -> bool:
        return new_status in ALLOWED_TRANSITIONS[self.status]

    def advance_to(self, new_status: OrderStatus, force: bool = False) -> None:
        """Move along the fulfilment path (PENDING -> ... -> DELIVERED).

        ``force`` lets an administrator correct a status outside the graph,
        e.g. moving a mistakenly SHIPPED order back to CONFIRMED. It never
        enters or leaves CANCELLED, since that would desynchronise stock.
        """
        if new_status == OrderStatus.CANCELLED:
            raise IllegalTransitionError("Use cancel to cancel an order")
        if self.status == OrderStatus.CANCELLED:
            raise IllegalTransitionError(
                f"Order #{self.id} is cancelled and cannot move to {new_status.value}"
            )
        if not force and not self.can_transition_to(new_status):
            raise IllegalTransitionError(
                f"Cannot move order #{self.id} from {self.status.value} "
                f"to {new_status.value}"
            )
        self.status = new_status

    def check_cancellable(self) -> None:
        if self.status == OrderStatus.DELIVERED:
            raise IllegalTransitionError("already delivered")
        if self.status == OrderStatus.CANCELLED:
            raise IllegalTransitionError("already cancelled")

    def cancel(self) -> None:
        """Transition PENDING|CONFIRMED|SHIPPED -> CANCELLED.

        Stock restoration must happen *before* calling this (coordinated
        by the application handler via the StockLedger).
        """
        self.check_cancellable()
        self.status = OrderStatus.CANCELLED
