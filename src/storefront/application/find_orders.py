"""Application services: order lookups (queries).

Customers look up their own orders by order number or phone; the back
office lists everything, optionally narrowed to one status. Both return
newest orders first.
"""

from __future__ import annotations

from storefront.application.dto import OrderDTO, order_to_dto
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.order import Order, OrderStatus
from storefront.domain.repository.order_repository import OrderRepository


def _newest_first(orders: list[Order]) -> list[Order]:
    return sorted(orders, key=lambda o: (o.created_at, o.id or 0), reverse=True)


class FindCustomerOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: int | None = None, phone: str | None = None) -> list[OrderDTO]:
        """Return orders matching the order number *or* the phone number."""
        phone = phone.strip() if phone else ""
        if order_id is None and not phone:
            raise ValidationError("Provide an order number or a phone number")

        matches = [
            o for o in self._order_repo.list_all()
            if o.id == order_id or (phone and o.customer.phone == phone)
        ]
        return [order_to_dto(o) for o in _newest_first(matches)]


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, status: OrderStatus | None = None) -> list[OrderDTO]:
        orders = self._order_repo.list_all()
        if status is not None:
            orders = [o for o in orders if o.status == status]
        return [order_to_dto(o) for o in _newest_first(orders)]
