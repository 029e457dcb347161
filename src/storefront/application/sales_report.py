"""Application service: Sales Report use case (query).

Totals are taken from each order's frozen ``total_amount``; cancelled
orders are counted per status but never contribute to sales.
"""

from __future__ import annotations

from datetime import date

from storefront.application.dto import SalesReportDTO
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.order import OrderStatus
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.order_repository import OrderRepository


class SalesReportHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, start: date, end: date) -> SalesReportDTO:
        if start > end:
            raise ValidationError(f"Start date {start} is after end date {end}")

        in_range = [
            o for o in self._order_repo.list_all()
            if start <= o.created_at.date() <= end
        ]

        count_by_status: dict[str, int] = {}
        amount_by_status: dict[str, Money] = {}
        total = Money.zero()
        for order in in_range:
            key = order.status.value
            count_by_status[key] = count_by_status.get(key, 0) + 1
            amount_by_status[key] = amount_by_status.get(key, Money.zero()) + order.total_amount
            if order.status != OrderStatus.CANCELLED:
                total = total + order.total_amount

        return SalesReportDTO(
            start=start.isoformat(),
            end=end.isoformat(),
            total_sales=str(total),
            order_count=len(in_range),
            count_by_status=count_by_status,
            amount_by_status={k: str(v) for k, v in amount_by_status.items()},
        )
