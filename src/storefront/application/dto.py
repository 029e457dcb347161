"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.model.order import Order


@dataclass(frozen=True)
class OrderLineItemDTO:
    """Output: a single line item as displayed to the user."""

    product_id: int
    product_name: str
    quantity: int
    unit_price: str  # formatted, e.g. "$15.00"
    subtotal: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: int
    customer_name: str
    email: str | None
    phone: str
    address: str
    status: str
    items: list[OrderLineItemDTO]
    total: str
    created_at: str
    notes: str | None


@dataclass(frozen=True)
class StockLineDTO:
    product_id: int
    product_name: str
    category: str
    stock_quantity: int


@dataclass(frozen=True)
class SalesReportDTO:
    """Output: sales figures for a date range (cancelled orders excluded)."""

    start: str
    end: str
    total_sales: str
    order_count: int
    count_by_status: dict[str, int]
    amount_by_status: dict[str, str]


def order_to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        customer_name=order.customer.name,
        email=order.customer.email,
        phone=order.customer.phone,
        address=order.customer.address,
        status=order.status.value,
        items=[
            OrderLineItemDTO(
                product_id=item.product_id,
                product_name=item.product_name,
                quantity=item.quantity.value,
                unit_price=str(item.unit_price),
                subtotal=str(item.subtotal),
            )
            for item in order.items
        ],
        total=str(order.total_amount),
        created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
        notes=order.notes,
    )
