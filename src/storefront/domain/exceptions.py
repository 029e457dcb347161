"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Caller input is missing or malformed."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ProductNotFoundError(EntityNotFoundError):

    def __init__(self, product_id: int) -> None:
        super().__init__(f"Product not found: ID = {product_id}")
        self.product_id = product_id


class OrderNotFoundError(EntityNotFoundError):

    def __init__(self, order_id: int) -> None:
        super().__init__(f"Order #{order_id} not found")
        self.order_id = order_id


class InsufficientStockError(DomainException):
    """Requested quantity exceeds the stock on hand."""

    def __init__(self, product_name: str, available: int, requested: int) -> None:
        super().__init__(
            f"Insufficient stock for {product_name} "
            f"(requested {requested}, available {available})"
        )
        self.product_name = product_name
        self.available = available
        self.requested = requested


class ProductInactiveError(DomainException):
    """The product is not currently offered for sale."""

    def __init__(self, product_name: str) -> None:
        super().__init__(f"Product is inactive: {product_name}")
        self.product_name = product_name


class IllegalTransitionError(DomainException):
    """An order status change not allowed by the lifecycle."""


class EmptyOrderError(DomainException):
    """No valid line items survived cart filtering."""

    def __init__(self) -> None:
        super().__init__("Order contains no valid items")
