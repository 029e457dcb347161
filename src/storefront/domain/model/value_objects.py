"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from email_validator import EmailNotValidError, validate_email

from storefront.domain.exceptions import ValidationError

CENT = Decimal("0.01")


@dataclass(frozen=True)
class Money:
    """Non-negative monetary amount with two fractional digits.

    Amounts are quantised to cents on construction, so ``Money.of("10")``
    and ``Money.of("10.00")`` compare equal and render the same way.
    """

    amount: Decimal
    currency: str = "USD"

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if self.amount < 0:
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )
        object.__setattr__(
            self, "amount", self.amount.quantize(CENT, rounding=ROUND_HALF_UP)
        )

    def __add__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, factor: int) -> Money:
        if not isinstance(factor, int):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(self.amount * factor, self.currency)

    def __str__(self) -> str:
        return f"${self.amount}"

    @property
    def is_zero(self) -> bool:
        return self.amount == 0

    def _assert_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValidationError(
                f"Cannot combine {self.currency} with {other.currency}"
            )

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def zero() -> Money:
        return Money(Decimal("0"))

    @staticmethod
    def of(amount: str | int | Decimal) -> Money:
        """Coerce a user-supplied amount to Money."""
        try:
            return Money(Decimal(str(amount).strip()))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity of a single product."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)


def _required(value: str | None, message: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(message)
    return value.strip()


@dataclass(frozen=True)
class CustomerInfo:
    """Who the order is for and where it ships.

    Checks run in a fixed order (name, phone, address, email) so callers
    always see the first problem with the payload. Text fields are stored
    trimmed; a blank email is treated as absent.
    """

    name: str
    phone: str
    address: str
    email: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", _required(self.name, "customer name required"))
        object.__setattr__(self, "phone", _required(self.phone, "phone required"))
        object.__setattr__(self, "address", _required(self.address, "address required"))

        email = self.email.strip() if self.email else None
        if email:
            try:
                validate_email(email, check_deliverability=False)
            except EmailNotValidError as exc:
                raise ValidationError(f"invalid email {email!r}: {exc}") from exc
        object.__setattr__(self, "email", email or None)
