"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import CustomerInfo, Money, Quantity


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_of_factory_from_string(self):
        m = Money.of("25.99")
        assert m.amount == Decimal("25.99")
        assert m.currency == "USD"

    def test_quantised_to_cents(self):
        assert Money.of("10").amount == Decimal("10.00")
        assert Money.of("10") == Money.of("10.00")
        assert Money.of("0.125").amount == Decimal("0.13")

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money(Decimal("-1"))

    def test_garbage_rejected(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("ten dollars")

    def test_float_amount_rejected(self):
        with pytest.raises(ValidationError, match="must be a Decimal"):
            Money(10.5)  # type: ignore[arg-type]

    def test_addition_and_multiplication(self):
        assert Money.of("10") + Money.of("5.50") == Money.of("15.50")
        assert Money.of("7.50") * 3 == Money.of("22.50")

    def test_multiply_by_non_int_rejected(self):
        with pytest.raises(TypeError):
            Money.of("1") * 1.5  # type: ignore[operator]

    def test_currency_mismatch_rejected(self):
        with pytest.raises(ValidationError, match="Cannot combine"):
            Money(Decimal("10"), "USD") + Money(Decimal("5"), "EUR")

    def test_str_formatting(self):
        assert str(Money.of("15")) == "$15.00"
        assert str(Money.of("9.5")) == "$9.50"

    def test_zero(self):
        assert Money.zero().is_zero
        assert not Money.of("0.01").is_zero


# ── Quantity ─────────────────────────────────────────────────────────────────


class TestQuantity:

    def test_valid_quantity(self):
        assert Quantity(5).value == 5

    @pytest.mark.parametrize("value", [0, -3])
    def test_non_positive_rejected(self, value):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(value)

    def test_bool_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Quantity(True)


# ── CustomerInfo ─────────────────────────────────────────────────────────────


class TestCustomerInfo:

    def test_fields_are_trimmed(self):
        info = CustomerInfo(name="  Alice ", phone=" 0912 ", address=" 1 Main St ")
        assert info.name == "Alice"
        assert info.phone == "0912"
        assert info.address == "1 Main St"
        assert info.email is None

    def test_valid_email_kept(self):
        info = CustomerInfo(name="Alice", phone="1", address="x", email=" alice@gmail.com ")
        assert info.email == "alice@gmail.com"

    def test_blank_email_treated_as_absent(self):
        info = CustomerInfo(name="Alice", phone="1", address="x", email="   ")
        assert info.email is None

    def test_invalid_email_rejected(self):
        with pytest.raises(ValidationError, match="invalid email"):
            CustomerInfo(name="Alice", phone="1", address="x", email="not-an-address")

    def test_name_checked_first(self):
        with pytest.raises(ValidationError, match="customer name required"):
            CustomerInfo(name=" ", phone="", address="")

    def test_phone_checked_before_address(self):
        with pytest.raises(ValidationError, match="phone required"):
            CustomerInfo(name="Alice", phone="", address="")

    def test_address_required(self):
        with pytest.raises(ValidationError, match="address required"):
            CustomerInfo(name="Alice", phone="1", address=None)  # type: ignore[arg-type]
