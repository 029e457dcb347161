"""Integration tests for the CreateOrder use case.

Uses in-memory fake repositories, no file I/O.
"""

import logging

import pytest

from storefront.application.create_order import CreateOrderHandler
from storefront.domain.exceptions import (
    EmptyOrderError,
    InsufficientStockError,
    ProductInactiveError,
    ProductNotFoundError,
    ValidationError,
)
from storefront.domain.model.order import OrderStatus
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.service.stock_ledger import StockLedger
from tests.fakes import FakeOrderRepository, FakeProductRepository, make_product


def _setup(
    products: list[Product] | None = None,
) -> tuple[CreateOrderHandler, FakeOrderRepository, FakeProductRepository]:
    """Build handler with fake repos, optionally pre-loaded with products."""
    if products is None:
        products = [
            make_product(1, "Keyboard", price="100.00", stock=10),
            make_product(2, "Mouse", price="50.00", stock=10),
            make_product(3, "Cable", price="5.00", stock=1),
            make_product(4, "Retired Hub", price="30.00", stock=10, active=False),
        ]
    order_repo = FakeOrderRepository()
    product_repo = FakeProductRepository(products)
    handler = CreateOrderHandler(order_repo, product_repo, StockLedger(product_repo))
    return handler, order_repo, product_repo


def _place(handler: CreateOrderHandler, cart, **overrides):
    kwargs = dict(
        customer_name="Alice",
        email="alice@gmail.com",
        phone="0912345678",
        address="1 Main St",
        cart_items=cart,
        notes=None,
    )
    kwargs.update(overrides)
    return handler.handle(**kwargs)


def _stock(product_repo: FakeProductRepository) -> dict[int, int]:
    return {p.id: p.stock_quantity for p in product_repo.list_all()}


class TestCreateOrderHappyPath:

    def test_total_and_line_items(self):
        handler, order_repo, _ = _setup()
        dto = _place(handler, {1: 2, 2: 1})

        assert dto.total == "$250.00"
        assert dto.status == "PENDING"
        assert [(i.product_id, i.quantity, i.unit_price) for i in dto.items] == [
            (1, 2, "$100.00"),
            (2, 1, "$50.00"),
        ]

        saved = order_repo.get_by_id(dto.id)
        assert saved.total_amount == Money.of("250.00")
        assert saved.items[0].unit_price == Money.of("100.00")
        assert saved.status == OrderStatus.PENDING

    def test_stock_reduced_per_line(self):
        handler, _, product_repo = _setup()
        _place(handler, {1: 2, 2: 1})
        assert _stock(product_repo)[1] == 8
        assert _stock(product_repo)[2] == 9

    def test_assigns_sequential_ids_and_timestamp(self):
        handler, _, _ = _setup()
        first = _place(handler, {1: 1})
        second = _place(handler, {2: 1})
        assert second.id == first.id + 1
        assert first.created_at.endswith("UTC")

    def test_customer_fields_trimmed(self):
        handler, _, _ = _setup()
        dto = _place(handler, {1: 1}, customer_name="  Bob ", notes="  leave at door ")
        assert dto.customer_name == "Bob"
        assert dto.notes == "leave at door"

    def test_non_positive_and_missing_quantities_skipped(self):
        handler, _, product_repo = _setup()
        dto = _place(handler, {1: 0, 2: 1, 3: -4, 4: 0, 99: None})
        assert [i.product_id for i in dto.items] == [2]
        assert _stock(product_repo)[1] == 10

    def test_email_optional(self):
        handler, _, _ = _setup()
        dto = _place(handler, {1: 1}, email=None)
        assert dto.email is None


class TestCreateOrderPriceLock:

    def test_price_snapshot_at_creation(self):
        handler, order_repo, product_repo = _setup()
        dto = _place(handler, {1: 1})

        keyboard = product_repo.get_by_id(1)
        keyboard.update_price(Money.of("999.99"))
        product_repo.save(keyboard)

        saved = order_repo.get_by_id(dto.id)
        assert saved.items[0].unit_price == Money.of("100.00")
        assert saved.total_amount == Money.of("100.00")

    def test_deleting_product_keeps_history(self):
        handler, order_repo, product_repo = _setup()
        dto = _place(handler, {1: 1})
        product_repo.delete(1)

        saved = order_repo.get_by_id(dto.id)
        assert saved.items[0].product_name == "Keyboard"


class TestCreateOrderValidation:

    @pytest.mark.parametrize(
        "overrides, message",
        [
            ({"customer_name": "  "}, "customer name required"),
            ({"customer_name": "", "phone": ""}, "customer name required"),
            ({"phone": " "}, "phone required"),
            ({"phone": "", "address": ""}, "phone required"),
            ({"address": ""}, "address required"),
            ({"address": "", "cart_items": {}}, "address required"),
            ({"cart_items": {}}, "cart empty"),
            ({"email": "nope"}, "invalid email"),
        ],
    )
    def test_input_checks_in_order(self, overrides, message):
        handler, order_repo, product_repo = _setup()
        overrides = dict(overrides)
        cart = overrides.pop("cart_items", {1: 1})
        with pytest.raises(ValidationError, match=message):
            _place(handler, cart, **overrides)
        assert order_repo.list_all() == []
        assert _stock(product_repo)[1] == 10

    def test_unknown_product_rejected(self):
        handler, _, _ = _setup()
        with pytest.raises(ProductNotFoundError, match="ID = 99"):
            _place(handler, {99: 1})

    def test_inactive_product_rejected_without_stock_change(self):
        handler, order_repo, product_repo = _setup()
        before = _stock(product_repo)
        with pytest.raises(ProductInactiveError, match="Retired Hub"):
            _place(handler, {4: 1})
        assert _stock(product_repo) == before
        assert order_repo.list_all() == []

    def test_insufficient_stock_leaves_stock_unchanged(self):
        handler, _, product_repo = _setup()
        with pytest.raises(InsufficientStockError) as exc_info:
            _place(handler, {3: 2})
        assert exc_info.value.product_name == "Cable"
        assert exc_info.value.available == 1
        assert exc_info.value.requested == 2
        assert _stock(product_repo)[3] == 1

    def test_all_lines_skipped_is_empty_order(self):
        handler, order_repo, _ = _setup()
        with pytest.raises(EmptyOrderError):
            _place(handler, {1: 0, 2: -1})
        assert order_repo.list_all() == []


class TestCreateOrderCompensation:

    def test_failed_later_line_returns_earlier_reservations(self):
        handler, order_repo, product_repo = _setup()
        before = _stock(product_repo)

        with pytest.raises(InsufficientStockError):
            _place(handler, {1: 2, 2: 3, 3: 5})

        assert _stock(product_repo) == before
        assert order_repo.list_all() == []

    def test_failure_after_inactive_line_returns_reservations(self):
        handler, _, product_repo = _setup()
        with pytest.raises(ProductInactiveError):
            _place(handler, {1: 1, 4: 1})
        assert _stock(product_repo)[1] == 10

    def test_compensation_is_logged(self, caplog):
        handler, _, _ = _setup()
        with caplog.at_level(logging.WARNING, logger="storefront.application.create_order"):
            with pytest.raises(ProductNotFoundError):
                _place(handler, {1: 2, 99: 1})
        assert "Returned 2 unit(s) of product 1" in caplog.text
