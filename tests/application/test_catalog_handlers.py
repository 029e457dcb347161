"""Integration tests for the catalog and stock administration use cases."""

import pytest

from storefront.application.add_product import AddProductHandler
from storefront.application.delete_product import DeleteProductHandler
from storefront.application.set_stock import SetStockHandler
from storefront.application.show_catalog import ListProductsHandler, LowStockHandler
from storefront.application.toggle_product import ToggleProductHandler
from storefront.application.update_product import UpdateProductHandler
from storefront.domain.exceptions import ProductNotFoundError, ValidationError
from storefront.domain.model.value_objects import Money
from storefront.domain.service.stock_ledger import StockLedger
from tests.fakes import FakeProductRepository, make_product


def _catalog() -> FakeProductRepository:
    return FakeProductRepository(
        [
            make_product(1, "Keyboard", stock=12, category="Peripherals"),
            make_product(2, "Mouse", stock=3, category="Peripherals"),
            make_product(3, "Cable", stock=0, category="Accessories"),
            make_product(4, "Old Hub", stock=1, category="Accessories", active=False),
        ]
    )


class TestAddProduct:

    def test_adds_with_next_id(self):
        repo = _catalog()
        product = AddProductHandler(repo).handle(
            name=" Monitor ", category="Displays", price="199.9", stock=5
        )
        assert product.id == 5
        assert product.name == "Monitor"
        assert product.price == Money.of("199.90")
        assert repo.get_by_id(5).stock_quantity == 5

    def test_first_product_gets_id_one(self):
        product = AddProductHandler(FakeProductRepository()).handle("Pen", "Office", "1.00")
        assert product.id == 1
        assert product.active is True

    def test_deleted_id_is_not_reused(self):
        repo = _catalog()
        DeleteProductHandler(repo, StockLedger(repo)).handle(4)
        product = AddProductHandler(repo).handle("Monitor", "Displays", "199.00")
        assert product.id == 5
        assert repo.get_by_id(4) is None

    @pytest.mark.parametrize(
        "kwargs, message",
        [
            ({"name": " "}, "name is required"),
            ({"category": ""}, "category is required"),
            ({"price": "0"}, "greater than zero"),
            ({"price": "abc"}, "Invalid money amount"),
            ({"stock": -1}, "cannot be negative"),
            ({"name": "keyboard"}, "already exists"),
        ],
    )
    def test_invalid_input_rejected(self, kwargs, message):
        args = {"name": "Monitor", "category": "Displays", "price": "10.00"}
        args.update(kwargs)
        with pytest.raises(ValidationError, match=message):
            AddProductHandler(_catalog()).handle(**args)


class TestUpdateToggleDelete:

    def test_update_price(self):
        repo = _catalog()
        UpdateProductHandler(repo, StockLedger(repo)).handle(1, "12.50")
        assert repo.get_by_id(1).price == Money.of("12.50")

    def test_update_unknown(self):
        repo = _catalog()
        with pytest.raises(ProductNotFoundError):
            UpdateProductHandler(repo, StockLedger(repo)).handle(99, "1.00")

    def test_toggle(self):
        repo = _catalog()
        assert ToggleProductHandler(repo, StockLedger(repo)).handle(4).active is True
        assert ToggleProductHandler(repo, StockLedger(repo)).handle(4).active is False

    def test_delete(self):
        repo = _catalog()
        DeleteProductHandler(repo, StockLedger(repo)).handle(2)
        assert repo.get_by_id(2) is None

    def test_delete_unknown(self):
        repo = _catalog()
        with pytest.raises(ProductNotFoundError):
            DeleteProductHandler(repo, StockLedger(repo)).handle(99)


class TestSetStock:

    def test_sets_absolute_level(self):
        repo = _catalog()
        assert SetStockHandler(StockLedger(repo)).handle(3, 25) == 25
        assert repo.get_by_id(3).stock_quantity == 25

    def test_negative_rejected(self):
        with pytest.raises(ValidationError):
            SetStockHandler(StockLedger(_catalog())).handle(3, -5)


class TestCatalogQueries:

    def test_list_filters(self):
        handler = ListProductsHandler(_catalog())
        assert [p.id for p in handler.handle()] == [1, 2, 3, 4]
        assert [p.id for p in handler.handle(active_only=True)] == [1, 2, 3]
        assert [p.id for p in handler.handle(category="accessories")] == [3, 4]

    def test_low_stock_default_threshold(self):
        lines = LowStockHandler(_catalog()).handle()
        assert [(line.product_id, line.stock_quantity) for line in lines] == [(3, 0), (2, 3)]

    def test_low_stock_custom_threshold(self):
        lines = LowStockHandler(_catalog()).handle(threshold=0)
        assert [line.product_name for line in lines] == ["Cable"]

    def test_negative_threshold_uses_default(self):
        lines = LowStockHandler(_catalog()).handle(threshold=-1)
        assert len(lines) == 2
