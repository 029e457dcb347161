"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

import json
import threading
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository


class JsonProductRepository(ProductRepository):
    """Whole-file store; every write rewrites ``products.json``.

    The file holds ``{"next_id": N, "products": [...]}``. ``next_id`` only
    moves forward, so deleting the newest product does not free its ID.
    Reads and writes are serialised on ``self._lock`` so concurrent saves
    of different products cannot overwrite each other's changes.
    """

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock = threading.RLock()
        self._ensure_file()

    # --- ProductRepository interface ------------------------------------------

    def add(self, product: Product) -> None:
        with self._lock:
            next_id, products = self._load()
            wanted = product.name.strip().lower()
            if any(p.name.lower() == wanted for p in products.values()):
                raise ValidationError(f"Product '{product.name}' already exists")

            product.id = next_id
            products[product.id] = product
            self._persist(next_id + 1, products)

    def get_by_id(self, product_id: int) -> Product | None:
        with self._lock:
            return self._load()[1].get(product_id)

    def get_by_name(self, name: str) -> Product | None:
        wanted = name.strip().lower()
        for product in self.list_all():
            if product.name.lower() == wanted:
                return product
        return None

    def list_all(self) -> list[Product]:
        with self._lock:
            return list(self._load()[1].values())

    def save(self, product: Product) -> None:
        with self._lock:
            next_id, products = self._load()
            products[product.id] = product
            self._persist(max(next_id, product.id + 1), products)

    def delete(self, product_id: int) -> None:
        with self._lock:
            next_id, products = self._load()
            if products.pop(product_id, None) is not None:
                self._persist(next_id, products)

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> tuple[int, dict[int, Product]]:
        raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        if isinstance(raw, list):
            # Files written before the ID counter was stored.
            raw = {"next_id": max((p["id"] for p in raw), default=0) + 1, "products": raw}
        products = {
            item["id"]: Product(
                id=item["id"],
                name=item["name"],
                category=item["category"],
                price=Money(Decimal(item["price"]), item.get("currency", "USD")),
                stock_quantity=item.get("stock_quantity", 0),
                active=item.get("active", True),
                description=item.get("description"),
                created_at=datetime.fromisoformat(item["created_at"]),
            )
            for item in raw["products"]
        }
        return raw["next_id"], products

    def _persist(self, next_id: int, products: dict[int, Product]) -> None:
        raw = [
            {
                "id": p.id,
                "name": p.name,
                "category": p.category,
                "price": str(p.price.amount),
                "currency": p.price.currency,
                "stock_quantity": p.stock_quantity,
                "active": p.active,
                "description": p.description,
                "created_at": p.created_at.isoformat(),
            }
            for p in sorted(products.values(), key=lambda p: p.id)
        ]
        self._file_path.write_text(
            json.dumps({"next_id": next_id, "products": raw}, indent=2) + "\n",
            encoding="utf-8",
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._persist(1, {})
