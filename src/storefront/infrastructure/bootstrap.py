"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from storefront.domain.service.keyed_lock import KeyedLock
from storefront.domain.service.stock_ledger import StockLedger
from storefront.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from storefront.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)

DATA_DIR_ENV = "STOREFRONT_DATA_DIR"

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


def default_data_dir() -> Path:
    configured = os.environ.get(DATA_DIR_ENV)
    return Path(configured) if configured else _DEFAULT_DATA_DIR


@dataclass(frozen=True)
class Services:
    """Repositories plus the locks every handler must share.

    ``stock_ledger`` holds the per-product locks, ``order_locks`` the
    per-order ones.
    """

    product_repo: JsonProductRepository
    order_repo: JsonOrderRepository
    stock_ledger: StockLedger
    order_locks: KeyedLock


def build_services(data_dir: Path | None = None) -> Services:
    data_dir = data_dir or default_data_dir()
    product_repo = JsonProductRepository(data_dir / "products.json")
    return Services(
        product_repo=product_repo,
        order_repo=JsonOrderRepository(data_dir / "orders.json"),
        stock_ledger=StockLedger(product_repo),
        order_locks=KeyedLock(),
    )
