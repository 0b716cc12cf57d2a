"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import lru_cache

from orderstock.application.transaction import StockBackend
from orderstock.domain.service.locks import KeyedLock
from orderstock.infrastructure.config import Settings, load_settings
from orderstock.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from orderstock.infrastructure.persistence.json_stock_repository import (
    JsonStockItemRepository,
    JsonStockLocationRepository,
)
from orderstock.infrastructure.persistence.json_variant_repository import (
    JsonVariantRepository,
)

# Shared by every use case in this process.
_LOCKS = KeyedLock()


@lru_cache(maxsize=1)
def settings() -> Settings:
    return load_settings()


def variant_repository() -> JsonVariantRepository:
    return JsonVariantRepository(settings().data_dir / "variants.json")


def order_repository() -> JsonOrderRepository:
    return JsonOrderRepository(settings().data_dir / "orders.json", variant_repository())


def stock_location_repository() -> JsonStockLocationRepository:
    return JsonStockLocationRepository(settings().data_dir / "stock_locations.json")


def stock_item_repository() -> JsonStockItemRepository:
    data_dir = settings().data_dir
    return JsonStockItemRepository(data_dir / "stock_items.json", data_dir / "stock_movements.json")


def stock_backend() -> StockBackend:
    return StockBackend(
        item_repo=stock_item_repository(),
        location_repo=stock_location_repository(),
        locks=_LOCKS,
        track_inventory_levels=settings().track_inventory_levels,
    )
