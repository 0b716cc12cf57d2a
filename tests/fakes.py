"""In-memory fake repositories for testing.

These implement the same abstract interfaces as the JSON repositories
but keep everything in a dict. No file I/O, no side effects.

Stored objects are deep-copied on the way in and out, so a test sees the
same "reload from storage" behaviour as with the real repositories.
"""

from __future__ import annotations

import copy
from decimal import Decimal

from orderstock.application.transaction import StockBackend
from orderstock.domain.model.order import Order
from orderstock.domain.model.stock import StockItem, StockLocation, StockMovement
from orderstock.domain.model.value_objects import Money
from orderstock.domain.model.variant import Variant
from orderstock.domain.repository.order_repository import OrderRepository
from orderstock.domain.repository.stock_repository import (
    StockItemRepository,
    StockLocationRepository,
)
from orderstock.domain.repository.variant_repository import VariantRepository
from orderstock.domain.service.stock_ledger import StockItemLedger


class FakeOrderRepository(OrderRepository):

    def __init__(self) -> None:
        self._store: dict[int, Order] = {}
        self._next_id = 1

    def next_id(self) -> int:
        return self._next_id

    def get_by_id(self, order_id: int) -> Order | None:
        order = self._store.get(order_id)
        return copy.deepcopy(order) if order is not None else None

    def get_line_item_quantity(self, order_id: int | None, line_item_id: str) -> int | None:
        order = self._store.get(order_id) if order_id is not None else None
        if order is None:
            return None
        for item in order.line_items:
            if item.id == line_item_id:
                return item.quantity
        return None

    def save(self, order: Order) -> None:
        if order.id is None:
            order.id = self._next_id
            self._next_id += 1
        self._store[order.id] = copy.deepcopy(order)


class FakeVariantRepository(VariantRepository):

    def __init__(self, variants: list[Variant] | None = None) -> None:
        self._store: dict[str, Variant] = {}
        for v in variants or []:
            self._store[v.id] = v

    def get_by_id(self, variant_id: str) -> Variant | None:
        return self._store.get(variant_id)

    def get_by_sku(self, sku: str) -> Variant | None:
        for v in self._store.values():
            if v.sku.lower() == sku.lower():
                return v
        return None

    def list_all(self) -> list[Variant]:
        return list(self._store.values())

    def save(self, variant: Variant) -> None:
        self._store[variant.id] = variant


class FakeStockLocationRepository(StockLocationRepository):

    def __init__(self, locations: list[StockLocation] | None = None) -> None:
        self._store: dict[str, StockLocation] = {}
        for loc in locations or []:
            self._store[loc.id] = loc

    def get_by_id(self, location_id: str) -> StockLocation | None:
        return self._store.get(location_id)

    def list_all(self) -> list[StockLocation]:
        return list(self._store.values())

    def save(self, location: StockLocation) -> None:
        self._store[location.id] = location


class FakeStockItemRepository(StockItemRepository):

    def __init__(self, items: list[StockItem] | None = None) -> None:
        self._store: dict[tuple[str, str], StockItem] = {}
        self.movements: list[StockMovement] = []
        for item in items or []:
            self._store[(item.stock_location_id, item.variant_id)] = copy.copy(item)

    def get(self, stock_location_id: str, variant_id: str) -> StockItem | None:
        item = self._store.get((stock_location_id, variant_id))
        return copy.copy(item) if item is not None else None

    def list_for_variant(self, variant_id: str) -> list[StockItem]:
        return [copy.copy(i) for (_, vid), i in self._store.items() if vid == variant_id]

    def list_all(self) -> list[StockItem]:
        return [copy.copy(i) for i in self._store.values()]

    def save(self, item: StockItem) -> None:
        self._store[(item.stock_location_id, item.variant_id)] = copy.copy(item)

    def add_movement(self, movement: StockMovement) -> None:
        self.movements.append(movement)

    def list_movements(self, variant_id: str | None = None) -> list[StockMovement]:
        return [m for m in self.movements if variant_id is None or m.variant_id == variant_id]

    def count_on_hand(self, stock_location_id: str, variant_id: str) -> int:
        """Test helper: current count, 0 when no record exists."""
        item = self._store.get((stock_location_id, variant_id))
        return item.count_on_hand if item else 0


class SpyLedger(StockItemLedger):
    """Ledger that records which queries were made."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.fill_status_calls: list[tuple[str, int, str]] = []

    def fill_status(self, variant, quantity, stock_location_id):
        self.fill_status_calls.append((variant.sku, quantity, stock_location_id))
        return super().fill_status(variant, quantity, stock_location_id)


# --- Builders -----------------------------------------------------------------


def make_variant(
    id: str = "1",
    sku: str = "TS-RED-M",
    name: str = "T-Shirt",
    price: str = "20.00",
    track_inventory: bool = True,
    stock_location_ids: list[str] | None = None,
    option_values: list[tuple[str, str]] | None = None,
) -> Variant:
    return Variant(
        id=id,
        sku=sku,
        name=name,
        price=Money.of(price),
        weight=Decimal("0.25"),
        track_inventory=track_inventory,
        stock_location_ids=stock_location_ids if stock_location_ids is not None else ["1"],
        option_values=option_values or [],
    )


def make_stock(
    items: list[StockItem] | None = None,
    locations: list[StockLocation] | None = None,
) -> StockBackend:
    return StockBackend(
        item_repo=FakeStockItemRepository(items),
        location_repo=FakeStockLocationRepository(
            locations if locations is not None else [
                StockLocation(id="1", name="Main warehouse"),
                StockLocation(id="2", name="East depot"),
            ]
        ),
    )
