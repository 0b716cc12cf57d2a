"""ContentItem: a read-only view pairing an inventory unit with a fill state."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING

from orderstock.domain.model.inventory_unit import InventoryUnit, InventoryUnitState
from orderstock.domain.model.value_objects import Money
from orderstock.domain.model.variant import Variant

if TYPE_CHECKING:
    from orderstock.domain.model.order import LineItem


@dataclass(frozen=True)
class ContentItem:
    """Derived on demand and never persisted; it has no identity of its own."""

    inventory_unit: InventoryUnit
    state: InventoryUnitState = InventoryUnitState.ON_HAND

    @property
    def variant(self) -> Variant:
        return self.inventory_unit.variant

    @property
    def line_item(self) -> LineItem:
        return self.inventory_unit.line_item

    @property
    def quantity(self) -> int:
        return self.inventory_unit.quantity

    @property
    def weight(self) -> Decimal:
        return self.variant.weight * self.quantity

    @property
    def price(self) -> Money:
        return self.line_item.price

    @property
    def amount(self) -> Money:
        return self.price * self.quantity

    @property
    def is_on_hand(self) -> bool:
        return self.state == InventoryUnitState.ON_HAND

    @property
    def is_backordered(self) -> bool:
        return self.state == InventoryUnitState.BACKORDERED
