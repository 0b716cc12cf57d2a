"""Shipment: a fulfillable group of inventory units from one stock location."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING

from orderstock.domain.model.content_item import ContentItem
from orderstock.domain.model.inventory_unit import InventoryUnit, InventoryUnitState
from orderstock.domain.model.value_objects import Money
from orderstock.domain.model.variant import Variant

if TYPE_CHECKING:
    from orderstock.domain.model.order import LineItem


class ShipmentState(Enum):
    PENDING = "pending"
    READY = "ready"
    SHIPPED = "shipped"
    CANCELED = "canceled"


@dataclass(eq=False)
class Shipment:
    """Owns its inventory units.

    Once ``shipped`` the unit collection is frozen: the reconciler never
    adds to or removes from it.
    """

    id: str
    order_id: int | None
    stock_location_id: str
    state: ShipmentState = ShipmentState.PENDING
    inventory_units: list[InventoryUnit] = field(default_factory=list)

    @staticmethod
    def new(order_id: int | None, stock_location_id: str) -> Shipment:
        return Shipment(id=uuid.uuid4().hex, order_id=order_id, stock_location_id=stock_location_id)

    # --- State ----------------------------------------------------------------

    @property
    def is_ready_or_pending(self) -> bool:
        return self.state in (ShipmentState.READY, ShipmentState.PENDING)

    @property
    def is_shipped(self) -> bool:
        return self.state == ShipmentState.SHIPPED

    # --- Units ----------------------------------------------------------------

    def includes(self, variant: Variant) -> bool:
        return any(unit.variant.id == variant.id for unit in self.inventory_units)

    def inventory_units_for_item(self, line_item: LineItem, variant: Variant) -> list[InventoryUnit]:
        return [
            unit
            for unit in self.inventory_units
            if unit.line_item.id == line_item.id and unit.variant.id == variant.id
        ]

    def set_up_inventory(
        self,
        state: InventoryUnitState,
        variant: Variant,
        order_id: int | None,
        line_item: LineItem,
        quantity: int,
    ) -> InventoryUnit:
        """Create a pending unit on this shipment and return it."""
        unit = InventoryUnit.new(
            variant=variant,
            line_item=line_item,
            quantity=quantity,
            state=state,
            order_id=order_id,
        )
        self.add_unit(unit)
        return unit

    def add_unit(self, unit: InventoryUnit) -> None:
        unit.shipment = self
        unit.order_id = self.order_id
        self.inventory_units.append(unit)

    def destroy_unit(self, unit: InventoryUnit) -> None:
        self.inventory_units.remove(unit)
        unit.shipment = None

    @property
    def total_quantity(self) -> int:
        return sum(unit.quantity for unit in self.inventory_units)

    # --- Manifest -------------------------------------------------------------

    @property
    def contents(self) -> list[ContentItem]:
        return [ContentItem(unit, unit.state) for unit in self.inventory_units]

    @property
    def weight(self) -> Decimal:
        return sum((item.weight for item in self.contents), Decimal("0"))

    @property
    def item_amount(self) -> Money:
        result = Money.zero()
        for item in self.contents:
            result = result + item.amount
        return result
