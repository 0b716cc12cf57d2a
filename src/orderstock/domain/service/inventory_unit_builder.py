"""Domain service: stage the proposed inventory units for an order."""

from __future__ import annotations

from orderstock.domain.model.inventory_unit import InventoryUnit
from orderstock.domain.model.order import Order


class InventoryUnitBuilder:

    def __init__(self, order: Order) -> None:
        self._order = order

    def units(self) -> list[InventoryUnit]:
        """One transient, pending unit per line item at its full quantity.

        Nothing is persisted and the ledger is not consulted; the units
        have no shipment until they are packed.
        """
        return [
            InventoryUnit.new(
                variant=line_item.variant,
                line_item=line_item,
                quantity=line_item.quantity,
                order_id=self._order.id,
                pending=True,
            )
            for line_item in self._order.line_items
        ]
