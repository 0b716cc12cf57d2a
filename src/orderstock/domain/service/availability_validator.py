"""Domain service: can the stock ledger satisfy a line item?

Used as a checkout gate.  A failed check is reported as data on the line
item (``line_item.errors["quantity"]``); it never raises.
"""

from __future__ import annotations

from orderstock.domain.model.order import LineItem, Order
from orderstock.domain.service.stock_ledger import StockLedger

QUANTITY_NOT_AVAILABLE = "Selected quantity of {item} is not available."


class AvailabilityValidator:

    def __init__(self, ledger: StockLedger) -> None:
        self._ledger = ledger

    def validate(self, order: Order, line_item: LineItem) -> bool:
        if self.is_available(order, line_item):
            return True
        line_item.add_error(
            "quantity",
            QUANTITY_NOT_AVAILABLE.format(item=f'"{line_item.variant.display_name}"'),
        )
        return False

    def is_available(self, order: Order, line_item: LineItem) -> bool:
        """Check the whole quantity, or re-check what is already allocated.

        Without units the ledger is asked for ``line_item.quantity`` across
        all active locations.  Once units exist, each location's *pending*
        allocation is re-validated against that location instead; the
        net change in quantity is not what gets checked.
        """
        variant = line_item.variant
        units = order.inventory_units_for(line_item)
        if not units:
            return self._ledger.can_supply(variant, line_item.quantity)

        quantity_by_location: dict[str, int] = {}
        for unit in units:
            if not unit.pending:
                continue
            location_id = unit.stock_location_id
            quantity_by_location[location_id] = quantity_by_location.get(location_id, 0) + unit.quantity

        return all(
            self._ledger.can_supply(variant, quantity, location_id)
            for location_id, quantity in quantity_by_location.items()
        )
