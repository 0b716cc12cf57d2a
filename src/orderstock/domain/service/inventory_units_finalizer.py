"""Domain service: commit pending inventory units against the stock ledger.

Units created for an order are speculative until the order is complete.
Finalizing unstocks their quantity at the shipment's stock location
(on-hand units consume stock, backordered units push the count below
zero) and clears the ``pending`` flag.
"""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from orderstock.domain.exceptions import ValidationError
from orderstock.domain.model.inventory_unit import InventoryUnit
from orderstock.domain.model.shipment import Shipment
from orderstock.domain.service.stock_ledger import StockLedger

logger = structlog.get_logger(__name__)


class InventoryUnitsFinalizer:

    def __init__(self, ledger: StockLedger) -> None:
        self._ledger = ledger

    def run(self, units: Iterable[InventoryUnit]) -> None:
        pending = [unit for unit in units if unit.pending]

        # Phase 1: validate and group per shipment and variant
        grouped: dict[tuple[Shipment, str], list[InventoryUnit]] = {}
        for unit in pending:
            if unit.shipment is None:
                raise ValidationError(
                    f"Cannot finalize unit of {unit.variant.display_name} without a shipment"
                )
            grouped.setdefault((unit.shipment, unit.variant.id), []).append(unit)

        # Phase 2: unstock and mark finalized
        for (shipment, _variant_id), group in grouped.items():
            variant = group[0].variant
            quantity = sum(unit.quantity for unit in group)
            if self._ledger.tracks(variant) and quantity > 0:
                self._ledger.unstock(
                    variant, quantity, shipment.stock_location_id, originator=shipment.id
                )
            for unit in group:
                unit.pending = False

        if pending:
            logger.info("inventory.finalized", units=len(pending))
