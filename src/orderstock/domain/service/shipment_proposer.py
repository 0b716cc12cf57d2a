"""Domain service: propose shipments for an order still in checkout.

The builder stages one unit per line item; each unit is packed at a
stock location and split into on-hand and backordered content items by
the ledger's fill status.  One pending shipment is created per location.
Nothing is unstocked here: that happens when the order completes.
"""

from __future__ import annotations

import structlog

from orderstock.domain.exceptions import NoTargetShipmentError, ValidationError
from orderstock.domain.model.content_item import ContentItem
from orderstock.domain.model.inventory_unit import InventoryUnit, InventoryUnitState
from orderstock.domain.model.order import Order
from orderstock.domain.model.shipment import Shipment
from orderstock.domain.model.variant import Variant
from orderstock.domain.repository.stock_repository import StockLocationRepository
from orderstock.domain.service.inventory_unit_builder import InventoryUnitBuilder
from orderstock.domain.service.stock_ledger import StockLedger

logger = structlog.get_logger(__name__)


class ShipmentProposer:

    def __init__(self, ledger: StockLedger, location_repo: StockLocationRepository) -> None:
        self._ledger = ledger
        self._location_repo = location_repo

    def propose(self, order: Order) -> list[Shipment]:
        """Replace the order's shipments with freshly packed ones."""
        if order.is_completed:
            raise ValidationError(f"Order #{order.id} is complete; its shipments are final")

        packages: dict[str, list[ContentItem]] = {}
        for unit in InventoryUnitBuilder(order).units():
            if unit.quantity == 0:
                continue
            location_id = self._location_for(unit.variant, unit.quantity)
            packages.setdefault(location_id, []).extend(self._pack(unit, location_id))

        for shipment in list(order.shipments):
            order.remove_shipment(shipment)

        shipments: list[Shipment] = []
        for location_id, contents in packages.items():
            shipment = Shipment.new(order.id, location_id)
            for item in contents:
                item.inventory_unit.state = item.state
                shipment.add_unit(item.inventory_unit)
            order.add_shipment(shipment)
            shipments.append(shipment)

        logger.info("shipments.proposed", order_id=order.id, shipments=len(shipments))
        return shipments

    def _pack(self, unit: InventoryUnit, location_id: str) -> list[ContentItem]:
        if not self._ledger.tracks(unit.variant):
            return [ContentItem(unit, InventoryUnitState.ON_HAND)]

        fill = self._ledger.fill_status(unit.variant, unit.quantity, location_id)
        if not fill.backordered:
            return [ContentItem(unit, InventoryUnitState.ON_HAND)]
        if not fill.on_hand:
            return [ContentItem(unit, InventoryUnitState.BACKORDERED)]
        backordered = unit.split(fill.backordered, InventoryUnitState.BACKORDERED)
        return [
            ContentItem(unit, InventoryUnitState.ON_HAND),
            ContentItem(backordered, InventoryUnitState.BACKORDERED),
        ]

    def _location_for(self, variant: Variant, quantity: int) -> str:
        """First active location with everything on hand, else the first active one."""
        active: list[str] = []
        for location_id in variant.stock_location_ids:
            location = self._location_repo.get_by_id(location_id)
            if location is not None and location.active:
                active.append(location_id)
        if not active:
            raise NoTargetShipmentError(f"No active stock location stocks {variant.display_name}")

        for location_id in active:
            if not self._ledger.fill_status(variant, quantity, location_id).backordered:
                return location_id
        return active[0]
