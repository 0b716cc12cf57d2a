"""Domain service: pick the shipment a new quantity of a variant joins."""

from __future__ import annotations

from orderstock.domain.model.order import Order
from orderstock.domain.model.shipment import Shipment
from orderstock.domain.model.variant import Variant


class ShipmentSelector:

    def determine_target_shipment(self, order: Order, variant: Variant) -> Shipment | None:
        """Return the first unshipped shipment that fits, or None.

        Preference, first match wins:
          1. a ready or pending shipment already holding ``variant``
          2. a ready or pending shipment leaving from a location that
             stocks ``variant``
        """
        candidates = [shipment for shipment in order.shipments if shipment.is_ready_or_pending]

        for shipment in candidates:
            if shipment.includes(variant):
                return shipment
        for shipment in candidates:
            if shipment.stock_location_id in variant.stock_location_ids:
                return shipment
        return None
