"""Domain service: reconcile a line item's quantity with its inventory units.

Whenever a line item changes, ``OrderInventory.verify`` makes the units
allocated to the order's shipments add up to the requested quantity
again: it creates on-hand / backordered units when the item grows and
shrinks or destroys units when it gets smaller, keeping the stock ledger
in step for completed orders.

Orders still in checkout get their units from the proposed shipments
(see ``ShipmentProposer``), so ``verify`` only acts on completed orders or
when a shipment is passed explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import structlog

from orderstock.domain.exceptions import NoTargetShipmentError, ValidationError
from orderstock.domain.model.inventory_unit import InventoryUnit, InventoryUnitState, removal_rank
from orderstock.domain.model.order import LineItem, Order
from orderstock.domain.model.shipment import Shipment
from orderstock.domain.repository.order_repository import OrderRepository
from orderstock.domain.service.inventory_units_finalizer import InventoryUnitsFinalizer
from orderstock.domain.service.shipment_selector import ShipmentSelector
from orderstock.domain.service.stock_ledger import StockLedger

logger = structlog.get_logger(__name__)


class RemovalOutcome(Enum):
    REMOVED = "removed"  # everything requested was removed
    BLOCKED = "blocked"  # shipment already shipped, nothing touched
    EXHAUSTED = "exhausted"  # ran out of eligible units


@dataclass(frozen=True)
class RemovalResult:
    requested: int
    removed: int
    outcome: RemovalOutcome

    @staticmethod
    def of(requested: int, removed: int) -> RemovalResult:
        outcome = RemovalOutcome.REMOVED if removed >= requested else RemovalOutcome.EXHAUSTED
        return RemovalResult(requested, removed, outcome)

    @staticmethod
    def blocked(requested: int) -> RemovalResult:
        return RemovalResult(requested, 0, RemovalOutcome.BLOCKED)

    @property
    def shortfall(self) -> int:
        return self.requested - self.removed


class OrderInventory:

    def __init__(
        self,
        ledger: StockLedger,
        order_repo: OrderRepository | None = None,
        selector: ShipmentSelector | None = None,
        finalizer: InventoryUnitsFinalizer | None = None,
    ) -> None:
        self._ledger = ledger
        self._order_repo = order_repo
        self._selector = selector or ShipmentSelector()
        self._finalizer = finalizer or InventoryUnitsFinalizer(ledger)

    def verify(self, order: Order, line_item: LineItem, shipment: Shipment | None = None) -> None:
        """Bring the line item's units in line with its quantity.

        Raises NoTargetShipmentError when units must be added but no
        open shipment can take them.
        """
        if not (order.is_completed or shipment is not None):
            return

        self._refresh(order, line_item)
        existing_quantity = sum(unit.quantity for unit in order.inventory_units_for(line_item))
        desired_quantity = line_item.quantity - existing_quantity

        if desired_quantity > 0:
            target = shipment or self._selector.determine_target_shipment(order, line_item.variant)
            if target is None:
                raise NoTargetShipmentError(
                    f"No open shipment on order #{order.id} can take "
                    f"{desired_quantity} of {line_item.variant.display_name}"
                )
            self.add_to_shipment(order, line_item, target, desired_quantity)
        elif desired_quantity < 0:
            result = self.remove(order, line_item, -desired_quantity, shipment)
            if result.outcome is not RemovalOutcome.REMOVED:
                logger.warning(
                    "inventory.removal_short",
                    order_id=order.id,
                    line_item_id=line_item.id,
                    variant=line_item.variant.sku,
                    requested=result.requested,
                    removed=result.removed,
                    outcome=result.outcome.value,
                )

    # --- Adding ---------------------------------------------------------------

    def add_to_shipment(
        self,
        order: Order,
        line_item: LineItem,
        shipment: Shipment,
        quantity: int,
    ) -> int:
        """Create units for ``quantity`` on ``shipment`` and return the quantity added."""
        if shipment.is_shipped:
            raise ValidationError(f"Shipment {shipment.id} has already shipped")
        if shipment not in order.shipments:
            order.add_shipment(shipment)

        variant = line_item.variant
        pending_units: list[InventoryUnit] = []
        # the counter stays locked from the on-hand read until the units are unstocked
        with self._ledger.hold(variant, shipment.stock_location_id):
            if self._ledger.tracks(variant):
                fill = self._ledger.fill_status(variant, quantity, shipment.stock_location_id)
                if fill.on_hand:
                    pending_units.append(
                        shipment.set_up_inventory(
                            InventoryUnitState.ON_HAND, variant, order.id, line_item, fill.on_hand
                        )
                    )
                if fill.backordered:
                    pending_units.append(
                        shipment.set_up_inventory(
                            InventoryUnitState.BACKORDERED, variant, order.id, line_item, fill.backordered
                        )
                    )
            else:
                pending_units.append(
                    shipment.set_up_inventory(
                        InventoryUnitState.ON_HAND, variant, order.id, line_item, quantity
                    )
                )

            # the units leave the stock location as soon as a completed order owns them
            if order.is_completed:
                self._finalizer.run(pending_units)

        logger.info(
            "inventory.added",
            order_id=order.id,
            line_item_id=line_item.id,
            shipment_id=shipment.id,
            variant=variant.sku,
            quantity=quantity,
        )
        return quantity

    # --- Removing -------------------------------------------------------------

    def remove(
        self,
        order: Order,
        line_item: LineItem,
        quantity: int,
        shipment: Shipment | None = None,
    ) -> RemovalResult:
        if shipment is not None:
            return self.remove_from_shipment(order, line_item, shipment, quantity)
        return self.remove_from_any_shipment(order, line_item, quantity)

    def remove_from_any_shipment(self, order: Order, line_item: LineItem, quantity: int) -> RemovalResult:
        """Take ``quantity`` away, walking the order's shipments in order."""
        remaining = quantity
        outcomes: list[RemovalOutcome] = []
        for shipment in list(order.shipments):
            if remaining == 0:
                break
            result = self.remove_from_shipment(order, line_item, shipment, remaining)
            remaining -= result.removed
            outcomes.append(result.outcome)

        removed = quantity - remaining
        if remaining and outcomes and all(o is RemovalOutcome.BLOCKED for o in outcomes):
            return RemovalResult.blocked(quantity)
        return RemovalResult.of(quantity, removed)

    def remove_from_shipment(
        self,
        order: Order,
        line_item: LineItem,
        shipment: Shipment,
        quantity: int,
    ) -> RemovalResult:
        """Shrink or destroy this line item's units on one shipment.

        Units are consumed in ``REMOVAL_ORDER`` (backordered first).  A
        shipped shipment is never touched and reports ``BLOCKED``.
        """
        if quantity == 0:
            return RemovalResult.of(0, 0)
        if shipment.is_shipped:
            return RemovalResult.blocked(quantity)

        variant = line_item.variant
        candidates = sorted(
            (unit for unit in shipment.inventory_units_for_item(line_item, variant) if not unit.is_shipped),
            key=removal_rank,
        )

        removed = 0
        for unit in candidates:
            remaining = quantity - removed
            if remaining == 0:
                break
            if unit.quantity <= remaining:
                removed += unit.quantity
                shipment.destroy_unit(unit)
            else:
                unit.decrement(remaining)
                removed += remaining

        if shipment.total_quantity == 0 and shipment in order.shipments:
            order.remove_shipment(shipment)
            logger.info("shipment.removed", order_id=order.id, shipment_id=shipment.id)

        # give the stock back to the location the units were leaving from
        if order.is_completed and removed:
            self._ledger.restock(variant, removed, shipment.stock_location_id, originator=shipment.id)

        logger.info(
            "inventory.removed",
            order_id=order.id,
            line_item_id=line_item.id,
            shipment_id=shipment.id,
            variant=variant.sku,
            requested=quantity,
            removed=removed,
        )
        return RemovalResult.of(quantity, removed)

    # --- Internal helpers -----------------------------------------------------

    def _refresh(self, order: Order, line_item: LineItem) -> None:
        if self._order_repo is None:
            return
        persisted = self._order_repo.get_line_item_quantity(order.id, line_item.id)
        if persisted is not None and persisted != line_item.quantity:
            line_item.change_quantity(persisted)
