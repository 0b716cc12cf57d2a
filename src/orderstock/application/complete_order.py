"""Application service: Complete Order use case.

Checks availability for every line item, commits the pending units
against the stock ledger and moves the order to COMPLETE.  From then on
every quantity change is reconciled by ``OrderInventory``.
"""

from __future__ import annotations

from orderstock.application.dto import OrderDTO, order_to_dto
from orderstock.application.transaction import StockBackend, reconciliation
from orderstock.domain.exceptions import ValidationError
from orderstock.domain.repository.order_repository import OrderRepository
from orderstock.domain.service.availability_validator import AvailabilityValidator
from orderstock.domain.service.inventory_units_finalizer import InventoryUnitsFinalizer
from orderstock.domain.service.shipment_proposer import ShipmentProposer


class CompleteOrderHandler:

    def __init__(self, order_repo: OrderRepository, stock: StockBackend) -> None:
        self._order_repo = order_repo
        self._stock = stock

    def handle(self, order_id: int) -> OrderDTO:
        ledger = self._stock.ledger()
        with reconciliation(self._order_repo, ledger, order_id, self._stock.locks) as order:
            if order.is_completed:
                raise ValidationError(f"Order #{order_id} is already complete")
            if not order.shipments:
                ShipmentProposer(ledger, self._stock.location_repo).propose(order)

            # Phase 1: validate every line item before touching stock
            validator = AvailabilityValidator(ledger)
            messages: list[str] = []
            for line_item in order.line_items:
                line_item.clear_errors()
                if not validator.validate(order, line_item):
                    messages.extend(line_item.errors["quantity"])
            if messages:
                raise ValidationError(" ".join(messages))

            # Phase 2: commit units against the ledger, then transition
            InventoryUnitsFinalizer(ledger).run(order.pending_inventory_units)
            order.complete()

        return order_to_dto(order)
