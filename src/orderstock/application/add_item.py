"""Application service: Add Item use case.

Adds a variant to an order (merging into an existing line item) and
reconciles the order's inventory units with the new quantity.
"""

from __future__ import annotations

from orderstock.application.dto import OrderDTO, order_to_dto
from orderstock.application.transaction import StockBackend, reconciliation
from orderstock.domain.exceptions import EntityNotFoundError
from orderstock.domain.repository.order_repository import OrderRepository
from orderstock.domain.repository.variant_repository import VariantRepository
from orderstock.domain.service.order_inventory import OrderInventory
from orderstock.domain.service.shipment_proposer import ShipmentProposer


class AddItemHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        variant_repo: VariantRepository,
        stock: StockBackend,
    ) -> None:
        self._order_repo = order_repo
        self._variant_repo = variant_repo
        self._stock = stock

    def handle(
        self,
        order_id: int,
        sku: str,
        quantity: int,
        shipment_id: str | None = None,
    ) -> OrderDTO:
        variant = self._variant_repo.get_by_sku(sku)
        if variant is None:
            raise EntityNotFoundError(f"Variant not found: '{sku}'")

        ledger = self._stock.ledger()
        with reconciliation(self._order_repo, ledger, order_id, self._stock.locks) as order:
            shipment = order.find_shipment(shipment_id) if shipment_id else None
            line_item = order.add_line_item(variant, quantity)
            self._order_repo.save(order)

            if order.is_completed or shipment is not None:
                OrderInventory(ledger, self._order_repo).verify(order, line_item, shipment)
            elif order.shipments:
                # proposed shipments are stale once the cart changes
                ShipmentProposer(ledger, self._stock.location_repo).propose(order)

        return order_to_dto(order)
