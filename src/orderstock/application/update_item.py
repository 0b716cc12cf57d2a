"""Application service: Update Item Quantity use case."""

from __future__ import annotations

from orderstock.application.dto import OrderDTO, order_to_dto
from orderstock.application.transaction import StockBackend, reconciliation
from orderstock.domain.exceptions import EntityNotFoundError, ValidationError
from orderstock.domain.repository.order_repository import OrderRepository
from orderstock.domain.repository.variant_repository import VariantRepository
from orderstock.domain.service.order_inventory import OrderInventory
from orderstock.domain.service.shipment_proposer import ShipmentProposer


class UpdateItemHandler:

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
        """Set a line item's quantity and reconcile its inventory units.

        The new quantity is persisted before reconciling, so the
        reconciler reads it back from storage like any other caller.
        """
        if quantity <= 0:
            raise ValidationError("Quantity must be positive; remove the item instead")
        variant = self._variant_repo.get_by_sku(sku)
        if variant is None:
            raise EntityNotFoundError(f"Variant not found: '{sku}'")

        ledger = self._stock.ledger()
        with reconciliation(self._order_repo, ledger, order_id, self._stock.locks) as order:
            line_item = order.find_line_item_by_variant(variant.id)
            if line_item is None:
                raise ValidationError(f"'{sku}' is not on order #{order_id}")
            shipment = order.find_shipment(shipment_id) if shipment_id else None

            line_item.change_quantity(quantity)
            self._order_repo.save(order)

            if order.is_completed or shipment is not None:
                OrderInventory(ledger, self._order_repo).verify(order, line_item, shipment)
            elif order.shipments:
                ShipmentProposer(ledger, self._stock.location_repo).propose(order)

        return order_to_dto(order)
