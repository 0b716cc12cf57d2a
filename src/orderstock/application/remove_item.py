"""Application service: Remove Item use case.

With a shipment, only the item's units on that shipment are removed and
the line item shrinks accordingly.  Without one the whole line item
goes.  Completed orders give the stock back to the ledger; carts simply
drop their proposed shipments and have them proposed again.
"""

from __future__ import annotations

from orderstock.application.dto import OrderDTO, order_to_dto
from orderstock.application.transaction import StockBackend, reconciliation
from orderstock.domain.exceptions import EntityNotFoundError, ValidationError
from orderstock.domain.repository.order_repository import OrderRepository
from orderstock.domain.repository.variant_repository import VariantRepository
from orderstock.domain.service.order_inventory import OrderInventory
from orderstock.domain.service.shipment_proposer import ShipmentProposer


class RemoveItemHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        variant_repo: VariantRepository,
        stock: StockBackend,
    ) -> None:
        self._order_repo = order_repo
        self._variant_repo = variant_repo
        self._stock = stock

    def handle(self, order_id: int, sku: str, shipment_id: str | None = None) -> OrderDTO:
        variant = self._variant_repo.get_by_sku(sku)
        if variant is None:
            raise EntityNotFoundError(f"Variant not found: '{sku}'")

        ledger = self._stock.ledger()
        with reconciliation(self._order_repo, ledger, order_id, self._stock.locks) as order:
            line_item = order.find_line_item_by_variant(variant.id)
            if line_item is None:
                raise ValidationError(f"'{sku}' is not on order #{order_id}")
            shipment = order.find_shipment(shipment_id) if shipment_id else None

            if shipment is None and not order.is_completed:
                had_shipments = bool(order.shipments)
                for proposed in list(order.shipments):
                    order.remove_shipment(proposed)
                order.remove_line_item(line_item)
                if had_shipments and order.line_items:
                    ShipmentProposer(ledger, self._stock.location_repo).propose(order)
            else:
                if shipment is not None:
                    on_shipment = sum(
                        unit.quantity
                        for unit in shipment.inventory_units_for_item(line_item, variant)
                        if not unit.is_shipped
                    )
                    line_item.change_quantity(line_item.quantity - on_shipment)
                else:
                    line_item.change_quantity(0)
                self._order_repo.save(order)

                OrderInventory(ledger, self._order_repo).verify(order, line_item, shipment)

                if line_item.quantity == 0:
                    if order.inventory_units_for(line_item):
                        raise ValidationError(
                            f"{variant.display_name} has shipped units and cannot be removed"
                        )
                    order.remove_line_item(line_item)

        return order_to_dto(order)
