"""Application service: Propose Shipments use case."""

from __future__ import annotations

from orderstock.application.dto import OrderDTO, order_to_dto
from orderstock.application.transaction import StockBackend, reconciliation
from orderstock.domain.exceptions import ValidationError
from orderstock.domain.repository.order_repository import OrderRepository
from orderstock.domain.service.shipment_proposer import ShipmentProposer


class ProposeShipmentsHandler:

    def __init__(self, order_repo: OrderRepository, stock: StockBackend) -> None:
        self._order_repo = order_repo
        self._stock = stock

    def handle(self, order_id: int) -> OrderDTO:
        ledger = self._stock.ledger()
        with reconciliation(self._order_repo, ledger, order_id, self._stock.locks) as order:
            if not order.line_items:
                raise ValidationError(f"Order #{order_id} has no line items")
            ShipmentProposer(ledger, self._stock.location_repo).propose(order)
        return order_to_dto(order)
