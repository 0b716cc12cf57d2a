"""Application service: Create Order use case."""

from __future__ import annotations

from orderstock.application.dto import OrderDTO, order_to_dto
from orderstock.domain.model.order import Order
from orderstock.domain.repository.order_repository import OrderRepository


class CreateOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, email: str) -> OrderDTO:
        """Open an empty cart for ``email``."""
        order = Order.create(email)
        self._order_repo.save(order)
        return order_to_dto(order)
