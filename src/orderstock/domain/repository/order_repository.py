"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from orderstock.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def next_id(self) -> int:
        """Generate the next unique order ID."""

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def get_line_item_quantity(self, order_id: int | None, line_item_id: str) -> int | None:
        """Return the persisted quantity of a line item.

        None when the order or line item has never been saved.
        """

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a new or updated order, including shipments and units."""
