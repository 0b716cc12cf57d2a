"""Abstract repositories for stock locations and their counters.

Defined in the domain layer so the stock ledger never depends on
infrastructure.  Stock items are stored one record per
(location, variant) pair so that two variants at the same location can
be adjusted independently.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from orderstock.domain.model.stock import StockItem, StockLocation, StockMovement


class StockLocationRepository(ABC):

    @abstractmethod
    def get_by_id(self, location_id: str) -> StockLocation | None:
        """Return a stock location by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[StockLocation]:
        """Return every stock location."""

    @abstractmethod
    def save(self, location: StockLocation) -> None:
        """Persist a new or updated stock location."""


class StockItemRepository(ABC):

    @abstractmethod
    def get(self, stock_location_id: str, variant_id: str) -> StockItem | None:
        """Return the counter for a variant at a location, or None."""

    @abstractmethod
    def list_for_variant(self, variant_id: str) -> list[StockItem]:
        """Return the variant's counters at every location."""

    @abstractmethod
    def list_all(self) -> list[StockItem]:
        """Return every stock item."""

    @abstractmethod
    def save(self, item: StockItem) -> None:
        """Persist a new or updated stock item."""

    @abstractmethod
    def add_movement(self, movement: StockMovement) -> None:
        """Append a movement to the stock journal."""

    @abstractmethod
    def list_movements(self, variant_id: str | None = None) -> list[StockMovement]:
        """Return journalled movements, optionally for one variant."""
