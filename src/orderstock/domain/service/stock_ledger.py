"""Domain service: Stock Ledger.

The ledger is the only component that reads or changes the per-location
stock counters.  It is passed explicitly to the services that need it.

``StockItemLedger`` applies each adjustment as a locked read-modify-write
on a single (location, variant) counter and keeps a journal of what it
changed, so a failed use case can put every counter back with
``rollback()``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager

import structlog

from orderstock.domain.exceptions import EntityNotFoundError, ValidationError
from orderstock.domain.model.stock import FillStatus, StockItem, StockMovement
from orderstock.domain.model.variant import Variant
from orderstock.domain.repository.stock_repository import (
    StockItemRepository,
    StockLocationRepository,
)
from orderstock.domain.service.locks import KeyedLock

logger = structlog.get_logger(__name__)


class StockLedger(ABC):

    track_inventory_levels: bool = True

    def tracks(self, variant: Variant) -> bool:
        """Whether counters apply to ``variant`` under this ledger's settings."""
        return variant.should_track_inventory(self.track_inventory_levels)

    @abstractmethod
    def hold(self, variant: Variant, stock_location_id: str) -> AbstractContextManager[None]:
        """Context manager keeping other callers off one counter until it exits."""

    @abstractmethod
    def fill_status(self, variant: Variant, quantity: int, stock_location_id: str) -> FillStatus:
        """Split ``quantity`` into what the location has on hand and what must be backordered."""

    @abstractmethod
    def restock(
        self,
        variant: Variant,
        quantity: int,
        stock_location_id: str,
        originator: str | None = None,
    ) -> int:
        """Increase the on-hand count and return the new count."""

    @abstractmethod
    def unstock(
        self,
        variant: Variant,
        quantity: int,
        stock_location_id: str,
        originator: str | None = None,
    ) -> int:
        """Decrease the on-hand count (possibly below zero) and return the new count."""

    @abstractmethod
    def can_supply(self, variant: Variant, quantity: int, stock_location_id: str | None = None) -> bool:
        """Whether ``quantity`` can be supplied from one location or from all active ones."""


class StockItemLedger(StockLedger):

    def __init__(
        self,
        item_repo: StockItemRepository,
        location_repo: StockLocationRepository,
        locks: KeyedLock | None = None,
        track_inventory_levels: bool = True,
    ) -> None:
        self._item_repo = item_repo
        self._location_repo = location_repo
        self._locks = locks or KeyedLock()
        self.track_inventory_levels = track_inventory_levels
        self._journal: list[StockMovement] = []

    @contextmanager
    def hold(self, variant: Variant, stock_location_id: str) -> Iterator[None]:
        with self._locks.hold((stock_location_id, variant.id)):
            yield

    # --- Queries --------------------------------------------------------------

    def fill_status(self, variant: Variant, quantity: int, stock_location_id: str) -> FillStatus:
        if not self.tracks(variant):
            return FillStatus.all_on_hand(quantity)
        with self._locks.hold((stock_location_id, variant.id)):
            item = self._item_repo.get(stock_location_id, variant.id)
        if item is None:
            return FillStatus(on_hand=0, backordered=quantity)
        return item.fill_status(quantity)

    def can_supply(self, variant: Variant, quantity: int, stock_location_id: str | None = None) -> bool:
        if not self.tracks(variant):
            return True
        if stock_location_id is not None:
            items = [self._item_repo.get(stock_location_id, variant.id)]
        else:
            items = self._item_repo.list_for_variant(variant.id)
        items = [item for item in items if item is not None and self._is_active(item.stock_location_id)]

        total_on_hand = sum(item.count_on_hand for item in items)
        return total_on_hand >= quantity or any(item.backorderable for item in items)

    # --- Mutations ------------------------------------------------------------

    def restock(
        self,
        variant: Variant,
        quantity: int,
        stock_location_id: str,
        originator: str | None = None,
    ) -> int:
        if quantity < 0:
            raise ValidationError("Restock quantity cannot be negative")
        return self._move(variant, quantity, stock_location_id, originator)

    def unstock(
        self,
        variant: Variant,
        quantity: int,
        stock_location_id: str,
        originator: str | None = None,
    ) -> int:
        if quantity < 0:
            raise ValidationError("Unstock quantity cannot be negative")
        return self._move(variant, -quantity, stock_location_id, originator)

    # --- Transaction boundary -------------------------------------------------

    @property
    def journal(self) -> list[StockMovement]:
        return list(self._journal)

    def commit(self) -> None:
        self._journal.clear()

    def rollback(self) -> None:
        """Undo every adjustment made since the last commit, newest first."""
        while self._journal:
            movement = self._journal.pop()
            self._adjust(
                movement.stock_location_id,
                movement.variant_id,
                -movement.quantity,
                f"rollback:{movement.originator}" if movement.originator else "rollback",
            )
            logger.info(
                "stock.rolled_back",
                stock_location_id=movement.stock_location_id,
                variant_id=movement.variant_id,
                quantity=-movement.quantity,
            )

    # --- Internal helpers -----------------------------------------------------

    def _move(self, variant: Variant, delta: int, stock_location_id: str, originator: str | None) -> int:
        if delta == 0 or not self.tracks(variant):
            item = self._item_repo.get(stock_location_id, variant.id)
            return item.count_on_hand if item else 0

        movement, count = self._adjust(stock_location_id, variant.id, delta, originator)
        self._journal.append(movement)
        logger.debug(
            "stock.moved",
            stock_location_id=stock_location_id,
            variant=variant.sku,
            quantity=delta,
            count_on_hand=count,
            originator=originator,
        )
        return count

    def _adjust(
        self,
        stock_location_id: str,
        variant_id: str,
        delta: int,
        originator: str | None,
    ) -> tuple[StockMovement, int]:
        with self._locks.hold((stock_location_id, variant_id)):
            item = self._item_repo.get(stock_location_id, variant_id)
            if item is None:
                item = self._new_item(stock_location_id, variant_id)
            count = item.adjust(delta)
            self._item_repo.save(item)
            movement = StockMovement(
                stock_location_id=stock_location_id,
                variant_id=variant_id,
                quantity=delta,
                originator=originator,
            )
            self._item_repo.add_movement(movement)
        return movement, count

    def _new_item(self, stock_location_id: str, variant_id: str) -> StockItem:
        location = self._location_repo.get_by_id(stock_location_id)
        if location is None:
            raise EntityNotFoundError(f"Stock location '{stock_location_id}' not found")
        return StockItem(
            stock_location_id=stock_location_id,
            variant_id=variant_id,
            backorderable=location.backorderable_default,
        )

    def _is_active(self, stock_location_id: str) -> bool:
        location = self._location_repo.get_by_id(stock_location_id)
        return location is not None and location.active
