"""Transaction boundary for use cases that touch orders and stock together.

A reconciliation either succeeds as a whole or leaves both the order and
the stock counters exactly as they were: on any exception the ledger's
journal is reversed and the order snapshot taken on entry is saved back
before the exception propagates.  The order is locked for the duration.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

import structlog

from orderstock.domain.exceptions import EntityNotFoundError
from orderstock.domain.model.order import Order
from orderstock.domain.repository.order_repository import OrderRepository
from orderstock.domain.repository.stock_repository import (
    StockItemRepository,
    StockLocationRepository,
)
from orderstock.domain.service.locks import KeyedLock
from orderstock.domain.service.stock_ledger import StockItemLedger

logger = structlog.get_logger(__name__)


@dataclass
class StockBackend:
    """Everything needed to open a ledger; one ledger per use case call."""

    item_repo: StockItemRepository
    location_repo: StockLocationRepository
    locks: KeyedLock = field(default_factory=KeyedLock)
    track_inventory_levels: bool = True

    def ledger(self) -> StockItemLedger:
        return StockItemLedger(
            self.item_repo,
            self.location_repo,
            locks=self.locks,
            track_inventory_levels=self.track_inventory_levels,
        )


@contextmanager
def reconciliation(
    order_repo: OrderRepository,
    ledger: StockItemLedger,
    order_id: int,
    locks: KeyedLock,
) -> Iterator[Order]:
    with locks.hold(("order", order_id)):
        snapshot = order_repo.get_by_id(order_id)
        if snapshot is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        order = order_repo.get_by_id(order_id)

        try:
            yield order
            order_repo.save(order)
        except Exception:
            ledger.rollback()
            order_repo.save(snapshot)
            logger.warning("order.rolled_back", order_id=order_id)
            raise
        ledger.commit()
