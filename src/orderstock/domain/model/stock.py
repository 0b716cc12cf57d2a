"""Stock locations and the per-location counters the ledger maintains.

Each (stock location, variant) pair has one StockItem that knows how many
units are on hand there.  Every change to a counter is journalled as a
StockMovement so the history of restocks and unstocks can be audited.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from orderstock.domain.exceptions import ValidationError


@dataclass
class StockLocation:
    """A physical or logical place shipments leave from."""

    id: str
    name: str
    active: bool = True
    backorderable_default: bool = False


@dataclass(frozen=True)
class FillStatus:
    """Split of a requested quantity into on-hand and backordered portions.

    Invariant: ``on_hand + backordered`` equals the quantity asked for.
    """

    on_hand: int
    backordered: int

    def __post_init__(self) -> None:
        if self.on_hand < 0 or self.backordered < 0:
            raise ValidationError("Fill status portions cannot be negative")

    @property
    def quantity(self) -> int:
        return self.on_hand + self.backordered

    @staticmethod
    def all_on_hand(quantity: int) -> FillStatus:
        return FillStatus(on_hand=quantity, backordered=0)


@dataclass
class StockItem:
    """Counter for one variant at one stock location.

    ``count_on_hand`` goes negative when backordered units have been
    committed against the location; the negative part is the backlog.
    """

    stock_location_id: str
    variant_id: str
    count_on_hand: int = 0
    backorderable: bool = False

    def fill_status(self, quantity: int) -> FillStatus:
        if quantity < 0:
            raise ValidationError("Fill status quantity cannot be negative")
        if self.count_on_hand >= quantity:
            return FillStatus.all_on_hand(quantity)
        on_hand = max(self.count_on_hand, 0)
        return FillStatus(on_hand=on_hand, backordered=quantity - on_hand)

    def adjust(self, delta: int) -> int:
        """Apply a signed change to the on-hand count and return the new count."""
        self.count_on_hand += delta
        return self.count_on_hand


@dataclass(frozen=True)
class StockMovement:
    """One signed adjustment of a stock item.

    Positive quantities are restocks, negative quantities are unstocks.
    ``originator`` names what caused the movement (usually a shipment id).
    """

    stock_location_id: str
    variant_id: str
    quantity: int
    originator: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
