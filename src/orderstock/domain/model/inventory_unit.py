"""InventoryUnit: the smallest allocatable record.

A unit links a quantity of a variant to an order, a line item and
(once assigned) a shipment.  Units are owned by their shipment; the line
item reference is a lookup back-reference only.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from orderstock.domain.exceptions import ValidationError
from orderstock.domain.model.variant import Variant

if TYPE_CHECKING:
    from orderstock.domain.model.order import LineItem
    from orderstock.domain.model.shipment import Shipment


class InventoryUnitState(Enum):
    ON_HAND = "on_hand"
    BACKORDERED = "backordered"
    SHIPPED = "shipped"


# Order in which a shrinking line item gives units back: backorders are
# released before anything that is physically on hand.
REMOVAL_ORDER: tuple[InventoryUnitState, ...] = (
    InventoryUnitState.BACKORDERED,
    InventoryUnitState.ON_HAND,
    InventoryUnitState.SHIPPED,
)


def removal_rank(unit: InventoryUnit) -> int:
    """Sort key placing units in ``REMOVAL_ORDER``."""
    return REMOVAL_ORDER.index(unit.state)


@dataclass(eq=False)
class InventoryUnit:
    """Entity compared by identity.

    Invariants:
    - ``quantity`` is never negative
    - ``pending`` stays True until the unit is committed against the ledger
    """

    id: str
    variant: Variant
    line_item: LineItem = field(repr=False)
    quantity: int
    state: InventoryUnitState = InventoryUnitState.ON_HAND
    order_id: int | None = None
    shipment: Shipment | None = field(default=None, repr=False)
    pending: bool = True

    def __post_init__(self) -> None:
        if self.quantity < 0:
            raise ValidationError("Inventory unit quantity cannot be negative")

    @staticmethod
    def new(
        variant: Variant,
        line_item: LineItem,
        quantity: int,
        state: InventoryUnitState = InventoryUnitState.ON_HAND,
        order_id: int | None = None,
        pending: bool = True,
    ) -> InventoryUnit:
        return InventoryUnit(
            id=uuid.uuid4().hex,
            variant=variant,
            line_item=line_item,
            quantity=quantity,
            state=state,
            order_id=order_id,
            pending=pending,
        )

    @property
    def is_shipped(self) -> bool:
        return self.state == InventoryUnitState.SHIPPED

    @property
    def stock_location_id(self) -> str | None:
        return self.shipment.stock_location_id if self.shipment else None

    def decrement(self, quantity: int) -> None:
        """Give back part of this unit."""
        if quantity <= 0:
            raise ValidationError("Decrement quantity must be positive")
        if quantity > self.quantity:
            raise ValidationError(
                f"Cannot remove {quantity} from a unit holding {self.quantity}"
            )
        self.quantity -= quantity

    def split(self, quantity: int, state: InventoryUnitState) -> InventoryUnit:
        """Carve ``quantity`` off into a new unit in ``state``.

        The new unit is not attached to any shipment.
        """
        self.decrement(quantity)
        return InventoryUnit.new(
            variant=self.variant,
            line_item=self.line_item,
            quantity=quantity,
            state=state,
            order_id=self.order_id,
            pending=self.pending,
        )
