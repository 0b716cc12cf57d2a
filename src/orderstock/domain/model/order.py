"""Order aggregate: owns its line items and shipments.

Line items say what the customer wants; shipments hold the inventory
units actually allocated.  Keeping the two in agreement is the job of
``OrderInventory`` in the domain service layer.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from orderstock.domain.exceptions import ValidationError
from orderstock.domain.model.inventory_unit import InventoryUnit
from orderstock.domain.model.shipment import Shipment
from orderstock.domain.model.value_objects import Money
from orderstock.domain.model.variant import Variant


class OrderState(Enum):
    CART = "cart"
    COMPLETE = "complete"


@dataclass
class LineItem:
    """This order wants ``quantity`` units of ``variant`` at ``price``.

    ``errors`` collects user-facing validation messages keyed by field.
    They block checkout but are never raised.
    """

    id: str
    variant: Variant
    quantity: int
    price: Money  # locked when the item is added
    errors: dict[str, list[str]] = field(default_factory=dict, compare=False)

    def __post_init__(self) -> None:
        if self.quantity < 0:
            raise ValidationError("Line item quantity cannot be negative")

    @property
    def amount(self) -> Money:
        return self.price * self.quantity

    def change_quantity(self, quantity: int) -> None:
        if not isinstance(quantity, int) or quantity < 0:
            raise ValidationError(f"Invalid quantity {quantity!r} for {self.variant.display_name}")
        self.quantity = quantity

    def add_error(self, attribute: str, message: str) -> None:
        self.errors.setdefault(attribute, []).append(message)

    def clear_errors(self) -> None:
        self.errors.clear()


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use ``Order.create()`` for new orders.  The ``__init__`` stays simple so
    the repository can reconstitute persisted orders without re-validating.
    """

    id: int | None
    email: str
    line_items: list[LineItem] = field(default_factory=list)
    shipments: list[Shipment] = field(default_factory=list)
    state: OrderState = OrderState.CART
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    completed_at: datetime | None = None

    @staticmethod
    def create(email: str) -> Order:
        if not email or "@" not in email:
            raise ValidationError(f"A valid email is required, got {email!r}")
        return Order(id=None, email=email.strip())

    # --- State transitions ----------------------------------------------------

    @property
    def is_completed(self) -> bool:
        return self.state == OrderState.COMPLETE

    def complete(self) -> None:
        """Transition CART -> COMPLETE.

        Units must already be finalized against the ledger; the
        application handler coordinates that before calling this.
        """
        if self.is_completed:
            raise ValidationError(f"Order #{self.id} is already complete")
        if not self.line_items:
            raise ValidationError("Cannot complete an order without line items")
        if not self.shipments:
            raise ValidationError("Cannot complete an order without shipments")
        self.state = OrderState.COMPLETE
        self.completed_at = datetime.now(timezone.utc)

    # --- Line items -----------------------------------------------------------

    def add_line_item(self, variant: Variant, quantity: int) -> LineItem:
        """Add ``quantity`` of ``variant``, merging into an existing line item."""
        if quantity <= 0:
            raise ValidationError("Quantity must be positive")
        existing = self.find_line_item_by_variant(variant.id)
        if existing is not None:
            existing.change_quantity(existing.quantity + quantity)
            return existing
        line_item = LineItem(
            id=uuid.uuid4().hex,
            variant=variant,
            quantity=quantity,
            price=variant.price,
        )
        self.line_items.append(line_item)
        return line_item

    def remove_line_item(self, line_item: LineItem) -> None:
        if self.inventory_units_for(line_item):
            raise ValidationError(
                f"{line_item.variant.display_name} still has inventory units allocated"
            )
        self.line_items.remove(line_item)

    def find_line_item_by_variant(self, variant_id: str) -> LineItem | None:
        for item in self.line_items:
            if item.variant.id == variant_id:
                return item
        return None

    # --- Shipments ------------------------------------------------------------

    def add_shipment(self, shipment: Shipment) -> None:
        shipment.order_id = self.id
        self.shipments.append(shipment)

    def remove_shipment(self, shipment: Shipment) -> None:
        self.shipments.remove(shipment)

    def find_shipment(self, shipment_id: str) -> Shipment:
        for shipment in self.shipments:
            if shipment.id == shipment_id:
                return shipment
        raise ValidationError(f"Shipment '{shipment_id}' not found in order #{self.id}")

    # --- Inventory units ------------------------------------------------------

    @property
    def inventory_units(self) -> list[InventoryUnit]:
        return [unit for shipment in self.shipments for unit in shipment.inventory_units]

    def inventory_units_for(self, line_item: LineItem) -> list[InventoryUnit]:
        return [unit for unit in self.inventory_units if unit.line_item.id == line_item.id]

    @property
    def pending_inventory_units(self) -> list[InventoryUnit]:
        return [unit for unit in self.inventory_units if unit.pending]

    # --- Computed properties --------------------------------------------------

    @property
    def item_total(self) -> Money:
        result = Money.zero()
        for item in self.line_items:
            result = result + item.amount
        return result
