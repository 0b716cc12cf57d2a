"""Variant: a purchasable SKU.

Variants live in the catalog independently of orders.  Orders reference
them through line items; the stock ledger counts them per location.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from orderstock.domain.model.value_objects import Money


@dataclass
class Variant:

    id: str
    sku: str
    name: str
    price: Money
    weight: Decimal = Decimal("0")
    track_inventory: bool = True
    stock_location_ids: list[str] = field(default_factory=list)
    # ordered (option name, value) pairs, e.g. [("Color", "Red"), ("Size", "M")]
    option_values: list[tuple[str, str]] = field(default_factory=list)

    def should_track_inventory(self, track_inventory_levels: bool = True) -> bool:
        """Whether stock counters apply to this variant.

        ``track_inventory_levels`` is the store-wide switch; turning it off
        treats every variant as having unlimited stock.
        """
        return self.track_inventory and track_inventory_levels

    @property
    def options_text(self) -> str:
        return ", ".join(f"{name}: {value}" for name, value in self.option_values)

    @property
    def display_name(self) -> str:
        """Name plus the option summary, e.g. ``T-Shirt (Color: Red, Size: M)``."""
        if self.options_text:
            return f"{self.name} ({self.options_text})"
        return self.name
