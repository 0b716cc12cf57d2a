"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from orderstock.domain.model.order import Order


@dataclass(frozen=True)
class LineItemDTO:
    id: str
    sku: str
    name: str  # display name, options included
    quantity: int
    price: str  # formatted, e.g. "$15.00"
    amount: str
    errors: list[str]


@dataclass(frozen=True)
class InventoryUnitDTO:
    sku: str
    state: str
    quantity: int
    pending: bool
    amount: str


@dataclass(frozen=True)
class ShipmentDTO:
    id: str
    stock_location_id: str
    state: str
    units: list[InventoryUnitDTO]
    weight: str
    item_amount: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: int
    email: str
    state: str
    line_items: list[LineItemDTO]
    shipments: list[ShipmentDTO]
    item_total: str
    created_at: str
    completed_at: str | None


def order_to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        email=order.email,
        state=order.state.value,
        line_items=[
            LineItemDTO(
                id=item.id,
                sku=item.variant.sku,
                name=item.variant.display_name,
                quantity=item.quantity,
                price=str(item.price),
                amount=str(item.amount),
                errors=[msg for messages in item.errors.values() for msg in messages],
            )
            for item in order.line_items
        ],
        shipments=[
            ShipmentDTO(
                id=shipment.id,
                stock_location_id=shipment.stock_location_id,
                state=shipment.state.value,
                units=[
                    InventoryUnitDTO(
                        sku=content.variant.sku,
                        state=content.state.value,
                        quantity=content.quantity,
                        pending=content.inventory_unit.pending,
                        amount=str(content.amount),
                    )
                    for content in shipment.contents
                ],
                weight=str(shipment.weight),
                item_amount=str(shipment.item_amount),
            )
            for shipment in order.shipments
        ],
        item_total=str(order.item_total),
        created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
        completed_at=order.completed_at.strftime("%Y-%m-%d %H:%M UTC") if order.completed_at else None,
    )
