"""JSON-file-backed implementation of OrderRepository.

Orders are stored with their line items, shipments and inventory units
nested inside.  Variants are stored by ID and resolved through the
variant repository when an order is loaded.
"""

from __future__ import annotations

import json
import threading
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from orderstock.domain.exceptions import EntityNotFoundError
from orderstock.domain.model.inventory_unit import InventoryUnit, InventoryUnitState
from orderstock.domain.model.order import LineItem, Order, OrderState
from orderstock.domain.model.shipment import Shipment, ShipmentState
from orderstock.domain.model.value_objects import Money
from orderstock.domain.model.variant import Variant
from orderstock.domain.repository.order_repository import OrderRepository
from orderstock.domain.repository.variant_repository import VariantRepository


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path, variant_repo: VariantRepository) -> None:
        self._file_path = file_path
        self._variant_repo = variant_repo
        self._lock = threading.Lock()
        self._ensure_file()

    # --- OrderRepository interface --------------------------------------------

    def next_id(self) -> int:
        orders = self._load_raw()
        if not orders:
            return 1
        return max(o["id"] for o in orders) + 1

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._load_raw():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def get_line_item_quantity(self, order_id: int | None, line_item_id: str) -> int | None:
        if order_id is None:
            return None
        for raw in self._load_raw():
            if raw["id"] != order_id:
                continue
            for item in raw["line_items"]:
                if item["id"] == line_item_id:
                    return item["quantity"]
        return None

    def save(self, order: Order) -> None:
        with self._lock:
            orders = self._load_raw()

            if order.id is None:
                order.id = self.next_id()
                for shipment in order.shipments:
                    shipment.order_id = order.id

            # Upsert: replace if exists, otherwise append
            replaced = False
            for i, raw in enumerate(orders):
                if raw["id"] == order.id:
                    orders[i] = self._to_raw(order)
                    replaced = True
                    break
            if not replaced:
                orders.append(self._to_raw(order))

            self._persist_raw(orders)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "email": order.email,
            "state": order.state.value,
            "created_at": order.created_at.isoformat(),
            "completed_at": order.completed_at.isoformat() if order.completed_at else None,
            "line_items": [
                {
                    "id": item.id,
                    "variant_id": item.variant.id,
                    "quantity": item.quantity,
                    "price": str(item.price.amount),
                    "currency": item.price.currency,
                }
                for item in order.line_items
            ],
            "shipments": [
                {
                    "id": shipment.id,
                    "stock_location_id": shipment.stock_location_id,
                    "state": shipment.state.value,
                    "inventory_units": [
                        {
                            "id": unit.id,
                            "line_item_id": unit.line_item.id,
                            "variant_id": unit.variant.id,
                            "quantity": unit.quantity,
                            "state": unit.state.value,
                            "pending": unit.pending,
                        }
                        for unit in shipment.inventory_units
                    ],
                }
                for shipment in order.shipments
            ],
        }

    def _to_domain(self, raw: dict) -> Order:
        variants: dict[str, Variant] = {}
        line_items: dict[str, LineItem] = {}
        for i in raw["line_items"]:
            line_items[i["id"]] = LineItem(
                id=i["id"],
                variant=self._variant(i["variant_id"], variants),
                quantity=i["quantity"],
                price=Money(Decimal(i["price"]), i.get("currency", "USD")),
            )

        order = Order(
            id=raw["id"],
            email=raw["email"],
            line_items=list(line_items.values()),
            state=OrderState(raw["state"]),
            created_at=datetime.fromisoformat(raw["created_at"]),
            completed_at=datetime.fromisoformat(raw["completed_at"]) if raw.get("completed_at") else None,
        )
        for s in raw["shipments"]:
            shipment = Shipment(
                id=s["id"],
                order_id=order.id,
                stock_location_id=s["stock_location_id"],
                state=ShipmentState(s["state"]),
            )
            for u in s["inventory_units"]:
                shipment.add_unit(
                    InventoryUnit(
                        id=u["id"],
                        variant=self._variant(u["variant_id"], variants),
                        line_item=line_items[u["line_item_id"]],
                        quantity=u["quantity"],
                        state=InventoryUnitState(u["state"]),
                        pending=u.get("pending", True),
                    )
                )
            order.shipments.append(shipment)
        return order

    def _variant(self, variant_id: str, cache: dict[str, Variant]) -> Variant:
        if variant_id not in cache:
            variant = self._variant_repo.get_by_id(variant_id)
            if variant is None:
                raise EntityNotFoundError(f"Variant '{variant_id}' referenced by an order no longer exists")
            cache[variant_id] = variant
        return cache[variant_id]

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, orders: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(orders, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
