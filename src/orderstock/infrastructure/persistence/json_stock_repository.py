"""JSON-file-backed implementations of the stock repositories.

Stock items and movements are rewritten under a per-file lock so that
concurrent adjustments of different (location, variant) counters cannot
overwrite each other's records.
"""

from __future__ import annotations

import json
import threading
from datetime import datetime
from pathlib import Path

from orderstock.domain.model.stock import StockItem, StockLocation, StockMovement
from orderstock.domain.repository.stock_repository import (
    StockItemRepository,
    StockLocationRepository,
)


class JsonStockLocationRepository(StockLocationRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        _ensure_file(self._file_path)

    def get_by_id(self, location_id: str) -> StockLocation | None:
        for raw in _load_raw(self._file_path):
            if raw["id"] == location_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[StockLocation]:
        return [self._to_domain(raw) for raw in _load_raw(self._file_path)]

    def save(self, location: StockLocation) -> None:
        records = [raw for raw in _load_raw(self._file_path) if raw["id"] != location.id]
        records.append(
            {
                "id": location.id,
                "name": location.name,
                "active": location.active,
                "backorderable_default": location.backorderable_default,
            }
        )
        _persist_raw(self._file_path, records)

    @staticmethod
    def _to_domain(raw: dict) -> StockLocation:
        return StockLocation(
            id=raw["id"],
            name=raw["name"],
            active=raw.get("active", True),
            backorderable_default=raw.get("backorderable_default", False),
        )


class JsonStockItemRepository(StockItemRepository):

    def __init__(self, items_path: Path, movements_path: Path) -> None:
        self._items_path = items_path
        self._movements_path = movements_path
        self._lock = threading.Lock()
        _ensure_file(self._items_path)
        _ensure_file(self._movements_path)

    # --- StockItemRepository interface ----------------------------------------

    def get(self, stock_location_id: str, variant_id: str) -> StockItem | None:
        for raw in _load_raw(self._items_path):
            if raw["stock_location_id"] == stock_location_id and raw["variant_id"] == variant_id:
                return self._to_domain(raw)
        return None

    def list_for_variant(self, variant_id: str) -> list[StockItem]:
        return [self._to_domain(raw) for raw in _load_raw(self._items_path) if raw["variant_id"] == variant_id]

    def list_all(self) -> list[StockItem]:
        return [self._to_domain(raw) for raw in _load_raw(self._items_path)]

    def save(self, item: StockItem) -> None:
        with self._lock:
            records = _load_raw(self._items_path)
            replaced = False
            for i, raw in enumerate(records):
                if raw["stock_location_id"] == item.stock_location_id and raw["variant_id"] == item.variant_id:
                    records[i] = self._to_raw(item)
                    replaced = True
                    break
            if not replaced:
                records.append(self._to_raw(item))
            _persist_raw(self._items_path, records)

    def add_movement(self, movement: StockMovement) -> None:
        with self._lock:
            records = _load_raw(self._movements_path)
            records.append(
                {
                    "stock_location_id": movement.stock_location_id,
                    "variant_id": movement.variant_id,
                    "quantity": movement.quantity,
                    "originator": movement.originator,
                    "created_at": movement.created_at.isoformat(),
                }
            )
            _persist_raw(self._movements_path, records)

    def list_movements(self, variant_id: str | None = None) -> list[StockMovement]:
        return [
            StockMovement(
                stock_location_id=raw["stock_location_id"],
                variant_id=raw["variant_id"],
                quantity=raw["quantity"],
                originator=raw.get("originator"),
                created_at=datetime.fromisoformat(raw["created_at"]),
            )
            for raw in _load_raw(self._movements_path)
            if variant_id is None or raw["variant_id"] == variant_id
        ]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(item: StockItem) -> dict:
        return {
            "stock_location_id": item.stock_location_id,
            "variant_id": item.variant_id,
            "count_on_hand": item.count_on_hand,
            "backorderable": item.backorderable,
        }

    @staticmethod
    def _to_domain(raw: dict) -> StockItem:
        return StockItem(
            stock_location_id=raw["stock_location_id"],
            variant_id=raw["variant_id"],
            count_on_hand=raw.get("count_on_hand", 0),
            backorderable=raw.get("backorderable", False),
        )


# --- File helpers -------------------------------------------------------------


def _load_raw(path: Path) -> list[dict]:
    return json.loads(path.read_text(encoding="utf-8"))


def _persist_raw(path: Path, records: list[dict]) -> None:
    path.write_text(json.dumps(records, indent=2) + "\n", encoding="utf-8")


def _ensure_file(path: Path) -> None:
    if not path.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("[]", encoding="utf-8")
