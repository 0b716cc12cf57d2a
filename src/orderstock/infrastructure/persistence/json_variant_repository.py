"""JSON-file-backed implementation of VariantRepository."""

from __future__ import annotations

import json
from decimal import Decimal
from pathlib import Path

from orderstock.domain.model.value_objects import Money
from orderstock.domain.model.variant import Variant
from orderstock.domain.repository.variant_repository import VariantRepository


class JsonVariantRepository(VariantRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- VariantRepository interface ------------------------------------------

    def get_by_id(self, variant_id: str) -> Variant | None:
        for raw in self._load_raw():
            if raw["id"] == variant_id:
                return self._to_domain(raw)
        return None

    def get_by_sku(self, sku: str) -> Variant | None:
        for raw in self._load_raw():
            if raw["sku"].lower() == sku.lower():
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Variant]:
        return [self._to_domain(raw) for raw in self._load_raw()]

    def save(self, variant: Variant) -> None:
        records = self._load_raw()
        replaced = False
        for i, raw in enumerate(records):
            if raw["id"] == variant.id:
                records[i] = self._to_raw(variant)
                replaced = True
                break
        if not replaced:
            records.append(self._to_raw(variant))
        self._persist_raw(records)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(variant: Variant) -> dict:
        return {
            "id": variant.id,
            "sku": variant.sku,
            "name": variant.name,
            "price": str(variant.price.amount),
            "currency": variant.price.currency,
            "weight": str(variant.weight),
            "track_inventory": variant.track_inventory,
            "stock_location_ids": list(variant.stock_location_ids),
            "option_values": [[name, value] for name, value in variant.option_values],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Variant:
        return Variant(
            id=raw["id"],
            sku=raw["sku"],
            name=raw["name"],
            price=Money(Decimal(raw["price"]), raw.get("currency", "USD")),
            weight=Decimal(raw.get("weight", "0")),
            track_inventory=raw.get("track_inventory", True),
            stock_location_ids=list(raw.get("stock_location_ids", [])),
            option_values=[(name, value) for name, value in raw.get("option_values", [])],
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, records: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(records, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
