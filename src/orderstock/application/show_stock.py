"""Application service: Show Stock use cases (queries)."""

from __future__ import annotations

from dataclasses import dataclass

from orderstock.application.transaction import StockBackend
from orderstock.domain.exceptions import EntityNotFoundError
from orderstock.domain.repository.variant_repository import VariantRepository


@dataclass(frozen=True)
class StockLineDTO:
    location: str
    sku: str
    name: str
    count_on_hand: int
    backorderable: bool


@dataclass(frozen=True)
class StockMovementDTO:
    location: str
    sku: str
    quantity: int
    originator: str
    created_at: str


class ShowStockHandler:

    def __init__(self, variant_repo: VariantRepository, stock: StockBackend) -> None:
        self._variant_repo = variant_repo
        self._stock = stock

    def handle(self) -> list[StockLineDTO]:
        names = self._location_names()
        variants = {v.id: v for v in self._variant_repo.list_all()}
        lines = []
        for item in self._stock.item_repo.list_all():
            variant = variants.get(item.variant_id)
            lines.append(
                StockLineDTO(
                    location=names.get(item.stock_location_id, item.stock_location_id),
                    sku=variant.sku if variant else item.variant_id,
                    name=variant.display_name if variant else "?",
                    count_on_hand=item.count_on_hand,
                    backorderable=item.backorderable,
                )
            )
        return lines

    def movements(self, sku: str | None = None) -> list[StockMovementDTO]:
        variant_id = None
        if sku is not None:
            variant = self._variant_repo.get_by_sku(sku)
            if variant is None:
                raise EntityNotFoundError(f"Variant not found: '{sku}'")
            variant_id = variant.id

        names = self._location_names()
        skus = {v.id: v.sku for v in self._variant_repo.list_all()}
        return [
            StockMovementDTO(
                location=names.get(m.stock_location_id, m.stock_location_id),
                sku=skus.get(m.variant_id, m.variant_id),
                quantity=m.quantity,
                originator=m.originator or "-",
                created_at=m.created_at.strftime("%Y-%m-%d %H:%M:%S UTC"),
            )
            for m in self._stock.item_repo.list_movements(variant_id)
        ]

    def _location_names(self) -> dict[str, str]:
        return {loc.id: loc.name for loc in self._stock.location_repo.list_all()}
