"""Application service: Set Stock Level use case.

Moves a variant's on-hand count at one location to an absolute value by
journalling the difference through the ledger, so manual adjustments
show up in the movement history like any other restock or unstock.
"""

from __future__ import annotations

from orderstock.application.transaction import StockBackend
from orderstock.domain.exceptions import EntityNotFoundError, ValidationError
from orderstock.domain.model.stock import StockItem
from orderstock.domain.repository.variant_repository import VariantRepository


class SetStockHandler:

    def __init__(self, variant_repo: VariantRepository, stock: StockBackend) -> None:
        self._variant_repo = variant_repo
        self._stock = stock

    def handle(
        self,
        sku: str,
        stock_location_id: str,
        count_on_hand: int,
        backorderable: bool | None = None,
    ) -> StockItem:
        variant = self._variant_repo.get_by_sku(sku)
        if variant is None:
            raise EntityNotFoundError(f"Variant not found: '{sku}'")
        location = self._stock.location_repo.get_by_id(stock_location_id)
        if location is None:
            raise EntityNotFoundError(f"Stock location '{stock_location_id}' not found")

        ledger = self._stock.ledger()
        if not ledger.tracks(variant):
            raise ValidationError(f"{variant.display_name} does not track inventory")

        item_repo = self._stock.item_repo
        with self._stock.locks.hold((stock_location_id, variant.id)):
            current = item_repo.get(stock_location_id, variant.id)
            delta = count_on_hand - (current.count_on_hand if current else 0)
            try:
                if delta > 0:
                    ledger.restock(variant, delta, stock_location_id, originator="adjustment")
                elif delta < 0:
                    ledger.unstock(variant, -delta, stock_location_id, originator="adjustment")

                item = item_repo.get(stock_location_id, variant.id) or StockItem(
                    stock_location_id=stock_location_id,
                    variant_id=variant.id,
                    backorderable=location.backorderable_default,
                )
                if backorderable is not None:
                    item.backorderable = backorderable
                item_repo.save(item)

                if stock_location_id not in variant.stock_location_ids:
                    variant.stock_location_ids.append(stock_location_id)
                    self._variant_repo.save(variant)
            except Exception:
                ledger.rollback()
                raise
            ledger.commit()

        return item
