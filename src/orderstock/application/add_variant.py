"""Application service: Add Variant use case."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from orderstock.domain.exceptions import EntityNotFoundError, ValidationError
from orderstock.domain.model.value_objects import Money
from orderstock.domain.model.variant import Variant
from orderstock.domain.repository.stock_repository import StockLocationRepository
from orderstock.domain.repository.variant_repository import VariantRepository


class AddVariantHandler:

    def __init__(
        self,
        variant_repo: VariantRepository,
        location_repo: StockLocationRepository,
    ) -> None:
        self._variant_repo = variant_repo
        self._location_repo = location_repo

    def handle(
        self,
        sku: str,
        name: str,
        price: str,
        weight: str = "0",
        track_inventory: bool = True,
        stock_location_ids: list[str] | None = None,
        option_values: list[tuple[str, str]] | None = None,
    ) -> Variant:
        """Add a new variant to the catalog."""
        if not sku or not sku.strip():
            raise ValidationError("SKU is required")
        if not name or not name.strip():
            raise ValidationError("Variant name is required")
        if self._variant_repo.get_by_sku(sku.strip()) is not None:
            raise ValidationError(f"Variant '{sku}' already exists")

        for location_id in stock_location_ids or []:
            if self._location_repo.get_by_id(location_id) is None:
                raise EntityNotFoundError(f"Stock location '{location_id}' not found")

        try:
            parsed_weight = Decimal(weight)
        except InvalidOperation as exc:
            raise ValidationError(f"Invalid weight: {weight!r}") from exc

        # Auto-assign ID based on existing variants
        all_variants = self._variant_repo.list_all()
        next_id = str(max(int(v.id) for v in all_variants) + 1) if all_variants else "1"

        variant = Variant(
            id=next_id,
            sku=sku.strip(),
            name=name.strip(),
            price=Money.of(price),
            weight=parsed_weight,
            track_inventory=track_inventory,
            stock_location_ids=list(stock_location_ids or []),
            option_values=list(option_values or []),
        )
        self._variant_repo.save(variant)
        return variant
