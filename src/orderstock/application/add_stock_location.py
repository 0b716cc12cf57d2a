"""Application service: Add Stock Location use case."""

from __future__ import annotations

from orderstock.domain.exceptions import ValidationError
from orderstock.domain.model.stock import StockLocation
from orderstock.domain.repository.stock_repository import StockLocationRepository


class AddStockLocationHandler:

    def __init__(self, location_repo: StockLocationRepository) -> None:
        self._location_repo = location_repo

    def handle(self, name: str, backorderable_default: bool = False) -> StockLocation:
        if not name or not name.strip():
            raise ValidationError("Stock location name is required")

        existing = self._location_repo.list_all()
        if any(loc.name.lower() == name.strip().lower() for loc in existing):
            raise ValidationError(f"Stock location '{name}' already exists")
        next_id = str(max(int(loc.id) for loc in existing) + 1) if existing else "1"

        location = StockLocation(
            id=next_id,
            name=name.strip(),
            backorderable_default=backorderable_default,
        )
        self._location_repo.save(location)
        return location
