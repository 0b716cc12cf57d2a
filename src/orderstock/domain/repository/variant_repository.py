"""Abstract repository for catalog variants."""

from __future__ import annotations

from abc import ABC, abstractmethod

from orderstock.domain.model.variant import Variant


class VariantRepository(ABC):

    @abstractmethod
    def get_by_id(self, variant_id: str) -> Variant | None:
        """Return a variant by its ID, or None if not found."""

    @abstractmethod
    def get_by_sku(self, sku: str) -> Variant | None:
        """Return a variant by its SKU, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Variant]:
        """Return every variant in the catalog."""

    @abstractmethod
    def save(self, variant: Variant) -> None:
        """Persist a new or updated variant."""
