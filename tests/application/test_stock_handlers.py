"""Integration tests for the stock and catalog use cases."""

import pytest

from orderstock.application.add_stock_location import AddStockLocationHandler
from orderstock.application.add_variant import AddVariantHandler
from orderstock.application.set_stock import SetStockHandler
from orderstock.application.show_stock import ShowStockHandler
from orderstock.domain.exceptions import EntityNotFoundError, ValidationError
from orderstock.domain.model.stock import StockItem
from tests.fakes import FakeStockLocationRepository, FakeVariantRepository, make_stock, make_variant


def _setup(*items: StockItem):
    variant_repo = FakeVariantRepository([
        make_variant(option_values=[("Color", "Red"), ("Size", "M")]),
        make_variant(id="2", sku="GIFT", name="Gift card", track_inventory=False),
    ])
    return variant_repo, make_stock(list(items))


class TestSetStock:

    def test_sets_absolute_count_through_ledger(self):
        variant_repo, stock = _setup(StockItem("1", "1", count_on_hand=10))

        item = SetStockHandler(variant_repo, stock).handle("TS-RED-M", "1", 15)

        assert item.count_on_hand == 15
        assert stock.item_repo.count_on_hand("1", "1") == 15
        assert [(m.quantity, m.originator) for m in stock.item_repo.movements] == [(5, "adjustment")]

    def test_lowering_count_unstocks(self):
        variant_repo, stock = _setup(StockItem("1", "1", count_on_hand=10))

        SetStockHandler(variant_repo, stock).handle("TS-RED-M", "1", 4)

        assert stock.item_repo.movements[-1].quantity == -6

    def test_new_location_is_linked_to_variant(self):
        variant_repo, stock = _setup()

        item = SetStockHandler(variant_repo, stock).handle("TS-RED-M", "2", 3, backorderable=True)

        assert item.backorderable is True
        assert stock.item_repo.count_on_hand("2", "1") == 3
        assert "2" in variant_repo.get_by_sku("TS-RED-M").stock_location_ids

    def test_backorderable_flag_only(self):
        variant_repo, stock = _setup(StockItem("1", "1", count_on_hand=10))

        item = SetStockHandler(variant_repo, stock).handle("TS-RED-M", "1", 10, backorderable=True)

        assert item.backorderable is True
        assert stock.item_repo.movements == []

    def test_untracked_variant_rejected(self):
        variant_repo, stock = _setup()
        with pytest.raises(ValidationError, match="does not track inventory"):
            SetStockHandler(variant_repo, stock).handle("GIFT", "1", 5)

    def test_unknown_location(self):
        variant_repo, stock = _setup()
        with pytest.raises(EntityNotFoundError, match="Stock location '9' not found"):
            SetStockHandler(variant_repo, stock).handle("TS-RED-M", "9", 5)


class TestShowStock:

    def test_lists_counts_with_names(self):
        variant_repo, stock = _setup(StockItem("1", "1", count_on_hand=-2))

        (line,) = ShowStockHandler(variant_repo, stock).handle()

        assert line.location == "Main warehouse"
        assert line.name == "T-Shirt (Color: Red, Size: M)"
        assert line.count_on_hand == -2

    def test_movements_filtered_by_sku(self):
        variant_repo, stock = _setup(StockItem("1", "1", count_on_hand=0))
        SetStockHandler(variant_repo, stock).handle("TS-RED-M", "1", 3)

        (movement,) = ShowStockHandler(variant_repo, stock).movements("TS-RED-M")

        assert (movement.sku, movement.quantity, movement.originator) == ("TS-RED-M", 3, "adjustment")


class TestCatalog:

    def test_add_variant_assigns_id(self):
        variant_repo = FakeVariantRepository([make_variant()])
        locations = FakeStockLocationRepository(make_stock().location_repo.list_all())

        variant = AddVariantHandler(variant_repo, locations).handle(
            "TS-BLU-L", "T-Shirt", "22.00",
            stock_location_ids=["2"], option_values=[("Color", "Blue")],
        )

        assert variant.id == "2"
        assert variant.display_name == "T-Shirt (Color: Blue)"
        assert variant_repo.get_by_sku("TS-BLU-L") is variant

    def test_duplicate_sku_rejected(self):
        variant_repo = FakeVariantRepository([make_variant()])
        with pytest.raises(ValidationError, match="already exists"):
            AddVariantHandler(variant_repo, FakeStockLocationRepository()).handle("TS-RED-M", "T", "1.00")

    def test_unknown_location_rejected(self):
        with pytest.raises(EntityNotFoundError, match="Stock location '7' not found"):
            AddVariantHandler(FakeVariantRepository(), FakeStockLocationRepository()).handle(
                "X", "X", "1.00", stock_location_ids=["7"]
            )

    def test_add_stock_location(self):
        repo = FakeStockLocationRepository()
        handler = AddStockLocationHandler(repo)

        first = handler.handle("Main warehouse")
        second = handler.handle("Drop ship", backorderable_default=True)

        assert (first.id, second.id) == ("1", "2")
        assert second.backorderable_default is True
        with pytest.raises(ValidationError, match="already exists"):
            handler.handle("main warehouse")
