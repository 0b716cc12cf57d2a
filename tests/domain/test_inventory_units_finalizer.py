"""Unit tests for InventoryUnitsFinalizer."""

import pytest

from orderstock.domain.exceptions import ValidationError
from orderstock.domain.model.inventory_unit import InventoryUnit, InventoryUnitState
from orderstock.domain.model.order import Order
from orderstock.domain.model.shipment import Shipment
from orderstock.domain.model.stock import StockItem, StockLocation
from orderstock.domain.service.inventory_units_finalizer import InventoryUnitsFinalizer
from orderstock.domain.service.stock_ledger import StockItemLedger
from tests.fakes import FakeStockItemRepository, FakeStockLocationRepository, make_variant


def _setup(count_on_hand: int = 5):
    items = FakeStockItemRepository([StockItem("1", "1", count_on_hand=count_on_hand)])
    ledger = StockItemLedger(items, FakeStockLocationRepository([StockLocation(id="1", name="Main")]))
    order = Order(id=1, email="alice@example.com")
    line_item = order.add_line_item(make_variant(), 5)
    shipment = Shipment.new(1, "1")
    order.add_shipment(shipment)
    return InventoryUnitsFinalizer(ledger), items, order, line_item, shipment


class TestFinalizer:

    def test_unstocks_on_hand_and_backordered(self):
        finalizer, items, order, line_item, shipment = _setup(count_on_hand=3)
        shipment.set_up_inventory(InventoryUnitState.ON_HAND, line_item.variant, 1, line_item, 3)
        shipment.set_up_inventory(InventoryUnitState.BACKORDERED, line_item.variant, 1, line_item, 2)

        finalizer.run(order.inventory_units)

        assert items.count_on_hand("1", "1") == -2
        assert [m.quantity for m in items.movements] == [-5]
        assert items.movements[0].originator == shipment.id

    def test_clears_pending_flag(self):
        finalizer, _, order, line_item, shipment = _setup()
        shipment.set_up_inventory(InventoryUnitState.ON_HAND, line_item.variant, 1, line_item, 2)

        finalizer.run(order.inventory_units)

        assert not any(u.pending for u in order.inventory_units)

    def test_finalized_units_are_skipped(self):
        finalizer, items, order, line_item, shipment = _setup()
        shipment.set_up_inventory(InventoryUnitState.ON_HAND, line_item.variant, 1, line_item, 2)

        finalizer.run(order.inventory_units)
        finalizer.run(order.inventory_units)

        assert items.count_on_hand("1", "1") == 3

    def test_untracked_variant_only_clears_flag(self):
        finalizer, items, order, _, shipment = _setup()
        variant = make_variant(id="2", sku="GIFT", track_inventory=False)
        line_item = order.add_line_item(variant, 1)
        shipment.set_up_inventory(InventoryUnitState.ON_HAND, variant, 1, line_item, 1)

        finalizer.run(order.inventory_units)

        assert items.movements == []
        assert not order.inventory_units[0].pending

    def test_unit_without_shipment_rejected_before_any_unstock(self):
        finalizer, items, order, line_item, shipment = _setup()
        shipment.set_up_inventory(InventoryUnitState.ON_HAND, line_item.variant, 1, line_item, 2)
        loose = InventoryUnit.new(line_item.variant, line_item, 1)

        with pytest.raises(ValidationError, match="without a shipment"):
            finalizer.run(order.inventory_units + [loose])

        assert items.movements == []
        assert all(u.pending for u in order.inventory_units)
