"""Unit tests for ContentItem and the shipment manifest built from it."""

from dataclasses import FrozenInstanceError
from decimal import Decimal

import pytest

from orderstock.domain.model.content_item import ContentItem
from orderstock.domain.model.inventory_unit import InventoryUnit, InventoryUnitState
from orderstock.domain.model.order import Order
from orderstock.domain.model.shipment import Shipment
from orderstock.domain.model.value_objects import Money
from tests.fakes import make_variant


def _unit(quantity: int = 3) -> InventoryUnit:
    order = Order(id=1, email="alice@example.com")
    line_item = order.add_line_item(make_variant(), quantity)
    return InventoryUnit.new(make_variant(), line_item, quantity)


class TestContentItem:

    def test_delegates_to_unit(self):
        unit = _unit(3)
        item = ContentItem(unit)

        assert item.variant is unit.variant
        assert item.line_item is unit.line_item
        assert item.quantity == 3

    def test_weight_and_amount(self):
        item = ContentItem(_unit(3))

        assert item.weight == Decimal("0.75")
        assert item.price == Money.of("20.00")
        assert item.amount == Money.of("60.00")

    def test_price_comes_from_line_item(self):
        unit = _unit(2)
        unit.line_item.price = Money.of("15.00")

        assert ContentItem(unit).amount == Money.of("30.00")

    def test_state_predicates(self):
        unit = _unit()
        assert ContentItem(unit).is_on_hand
        backordered = ContentItem(unit, InventoryUnitState.BACKORDERED)
        assert backordered.is_backordered
        assert not backordered.is_on_hand

    def test_reflects_unit_changes(self):
        unit = _unit(3)
        item = ContentItem(unit)
        unit.decrement(1)
        assert item.quantity == 2

    def test_is_read_only(self):
        item = ContentItem(_unit())
        with pytest.raises(FrozenInstanceError):
            item.state = InventoryUnitState.BACKORDERED


class TestShipmentManifest:

    def test_contents_mirror_units(self):
        order = Order(id=1, email="alice@example.com")
        line_item = order.add_line_item(make_variant(), 5)
        shipment = Shipment.new(1, "1")
        shipment.set_up_inventory(InventoryUnitState.ON_HAND, line_item.variant, 1, line_item, 3)
        shipment.set_up_inventory(InventoryUnitState.BACKORDERED, line_item.variant, 1, line_item, 2)

        contents = shipment.contents

        assert [(c.state, c.quantity) for c in contents] == [
            (InventoryUnitState.ON_HAND, 3),
            (InventoryUnitState.BACKORDERED, 2),
        ]
        assert shipment.weight == Decimal("1.25")
        assert shipment.item_amount == Money.of("100.00")
