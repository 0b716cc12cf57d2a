"""Unit tests for ShipmentProposer."""

import pytest

from orderstock.domain.exceptions import NoTargetShipmentError, ValidationError
from orderstock.domain.model.inventory_unit import InventoryUnitState
from orderstock.domain.model.order import Order, OrderState
from orderstock.domain.model.shipment import Shipment
from orderstock.domain.model.stock import StockItem, StockLocation
from orderstock.domain.service.shipment_proposer import ShipmentProposer
from orderstock.domain.service.stock_ledger import StockItemLedger
from tests.fakes import FakeStockItemRepository, FakeStockLocationRepository, make_variant


def _make_proposer(*items: StockItem, locations=None):
    item_repo = FakeStockItemRepository(list(items))
    location_repo = FakeStockLocationRepository(
        locations if locations is not None else [
            StockLocation(id="1", name="Main warehouse"),
            StockLocation(id="2", name="East depot"),
        ]
    )
    return ShipmentProposer(StockItemLedger(item_repo, location_repo), location_repo), item_repo


def _states(shipment):
    return sorted((u.state.value, u.quantity) for u in shipment.inventory_units)


class TestPropose:

    def test_packs_everything_on_hand(self):
        proposer, items = _make_proposer(StockItem("1", "1", count_on_hand=10))
        order = Order(id=1, email="alice@example.com")
        order.add_line_item(make_variant(), 4)

        (shipment,) = proposer.propose(order)

        assert shipment.stock_location_id == "1"
        assert _states(shipment) == [("on_hand", 4)]
        assert order.shipments == [shipment]
        assert items.movements == []

    def test_splits_partial_stock(self):
        proposer, _ = _make_proposer(StockItem("1", "1", count_on_hand=3))
        order = Order(id=1, email="alice@example.com")
        order.add_line_item(make_variant(), 5)

        (shipment,) = proposer.propose(order)

        assert _states(shipment) == [("backordered", 2), ("on_hand", 3)]
        assert all(u.pending for u in shipment.inventory_units)

    def test_prefers_location_that_covers_quantity(self):
        proposer, _ = _make_proposer(
            StockItem("1", "1", count_on_hand=1),
            StockItem("2", "1", count_on_hand=6),
        )
        order = Order(id=1, email="alice@example.com")
        order.add_line_item(make_variant(stock_location_ids=["1", "2"]), 5)

        (shipment,) = proposer.propose(order)

        assert shipment.stock_location_id == "2"

    def test_one_shipment_per_location(self):
        proposer, _ = _make_proposer(
            StockItem("1", "1", count_on_hand=5),
            StockItem("2", "2", count_on_hand=5),
        )
        order = Order(id=1, email="alice@example.com")
        order.add_line_item(make_variant(), 1)
        order.add_line_item(make_variant(id="2", sku="MUG", name="Mug", stock_location_ids=["2"]), 1)

        shipments = proposer.propose(order)

        assert sorted(s.stock_location_id for s in shipments) == ["1", "2"]

    def test_replaces_previous_shipments(self):
        proposer, _ = _make_proposer(StockItem("1", "1", count_on_hand=5))
        order = Order(id=1, email="alice@example.com")
        order.add_line_item(make_variant(), 2)
        old = Shipment.new(1, "1")
        order.add_shipment(old)

        proposer.propose(order)

        assert old not in order.shipments
        assert sum(u.quantity for u in order.inventory_units) == 2

    def test_untracked_variant_on_hand(self):
        proposer, _ = _make_proposer()
        order = Order(id=1, email="alice@example.com")
        order.add_line_item(make_variant(track_inventory=False), 3)

        (shipment,) = proposer.propose(order)

        assert _states(shipment) == [("on_hand", 3)]

    def test_unit_state_matches_content(self):
        proposer, _ = _make_proposer()
        order = Order(id=1, email="alice@example.com")
        order.add_line_item(make_variant(), 2)

        (shipment,) = proposer.propose(order)

        assert [c.state for c in shipment.contents] == [InventoryUnitState.BACKORDERED]

    def test_no_active_location_raises(self):
        proposer, _ = _make_proposer(locations=[StockLocation(id="1", name="Closed", active=False)])
        order = Order(id=1, email="alice@example.com")
        order.add_line_item(make_variant(), 1)

        with pytest.raises(NoTargetShipmentError, match="No active stock location"):
            proposer.propose(order)

    def test_completed_order_rejected(self):
        proposer, _ = _make_proposer()
        order = Order(id=1, email="alice@example.com", state=OrderState.COMPLETE)

        with pytest.raises(ValidationError, match="is complete"):
            proposer.propose(order)
