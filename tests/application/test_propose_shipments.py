"""Integration tests for the ProposeShipments use case."""

import pytest

from orderstock.application.add_item import AddItemHandler
from orderstock.application.complete_order import CompleteOrderHandler
from orderstock.application.create_order import CreateOrderHandler
from orderstock.application.propose_shipments import ProposeShipmentsHandler
from orderstock.domain.exceptions import ValidationError
from orderstock.domain.model.stock import StockItem
from tests.fakes import FakeOrderRepository, FakeVariantRepository, make_stock, make_variant


def _setup():
    order_repo = FakeOrderRepository()
    variant_repo = FakeVariantRepository([
        make_variant(stock_location_ids=["1", "2"]),
        make_variant(id="2", sku="MUG", name="Mug", price="8.00", stock_location_ids=["2"]),
    ])
    stock = make_stock([
        StockItem("1", "1", count_on_hand=1),
        StockItem("2", "1", count_on_hand=6),
        StockItem("2", "2", count_on_hand=0),
    ])
    order_id = CreateOrderHandler(order_repo).handle("alice@example.com").id
    return order_repo, variant_repo, stock, order_id


class TestProposeShipments:

    def test_packs_from_location_with_stock(self):
        order_repo, variant_repo, stock, order_id = _setup()
        AddItemHandler(order_repo, variant_repo, stock).handle(order_id, "TS-RED-M", 4)

        dto = ProposeShipmentsHandler(order_repo, stock).handle(order_id)

        (shipment,) = dto.shipments
        assert shipment.stock_location_id == "2"
        assert [(u.state, u.quantity, u.pending) for u in shipment.units] == [("on_hand", 4, True)]
        assert shipment.item_amount == "$80.00"

    def test_backorders_what_is_missing(self):
        order_repo, variant_repo, stock, order_id = _setup()
        AddItemHandler(order_repo, variant_repo, stock).handle(order_id, "MUG", 2)

        dto = ProposeShipmentsHandler(order_repo, stock).handle(order_id)

        assert [(u.state, u.quantity) for u in dto.shipments[0].units] == [("backordered", 2)]

    def test_proposal_is_persisted_and_repeatable(self):
        order_repo, variant_repo, stock, order_id = _setup()
        AddItemHandler(order_repo, variant_repo, stock).handle(order_id, "TS-RED-M", 2)
        handler = ProposeShipmentsHandler(order_repo, stock)

        first = handler.handle(order_id)
        second = handler.handle(order_id)

        assert len(order_repo.get_by_id(order_id).shipments) == 1
        assert first.shipments[0].id != second.shipments[0].id
        assert stock.item_repo.movements == []

    def test_empty_order_rejected(self):
        order_repo, _, stock, order_id = _setup()
        with pytest.raises(ValidationError, match="has no line items"):
            ProposeShipmentsHandler(order_repo, stock).handle(order_id)

    def test_completed_order_rejected(self):
        order_repo, variant_repo, stock, order_id = _setup()
        AddItemHandler(order_repo, variant_repo, stock).handle(order_id, "TS-RED-M", 1)
        CompleteOrderHandler(order_repo, stock).handle(order_id)

        with pytest.raises(ValidationError, match="is complete"):
            ProposeShipmentsHandler(order_repo, stock).handle(order_id)
