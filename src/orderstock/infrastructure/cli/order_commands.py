"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from orderstock.application.add_item import AddItemHandler
from orderstock.application.complete_order import CompleteOrderHandler
from orderstock.application.create_order import CreateOrderHandler
from orderstock.application.dto import OrderDTO
from orderstock.application.propose_shipments import ProposeShipmentsHandler
from orderstock.application.remove_item import RemoveItemHandler
from orderstock.application.show_order import ShowOrderHandler
from orderstock.application.update_item import UpdateItemHandler
from orderstock.domain.exceptions import DomainException
from orderstock.infrastructure.bootstrap import (
    order_repository,
    stock_backend,
    variant_repository,
)


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (state={dto.state})")
    click.echo(f"Email:    {dto.email}")
    click.echo(f"Created:  {dto.created_at}")
    if dto.completed_at:
        click.echo(f"Complete: {dto.completed_at}")
    click.echo()

    click.echo(f"  {'SKU':<12} {'Item':<30} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*70}")
    for item in dto.line_items:
        click.echo(
            f"  {item.sku:<12} {item.name:<30} {item.quantity:>5} {item.price:>10} {item.amount:>10}"
        )
        for error in item.errors:
            click.echo(f"    ! {error}")
    click.echo(f"  {'-'*70}")
    click.echo(f"  {'Item Total':<49} {dto.item_total:>20}")

    for shipment in dto.shipments:
        click.echo()
        click.echo(
            f"  Shipment {shipment.id}  location={shipment.stock_location_id}  "
            f"state={shipment.state}  weight={shipment.weight}"
        )
        for unit in shipment.units:
            pending = " (pending)" if unit.pending else ""
            click.echo(f"    {unit.sku:<12} {unit.state:<12} {unit.quantity:>5} {unit.amount:>10}{pending}")


@click.command("create")
@click.option("--email", required=True, help="Customer email.")
def order_create(email: str) -> None:
    """Open a new, empty order."""
    handler = CreateOrderHandler(order_repo=order_repository())

    try:
        dto = handler.handle(email)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} created  (state={dto.state})")


@click.command("add-item")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--sku", required=True, help="Variant SKU.")
@click.option("--quantity", required=True, type=int, help="Quantity to add.")
@click.option("--shipment", "shipment_id", default=None, help="Shipment ID to add the units to.")
def order_add_item(order_id: int, sku: str, quantity: int, shipment_id: str | None) -> None:
    """Add a variant to an order."""
    handler = AddItemHandler(
        order_repo=order_repository(),
        variant_repo=variant_repository(),
        stock=stock_backend(),
    )

    try:
        dto = handler.handle(order_id, sku, quantity, shipment_id=shipment_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("set-quantity")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--sku", required=True, help="Variant SKU.")
@click.option("--quantity", required=True, type=int, help="New quantity.")
@click.option("--shipment", "shipment_id", default=None, help="Shipment ID to reconcile against.")
def order_set_quantity(order_id: int, sku: str, quantity: int, shipment_id: str | None) -> None:
    """Change a line item's quantity."""
    handler = UpdateItemHandler(
        order_repo=order_repository(),
        variant_repo=variant_repository(),
        stock=stock_backend(),
    )

    try:
        dto = handler.handle(order_id, sku, quantity, shipment_id=shipment_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("remove-item")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--sku", required=True, help="Variant SKU.")
@click.option("--shipment", "shipment_id", default=None, help="Only remove the units on this shipment.")
def order_remove_item(order_id: int, sku: str, shipment_id: str | None) -> None:
    """Remove a variant from an order."""
    handler = RemoveItemHandler(
        order_repo=order_repository(),
        variant_repo=variant_repository(),
        stock=stock_backend(),
    )

    try:
        dto = handler.handle(order_id, sku, shipment_id=shipment_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("propose")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
def order_propose(order_id: int) -> None:
    """Propose shipments for an order still in checkout."""
    handler = ProposeShipmentsHandler(order_repo=order_repository(), stock=stock_backend())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("complete")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
def order_complete(order_id: int) -> None:
    """Complete an order (validates availability, unstocks units)."""
    handler = CompleteOrderHandler(order_repo=order_repository(), stock=stock_backend())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} complete, inventory committed.")
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
def order_show(order_id: int) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repo=order_repository())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)
