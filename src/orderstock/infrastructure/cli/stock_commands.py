"""CLI commands for stock levels."""

from __future__ import annotations

import click

from orderstock.application.set_stock import SetStockHandler
from orderstock.application.show_stock import ShowStockHandler
from orderstock.domain.exceptions import DomainException
from orderstock.infrastructure.bootstrap import stock_backend, variant_repository


@click.command("set")
@click.option("--sku", required=True, help="Variant SKU.")
@click.option("--location", "location_id", required=True, help="Stock location ID.")
@click.option("--count", required=True, type=int, help="Count on hand.")
@click.option("--backorderable/--not-backorderable", default=None, help="Allow backorders at this location.")
def stock_set(sku: str, location_id: str, count: int, backorderable: bool | None) -> None:
    """Set the on-hand count of a variant at a location."""
    handler = SetStockHandler(variant_repo=variant_repository(), stock=stock_backend())

    try:
        item = handler.handle(sku, location_id, count, backorderable=backorderable)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Stock for '{sku}' at location {location_id} set to {item.count_on_hand}")


@click.command("show")
def stock_show() -> None:
    """Show current stock levels."""
    handler = ShowStockHandler(variant_repo=variant_repository(), stock=stock_backend())
    lines = handler.handle()

    if not lines:
        click.echo("No stock records found.")
        return

    click.echo(f"{'Location':<16} {'SKU':<12} {'Item':<30} {'On hand':>8} {'Backorder':>10}")
    click.echo("-" * 80)
    for line in lines:
        click.echo(
            f"{line.location:<16} {line.sku:<12} {line.name:<30} "
            f"{line.count_on_hand:>8} {'yes' if line.backorderable else 'no':>10}"
        )


@click.command("movements")
@click.option("--sku", default=None, help="Only show movements of this variant.")
def stock_movements(sku: str | None) -> None:
    """Show the stock movement journal."""
    handler = ShowStockHandler(variant_repo=variant_repository(), stock=stock_backend())

    try:
        movements = handler.movements(sku)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not movements:
        click.echo("No stock movements found.")
        return

    click.echo(f"{'When':<24} {'Location':<16} {'SKU':<12} {'Qty':>6}  Originator")
    click.echo("-" * 80)
    for m in movements:
        click.echo(f"{m.created_at:<24} {m.location:<16} {m.sku:<12} {m.quantity:>6}  {m.originator}")
