"""CLI commands for variants and stock locations."""

from __future__ import annotations

import click

from orderstock.application.add_stock_location import AddStockLocationHandler
from orderstock.application.add_variant import AddVariantHandler
from orderstock.domain.exceptions import DomainException
from orderstock.infrastructure.bootstrap import stock_location_repository, variant_repository


def _parse_options(raw: str | None) -> list[tuple[str, str]]:
    """Parse 'Color:Red,Size:M' into [(name, value), ...]."""
    if not raw:
        return []
    options: list[tuple[str, str]] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid option format '{pair}'. Expected 'Name:Value'."
            )
        name, value = pair.split(":", 1)
        options.append((name.strip(), value.strip()))
    return options


@click.command("add-variant")
@click.option("--sku", required=True, help="Unique SKU.")
@click.option("--name", required=True, help="Display name.")
@click.option("--price", required=True, help="Unit price, e.g. 19.99.")
@click.option("--weight", default="0", help="Unit weight.")
@click.option("--track/--no-track", "track_inventory", default=True, help="Track stock for this variant.")
@click.option("--location", "location_ids", multiple=True, help="Stock location ID (repeatable).")
@click.option("--options", default=None, help="Option values as 'Name:Value,Name:Value'.")
def catalog_add_variant(
    sku: str,
    name: str,
    price: str,
    weight: str,
    track_inventory: bool,
    location_ids: tuple[str, ...],
    options: str | None,
) -> None:
    """Add a variant to the catalog."""
    handler = AddVariantHandler(
        variant_repo=variant_repository(),
        location_repo=stock_location_repository(),
    )

    try:
        variant = handler.handle(
            sku=sku,
            name=name,
            price=price,
            weight=weight,
            track_inventory=track_inventory,
            stock_location_ids=list(location_ids),
            option_values=_parse_options(options),
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Variant {variant.sku} added: {variant.display_name} at {variant.price}")


@click.command("variants")
def catalog_variants() -> None:
    """List catalog variants."""
    variants = variant_repository().list_all()
    if not variants:
        click.echo("No variants found.")
        return

    click.echo(f"{'SKU':<12} {'Item':<30} {'Price':>10} {'Tracked':>8}  Locations")
    click.echo("-" * 80)
    for v in variants:
        click.echo(
            f"{v.sku:<12} {v.display_name:<30} {str(v.price):>10} "
            f"{'yes' if v.track_inventory else 'no':>8}  {', '.join(v.stock_location_ids) or '-'}"
        )


@click.command("add-location")
@click.option("--name", required=True, help="Stock location name.")
@click.option("--backorderable/--not-backorderable", default=False, help="Default backorder policy.")
def catalog_add_location(name: str, backorderable: bool) -> None:
    """Add a stock location."""
    handler = AddStockLocationHandler(location_repo=stock_location_repository())

    try:
        location = handler.handle(name, backorderable_default=backorderable)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Stock location {location.id} added: {location.name}")


@click.command("locations")
def catalog_locations() -> None:
    """List stock locations."""
    locations = stock_location_repository().list_all()
    if not locations:
        click.echo("No stock locations found.")
        return

    for loc in locations:
        flags = []
        if not loc.active:
            flags.append("inactive")
        if loc.backorderable_default:
            flags.append("backorderable")
        click.echo(f"{loc.id:<4} {loc.name}{'  (' + ', '.join(flags) + ')' if flags else ''}")
