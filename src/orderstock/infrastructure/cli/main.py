import click

from orderstock.infrastructure.bootstrap import settings
from orderstock.infrastructure.cli.catalog_commands import (
    catalog_add_location,
    catalog_add_variant,
    catalog_locations,
    catalog_variants,
)
from orderstock.infrastructure.cli.order_commands import (
    order_add_item,
    order_complete,
    order_create,
    order_propose,
    order_remove_item,
    order_set_quantity,
    order_show,
)
from orderstock.infrastructure.cli.stock_commands import stock_movements, stock_set, stock_show
from orderstock.infrastructure.logging import configure_logging


@click.group()
def cli() -> None:
    """orderstock: order inventory reconciliation"""
    configure_logging(settings())


@cli.group()
def order() -> None:
    """Manage orders and their inventory units."""


@cli.group()
def stock() -> None:
    """Manage stock levels."""


@cli.group()
def catalog() -> None:
    """Manage variants and stock locations."""


# Register subcommands
order.add_command(order_add_item)
order.add_command(order_complete)
order.add_command(order_create)
order.add_command(order_propose)
order.add_command(order_remove_item)
order.add_command(order_set_quantity)
order.add_command(order_show)
stock.add_command(stock_movements)
stock.add_command(stock_set)
stock.add_command(stock_show)
catalog.add_command(catalog_add_location)
catalog.add_command(catalog_add_variant)
catalog.add_command(catalog_locations)
catalog.add_command(catalog_variants)
