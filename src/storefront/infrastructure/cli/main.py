import logging
from pathlib import Path

import click

from storefront.infrastructure.bootstrap import DATA_DIR_ENV, build_services
from storefront.infrastructure.cli.order_commands import (
    order_cancel,
    order_create,
    order_find,
    order_list,
    order_show,
    order_status,
)
from storefront.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_toggle,
    product_update,
)
from storefront.infrastructure.cli.report_commands import report_sales
from storefront.infrastructure.cli.stock_commands import stock_low, stock_set


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    envvar=DATA_DIR_ENV,
    default=None,
    help=f"Directory holding products.json and orders.json (env: {DATA_DIR_ENV}).",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log debug output.")
@click.pass_context
def cli(ctx: click.Context, data_dir: Path | None, verbose: bool) -> None:
    """Storefront: catalog, stock and order management"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = build_services(data_dir)


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def stock() -> None:
    """Manage stock levels."""


@cli.group()
def report() -> None:
    """Sales reports."""


# Register subcommands
order.add_command(order_cancel)
order.add_command(order_create)
order.add_command(order_find)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_status)
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_toggle)
product.add_command(product_update)
stock.add_command(stock_low)
stock.add_command(stock_set)
report.add_command(report_sales)
