"""CLI commands for stock levels."""

from __future__ import annotations

import click

from storefront.application.set_stock import SetStockHandler
from storefront.application.show_catalog import LowStockHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import Services


@click.command("set")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Units on hand.")
@click.pass_obj
def stock_set(services: Services, product_id: int, quantity: int) -> None:
    """Set the stock level for a product."""
    handler = SetStockHandler(stock_ledger=services.stock_ledger)

    try:
        level = handler.handle(product_id=product_id, quantity=quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Stock for product #{product_id} set to {level}")


@click.command("low")
@click.option("--threshold", type=int, default=None, help="Report products at or below this level (default 5).")
@click.pass_obj
def stock_low(services: Services, threshold: int | None) -> None:
    """Show active products that are running low."""
    handler = LowStockHandler(product_repo=services.product_repo)
    lines = handler.handle(threshold)

    if not lines:
        click.echo("No products are low on stock.")
        return

    click.echo(f"{'ID':<6} {'Product':<20} {'Category':<14} {'Stock':>7}")
    click.echo("-" * 50)
    for line in lines:
        click.echo(
            f"{line.product_id:<6} {line.product_name:<20} {line.category:<14} {line.stock_quantity:>7}"
        )
