"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from storefront.application.add_product import AddProductHandler
from storefront.application.delete_product import DeleteProductHandler
from storefront.application.show_catalog import ListProductsHandler
from storefront.application.toggle_product import ToggleProductHandler
from storefront.application.update_product import UpdateProductHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import Services


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--category", required=True, help="Catalog category.")
@click.option("--price", required=True, help="Unit price (e.g. 15.00).")
@click.option("--stock", default=0, type=int, show_default=True, help="Initial stock.")
@click.option("--description", default=None, help="Product description.")
@click.option("--inactive", is_flag=True, default=False, help="Add the product off sale.")
@click.pass_obj
def product_add(
    services: Services,
    name: str,
    category: str,
    price: str,
    stock: int,
    description: str | None,
    inactive: bool,
) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(product_repo=services.product_repo)

    try:
        product = handler.handle(
            name=name,
            category=category,
            price=price,
            stock=stock,
            description=description,
            active=not inactive,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} '{product.name}' added at {product.price}")


@click.command("list")
@click.option("--active-only", is_flag=True, default=False, help="Hide inactive products.")
@click.option("--category", default=None, help="Only show this category.")
@click.pass_obj
def product_list(services: Services, active_only: bool, category: str | None) -> None:
    """List products in the catalog."""
    handler = ListProductsHandler(product_repo=services.product_repo)
    products = handler.handle(active_only=active_only, category=category)

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Category':<14} {'Price':>10} {'Stock':>7}  Active")
    click.echo("-" * 68)
    for p in products:
        click.echo(
            f"{p.id:<6} {p.name:<20} {p.category:<14} {str(p.price):>10} "
            f"{p.stock_quantity:>7}  {'yes' if p.active else 'no'}"
        )


@click.command("update")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.option("--price", required=True, help="New price (e.g. 29.99).")
@click.pass_obj
def product_update(services: Services, product_id: int, price: str) -> None:
    """Update a product's price."""
    handler = UpdateProductHandler(
        product_repo=services.product_repo,
        stock_ledger=services.stock_ledger,
    )

    try:
        product = handler.handle(product_id=product_id, new_price=price)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} price updated to {product.price}")


@click.command("toggle")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.pass_obj
def product_toggle(services: Services, product_id: int) -> None:
    """Put a product on sale or take it off sale."""
    handler = ToggleProductHandler(
        product_repo=services.product_repo,
        stock_ledger=services.stock_ledger,
    )

    try:
        product = handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    state = "active" if product.active else "inactive"
    click.echo(f"Product #{product_id} '{product.name}' is now {state}")


@click.command("delete")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.confirmation_option(prompt="Delete this product from the catalog?")
@click.pass_obj
def product_delete(services: Services, product_id: int) -> None:
    """Remove a product from the catalog (orders keep their history)."""
    handler = DeleteProductHandler(
        product_repo=services.product_repo,
        stock_ledger=services.stock_ledger,
    )

    try:
        handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} deleted")
