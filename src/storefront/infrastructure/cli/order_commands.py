"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from storefront.application.cancel_order import CancelOrderHandler
from storefront.application.create_order import CreateOrderHandler
from storefront.application.dto import OrderDTO
from storefront.application.find_orders import FindCustomerOrdersHandler, ListOrdersHandler
from storefront.application.show_order import ShowOrderHandler
from storefront.application.update_order_status import (
    UpdateOrderStatusHandler,
    parse_status,
)
from storefront.domain.exceptions import DomainException
from storefront.domain.model.order import OrderStatus
from storefront.infrastructure.bootstrap import Services

STATUS_CHOICES = [s.value for s in OrderStatus]


def _parse_cart(raw: str) -> dict[int, int]:
    """Parse '3:2,7:1' (product ID:quantity) into an ordered cart."""
    cart: dict[int, int] = {}
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductID:Quantity'."
            )
        id_str, qty_str = pair.split(":", 1)
        try:
            product_id = int(id_str)
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid item '{pair}'. Product ID and quantity must be integers."
            )
        if product_id in cart:
            raise click.BadParameter(f"Product {product_id} listed more than once.")
        cart[product_id] = qty
    return cart


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    click.echo(f"Customer: {dto.customer_name}  <{dto.email or '-'}>  {dto.phone}")
    click.echo(f"Ship to:  {dto.address}")
    click.echo(f"Created:  {dto.created_at}")
    if dto.notes:
        click.echo(f"Notes:    {dto.notes}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Subtotal':>10}")
    click.echo(f"  {'-'*47}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.quantity:>5} {item.unit_price:>10} {item.subtotal:>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Order Total':<27} {dto.total:>20}")


def _display_summary(dtos: list[OrderDTO]) -> None:
    if not dtos:
        click.echo("No orders found.")
        return
    click.echo(f"{'ID':<6} {'Created':<22} {'Customer':<20} {'Status':<10} {'Total':>10}")
    click.echo("-" * 72)
    for dto in dtos:
        click.echo(
            f"{dto.id:<6} {dto.created_at:<22} {dto.customer_name:<20} {dto.status:<10} {dto.total:>10}"
        )


@click.command("create")
@click.option("--customer", required=True, help="Customer name.")
@click.option("--phone", required=True, help="Contact phone number.")
@click.option("--address", required=True, help="Shipping address.")
@click.option("--email", default=None, help="Contact email (optional).")
@click.option("--items", required=True, help="Cart as 'ProductID:Qty,ProductID:Qty'.")
@click.option("--notes", default=None, help="Free-text order notes.")
@click.pass_obj
def order_create(
    services: Services,
    customer: str,
    phone: str,
    address: str,
    email: str | None,
    items: str,
    notes: str | None,
) -> None:
    """Place a new order (reduces stock)."""
    cart = _parse_cart(items)

    handler = CreateOrderHandler(
        order_repo=services.order_repo,
        product_repo=services.product_repo,
        stock_ledger=services.stock_ledger,
    )

    try:
        dto = handler.handle(
            customer_name=customer,
            email=email,
            phone=phone,
            address=address,
            cart_items=cart,
            notes=notes,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} created")
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
@click.pass_obj
def order_show(services: Services, order_id: int) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repo=services.order_repo)

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("find")
@click.option("--id", "order_id", type=int, default=None, help="Order number.")
@click.option("--phone", default=None, help="Phone number used at checkout.")
@click.pass_obj
def order_find(services: Services, order_id: int | None, phone: str | None) -> None:
    """Look up orders by order number or phone."""
    handler = FindCustomerOrdersHandler(order_repo=services.order_repo)

    try:
        dtos = handler.handle(order_id=order_id, phone=phone)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_summary(dtos)


@click.command("list")
@click.option(
    "--status",
    type=click.Choice(STATUS_CHOICES, case_sensitive=False),
    default=None,
    help="Only show orders in this status.",
)
@click.pass_obj
def order_list(services: Services, status: str | None) -> None:
    """List orders, newest first."""
    handler = ListOrdersHandler(order_repo=services.order_repo)
    _display_summary(handler.handle(parse_status(status) if status else None))


@click.command("status")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to update.")
@click.argument("new_status", type=click.Choice(STATUS_CHOICES, case_sensitive=False))
@click.option(
    "--force",
    is_flag=True,
    default=False,
    help="Administrative correction: skip the transition check.",
)
@click.pass_obj
def order_status(services: Services, order_id: int, new_status: str, force: bool) -> None:
    """Move an order to NEW_STATUS."""
    handler = UpdateOrderStatusHandler(
        order_repo=services.order_repo,
        stock_ledger=services.stock_ledger,
        order_locks=services.order_locks,
    )

    try:
        dto = handler.handle(order_id, parse_status(new_status), force=force)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} is now {dto.status}.")


@click.command("cancel")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to cancel.")
@click.pass_obj
def order_cancel(services: Services, order_id: int) -> None:
    """Cancel an order (returns its items to stock)."""
    handler = CancelOrderHandler(
        order_repo=services.order_repo,
        stock_ledger=services.stock_ledger,
        order_locks=services.order_locks,
    )

    try:
        handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} cancelled, stock restored.")
