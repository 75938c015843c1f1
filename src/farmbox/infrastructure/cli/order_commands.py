"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from farmbox.application.cancel_order import CancelOrderHandler
from farmbox.application.dto import OrderDTO
from farmbox.application.show_order import ListOrdersHandler, ShowOrderHandler
from farmbox.application.update_order_status import UpdateOrderStatusHandler
from farmbox.domain.exceptions import DomainException
from farmbox.domain.model.order import OrderStatus
from farmbox.infrastructure.bootstrap import order_repository


def display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.order_number}  (status={dto.status})")
    click.echo(f"Farm:     {dto.farm_name}")
    click.echo(f"Delivery: {dto.delivery_type} {dto.zone_id or ''} on {dto.delivery_date}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()
    click.echo(f"  {'Product':<22} {'Qty':>5} {'Price':>14} {'Total':>14}")
    click.echo(f"  {'-'*58}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<22} {item.quantity:>5} "
            f"{item.unit_price:>14} {item.line_total:>14}"
        )
    click.echo(f"  {'-'*58}")
    click.echo(f"  {'Subtotal':<42} {dto.subtotal:>14}")
    click.echo(f"  {'Delivery':<42} {dto.delivery_fee:>14}")
    click.echo(f"  {'Order Total':<42} {dto.total:>14}")


@click.command("show")
@click.option("--number", "order_number", required=True, help="Order number to display.")
def order_show(order_number: str) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repo=order_repository())

    try:
        dto = handler.handle(order_number)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    display_order(dto)


@click.command("list")
@click.option("--customer", "customer_id", default=None, help="Only this customer's orders.")
@click.option("--farm", "farm_id", default=None, help="Only this farm's orders.")
@click.option("--status", type=click.Choice([s.value for s in OrderStatus]), default=None)
def order_list(customer_id: str | None, farm_id: str | None, status: str | None) -> None:
    """List orders, newest first."""
    orders = ListOrdersHandler(order_repository()).handle(customer_id, farm_id, status)

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'Number':<22} {'Farm':<20} {'Status':<18} {'Total':>14}")
    click.echo("-" * 77)
    for dto in orders:
        click.echo(f"{dto.order_number:<22} {dto.farm_name:<20} {dto.status:<18} {dto.total:>14}")


@click.command("status")
@click.option("--number", "order_number", required=True, help="Order number.")
@click.option("--to", "status", required=True, type=click.Choice([s.value for s in OrderStatus]))
def order_status(order_number: str, status: str) -> None:
    """Move an order along the fulfilment workflow (farmer)."""
    try:
        UpdateOrderStatusHandler(order_repository()).handle(order_number, status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {order_number} is now {status}.")


@click.command("cancel")
@click.option("--number", "order_number", required=True, help="Order number to cancel.")
@click.option("--customer", "customer_id", default=None, help="Customer placing the request.")
@click.option("--reason", default=None, help="Why the order is cancelled.")
def order_cancel(order_number: str, customer_id: str | None, reason: str | None) -> None:
    """Cancel a pending order."""
    try:
        CancelOrderHandler(order_repository()).handle(order_number, reason, customer_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {order_number} cancelled.")
