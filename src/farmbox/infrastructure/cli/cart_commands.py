"""CLI commands for the shopping cart and checkout."""

from __future__ import annotations

from datetime import date

import click

from farmbox.application.add_to_cart import AddToCartHandler
from farmbox.application.dto import CartSummaryDTO
from farmbox.application.place_order import PlaceOrderHandler
from farmbox.application.price_cart import PriceCartHandler
from farmbox.application.update_cart import UpdateCartHandler
from farmbox.domain.exceptions import DomainException
from farmbox.domain.model.order import DeliveryMeta, DeliveryType
from farmbox.domain.service.delivery_schedule import next_checkout_delivery_date
from farmbox.infrastructure.bootstrap import (
    cart_storage,
    farm_repository,
    order_composer,
    order_repository,
    pricing_engine,
    product_repository,
    settings,
    zone_table,
)
from farmbox.infrastructure.cli.order_commands import display_order

_cart_option = click.option("--cart", "cart_key", default="default", show_default=True, help="Cart key.")


@click.command("add")
@_cart_option
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--qty", "quantity", default=1, type=int, show_default=True, help="Quantity to add.")
def cart_add(cart_key: str, product_id: str, quantity: int) -> None:
    """Add a product to the cart."""
    handler = AddToCartHandler(cart_storage(), product_repository(), farm_repository())

    try:
        handler.handle(cart_key, product_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Added {quantity} x product #{product_id} to cart '{cart_key}'")


@click.command("update")
@_cart_option
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--qty", "quantity", required=True, type=int, help="New quantity (0 removes).")
def cart_update(cart_key: str, product_id: str, quantity: int) -> None:
    """Change the quantity of a cart line."""
    try:
        UpdateCartHandler(cart_storage()).handle(cart_key, product_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Cart '{cart_key}' updated.")


@click.command("remove")
@_cart_option
@click.option("--product", "product_id", required=True, help="Product ID.")
def cart_remove(cart_key: str, product_id: str) -> None:
    """Remove a product from the cart."""
    UpdateCartHandler(cart_storage()).remove(cart_key, product_id)
    click.echo(f"Product #{product_id} removed from cart '{cart_key}'.")


@click.command("clear")
@_cart_option
@click.option("--farm", "farm_id", default=None, help="Only clear this farm's items.")
def cart_clear(cart_key: str, farm_id: str | None) -> None:
    """Empty the cart."""
    UpdateCartHandler(cart_storage()).clear(cart_key, farm_id)
    click.echo(f"Cart '{cart_key}' cleared.")


def _display_summary(dto: CartSummaryDTO) -> None:
    if not dto.groups:
        click.echo("Your cart is empty.")
        return

    for group in dto.groups:
        click.echo(f"{group.farm_name} ({group.farm_id})")
        click.echo(f"  {'Product':<22} {'Qty':>5} {'Price':>14} {'Total':>14}")
        click.echo(f"  {'-'*58}")
        for item in group.items:
            click.echo(
                f"  {item.product_name:<22} {item.quantity:>5} "
                f"{item.unit_price:>14} {item.line_total:>14}"
            )
        click.echo(f"  {'Subtotal':<42} {group.subtotal:>14}")
        click.echo(f"  {'Delivery':<42} {group.delivery_fee:>14}")
        click.echo()

    click.echo(f"{'Items':<44} {dto.item_count:>14}")
    click.echo(f"{'Subtotal':<44} {dto.subtotal:>14}")
    click.echo(f"{'Delivery':<44} {dto.delivery_fee:>14}")
    click.echo(f"{'Total':<44} {dto.total:>14}")
    if not dto.amount_to_free_delivery.startswith("0.000"):
        click.echo(f"Add {dto.amount_to_free_delivery} for free delivery!")


@click.command("show")
@_cart_option
@click.option("--zone", "zone_id", default="ZONE_A", show_default=True, help="Delivery zone.")
@click.option("--pickup", is_flag=True, default=False, help="Price for farm pickup.")
def cart_show(cart_key: str, zone_id: str, pickup: bool) -> None:
    """Show the priced cart."""
    handler = PriceCartHandler(cart_storage(), pricing_engine())
    delivery_type = DeliveryType.PICKUP if pickup else DeliveryType.DELIVERY

    try:
        dto = handler.handle(cart_key, zone_id, delivery_type)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_summary(dto)


@click.command("checkout")
@_cart_option
@click.option("--customer", "customer_id", required=True, help="Customer ID.")
@click.option("--zone", "zone_id", default=None, help="Delivery zone.")
@click.option("--address", default=None, help="Delivery address.")
@click.option("--pickup", is_flag=True, default=False, help="Collect from the farm.")
@click.option("--date", "delivery_date", type=click.DateTime(["%Y-%m-%d"]), default=None,
              help="Delivery date (defaults to the zone's next delivery day).")
@click.option("--window", default="6:00-9:00", show_default=True, help="Delivery time window.")
@click.option("--notes", default=None, help="Notes for the farmer.")
def checkout(
    cart_key: str,
    customer_id: str,
    zone_id: str | None,
    address: str | None,
    pickup: bool,
    delivery_date,
    window: str,
    notes: str | None,
) -> None:
    """Place one order per farm for everything in the cart."""
    if delivery_date is not None:
        when = delivery_date.date()
    else:
        when = next_checkout_delivery_date(
            zone_table().delivery_day_for(zone_id), date.today()
        )

    handler = PlaceOrderHandler(
        cart_storage=cart_storage(),
        order_repo=order_repository(),
        product_repo=product_repository(),
        pricing=pricing_engine(),
        composer=order_composer(),
        max_attempts=settings().order_number_attempts,
    )

    try:
        delivery = DeliveryMeta(
            delivery_type=DeliveryType.PICKUP if pickup else DeliveryType.DELIVERY,
            delivery_date=when,
            zone_id=zone_id,
            delivery_window=window,
            delivery_address=address,
            customer_notes=notes,
        )
        orders = handler.handle(cart_key, delivery, customer_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{len(orders)} order(s) placed.")
    for dto in orders:
        click.echo()
        display_order(dto)
