import click

from farmbox.infrastructure.bootstrap import settings, zone_table
from farmbox.infrastructure.cli.cart_commands import (
    cart_add,
    cart_clear,
    cart_remove,
    cart_show,
    cart_update,
    checkout,
)
from farmbox.infrastructure.cli.order_commands import (
    order_cancel,
    order_list,
    order_show,
    order_status,
)
from farmbox.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_update,
)
from farmbox.infrastructure.cli.subscription_commands import (
    subscription_cancel,
    subscription_create,
    subscription_list,
    subscription_pause,
    subscription_reset_pauses,
    subscription_reset_skips,
    subscription_resume,
    subscription_show,
    subscription_skip,
    subscription_unskip,
    subscription_update,
)
from farmbox.infrastructure.logging_config import configure_logging


@click.group()
def cli() -> None:
    """FarmBox: farm-to-consumer storefront"""
    current = settings()
    configure_logging(current.log_level, current.log_json)


@cli.group()
def cart() -> None:
    """Manage the shopping cart."""


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def product() -> None:
    """Manage farm products."""


@cli.group()
def subscription() -> None:
    """Manage box subscriptions."""


@cli.group()
def zone() -> None:
    """Inspect delivery zones."""


@zone.command("list")
def zone_list() -> None:
    """List delivery zones with fees and free-delivery thresholds."""
    click.echo(f"{'Zone':<8} {'Fee':>12} {'Free from':>14} {'Day':>4}  Name")
    click.echo("-" * 60)
    for z in zone_table():
        click.echo(
            f"{z.id:<8} {str(z.flat_fee):>12} {str(z.free_delivery_threshold):>14} "
            f"{z.delivery_day:>4}  {z.name}"
        )


# Register subcommands
cli.add_command(checkout)
cart.add_command(cart_add)
cart.add_command(cart_clear)
cart.add_command(cart_remove)
cart.add_command(cart_show)
cart.add_command(cart_update)
order.add_command(order_cancel)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_status)
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_update)
subscription.add_command(subscription_cancel)
subscription.add_command(subscription_create)
subscription.add_command(subscription_list)
subscription.add_command(subscription_pause)
subscription.add_command(subscription_reset_pauses)
subscription.add_command(subscription_reset_skips)
subscription.add_command(subscription_resume)
subscription.add_command(subscription_show)
subscription.add_command(subscription_skip)
subscription.add_command(subscription_unskip)
subscription.add_command(subscription_update)
