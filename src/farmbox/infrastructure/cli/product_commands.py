"""CLI commands for the Product aggregate (farmer side)."""

from __future__ import annotations

import click

from farmbox.application.add_product import AddProductHandler
from farmbox.application.update_product import UpdateProductHandler
from farmbox.domain.exceptions import DomainException
from farmbox.domain.model.product import ProductUpdate
from farmbox.domain.model.value_objects import UNSET, Money
from farmbox.infrastructure.bootstrap import farm_repository, product_repository


@click.command("add")
@click.option("--farm", "farm_id", required=True, help="Farm ID.")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 4.500).")
@click.option("--unit", default="kg", show_default=True, help="Sales unit.")
@click.option("--description", default="", help="Short product description.")
@click.option("--stock", "stock_quantity", default=0, type=int, help="Units in stock.")
def product_add(
    farm_id: str, name: str, price: str, unit: str, description: str, stock_quantity: int
) -> None:
    """Add a new product to a farm's catalog."""
    handler = AddProductHandler(product_repository(), farm_repository())

    try:
        product = handler.handle(
            farm_id=farm_id,
            name=name,
            price=price,
            unit=unit,
            description=description,
            stock_quantity=stock_quantity,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} '{product.name}' added at {product.price}/{product.unit}")


@click.command("list")
@click.option("--farm", "farm_id", default=None, help="Only this farm's products.")
def product_list(farm_id: str | None) -> None:
    """List products in the catalog."""
    products = product_repository().list_all(farm_id=farm_id)

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Farm':<10} {'Name':<22} {'Price':>14} {'Unit':<6} {'Available':<9}")
    click.echo("-" * 72)
    for p in products:
        click.echo(
            f"{p.id:<6} {p.farm_id:<10} {p.name:<22} {str(p.price):>14} "
            f"{p.unit:<6} {'yes' if p.is_available else 'no':<9}"
        )


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--farm", "farm_id", default=None, help="Owning farm (checked if given).")
@click.option("--name", default=None, help="New name.")
@click.option("--price", default=None, help="New price (e.g. 29.990).")
@click.option("--unit", default=None, help="New sales unit.")
@click.option("--description", default=None, help="New description ('' clears it).")
@click.option("--available/--unavailable", "is_available", default=None, help="Availability.")
@click.option("--stock", "stock_quantity", default=None, type=int, help="Units in stock.")
def product_update(
    product_id: str,
    farm_id: str | None,
    name: str | None,
    price: str | None,
    unit: str | None,
    description: str | None,
    is_available: bool | None,
    stock_quantity: int | None,
) -> None:
    """Update a product. Only the options given are changed."""
    handler = UpdateProductHandler(product_repo=product_repository())

    try:
        update = ProductUpdate(
            name=UNSET if name is None else name,
            price=UNSET if price is None else Money.of(price),
            unit=UNSET if unit is None else unit,
            description=UNSET if description is None else description,
            is_available=UNSET if is_available is None else is_available,
            stock_quantity=UNSET if stock_quantity is None else stock_quantity,
        )
        handler.handle(product_id=product_id, update=update, farm_id=farm_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} updated.")
