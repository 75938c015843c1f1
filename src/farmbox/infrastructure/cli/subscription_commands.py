"""CLI commands for box subscriptions."""

from __future__ import annotations

import click

from farmbox.application.create_subscription import CreateSubscriptionHandler
from farmbox.application.dto import SubscriptionDTO
from farmbox.application.manage_subscription import (
    CancelSubscriptionHandler,
    PauseSubscriptionHandler,
    ResetPausesHandler,
    ResetSkipsHandler,
    ResumeSubscriptionHandler,
    ShowSubscriptionHandler,
    SkipDeliveryHandler,
    UnskipDeliveryHandler,
    UpdateSubscriptionHandler,
)
from farmbox.domain.exceptions import DomainException
from farmbox.domain.model.subscription import BoxSize, SubscriptionUpdate
from farmbox.domain.model.value_objects import UNSET
from farmbox.domain.service.delivery_schedule import Frequency
from farmbox.infrastructure.bootstrap import (
    farm_repository,
    settings,
    subscription_repository,
    zone_table,
)

_id_option = click.option("--id", "subscription_id", required=True, type=int, help="Subscription ID.")


def _display(dto: SubscriptionDTO) -> None:
    click.echo(f"Subscription #{dto.id}  (status={dto.status})")
    click.echo(f"Farm:          {dto.farm_id}")
    click.echo(f"Box:           {dto.box_size}, {dto.frequency}")
    click.echo(f"Zone:          {dto.zone_id}")
    click.echo(f"Next delivery: {dto.next_delivery_date or '-'}")
    click.echo(f"Skips used:    {dto.skip_count}")
    click.echo(f"Pauses used:   {dto.pauses_used}")
    if dto.paused_until:
        click.echo(f"Paused until:  {dto.paused_until}")


@click.command("create")
@click.option("--customer", "customer_id", required=True, help="Customer ID.")
@click.option("--farm", "farm_id", required=True, help="Farm ID.")
@click.option("--size", "box_size", type=click.Choice([b.value for b in BoxSize]), default="MEDIUM",
              show_default=True)
@click.option("--frequency", type=click.Choice([f.value for f in Frequency]), default="WEEKLY",
              show_default=True)
@click.option("--zone", "zone_id", required=True, help="Delivery zone.")
@click.option("--address", required=True, help="Delivery address.")
@click.option("--preferences", default=None, help="Likes and dislikes for the box.")
def subscription_create(
    customer_id: str,
    farm_id: str,
    box_size: str,
    frequency: str,
    zone_id: str,
    address: str,
    preferences: str | None,
) -> None:
    """Subscribe to a farm's recurring box."""
    handler = CreateSubscriptionHandler(subscription_repository(), farm_repository(), zone_table())

    try:
        dto = handler.handle(
            customer_id, farm_id, box_size, frequency, zone_id, address, preferences
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display(dto)


@click.command("show")
@_id_option
def subscription_show(subscription_id: int) -> None:
    """Show a subscription."""
    try:
        dto = ShowSubscriptionHandler(subscription_repository()).handle(subscription_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display(dto)


@click.command("list")
@click.option("--customer", "customer_id", default=None, help="Only this customer's.")
def subscription_list(customer_id: str | None) -> None:
    """List subscriptions."""
    subs = ShowSubscriptionHandler(subscription_repository()).list_all(customer_id)

    if not subs:
        click.echo("No subscriptions found.")
        return

    click.echo(f"{'ID':<5} {'Farm':<10} {'Box':<8} {'Status':<10} {'Next delivery':<13}")
    click.echo("-" * 50)
    for dto in subs:
        click.echo(
            f"{dto.id:<5} {dto.farm_id:<10} {dto.box_size:<8} {dto.status:<10} "
            f"{dto.next_delivery_date or '-':<13}"
        )


@click.command("pause")
@_id_option
@click.option("--weeks", type=click.IntRange(1, 4), default=None, help="Pause length in weeks.")
@click.option("--until", type=click.DateTime(["%Y-%m-%d"]), default=None, help="Last day of the pause.")
def subscription_pause(subscription_id: int, weeks: int | None, until) -> None:
    """Pause deliveries for 1 to 4 weeks."""
    handler = PauseSubscriptionHandler(subscription_repository(), settings().max_pauses_per_year)

    try:
        dto = handler.handle(subscription_id, until=until.date() if until else None, weeks=weeks)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Subscription #{subscription_id} paused until {dto.paused_until}.")


@click.command("resume")
@_id_option
def subscription_resume(subscription_id: int) -> None:
    """Resume a paused subscription."""
    try:
        dto = ResumeSubscriptionHandler(subscription_repository(), zone_table()).handle(
            subscription_id
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Subscription #{subscription_id} resumed; next delivery {dto.next_delivery_date}.")


@click.command("skip")
@_id_option
def subscription_skip(subscription_id: int) -> None:
    """Skip the next delivery."""
    handler = SkipDeliveryHandler(subscription_repository(), settings().max_skips_per_cycle)

    try:
        dto = handler.handle(subscription_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Delivery skipped; next delivery {dto.next_delivery_date}.")


@click.command("unskip")
@_id_option
def subscription_unskip(subscription_id: int) -> None:
    """Take back the last skipped delivery."""
    try:
        dto = UnskipDeliveryHandler(subscription_repository()).handle(subscription_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Delivery restored; next delivery {dto.next_delivery_date}.")


@click.command("update")
@_id_option
@click.option("--size", "box_size", type=click.Choice([b.value for b in BoxSize]), default=None,
              help="New box size.")
@click.option("--frequency", type=click.Choice([f.value for f in Frequency]), default=None,
              help="New delivery frequency.")
@click.option("--zone", "zone_id", default=None, help="New delivery zone.")
@click.option("--address", default=None, help="New delivery address.")
@click.option("--preferences", default=None, help="New preferences ('' clears them).")
def subscription_update(
    subscription_id: int,
    box_size: str | None,
    frequency: str | None,
    zone_id: str | None,
    address: str | None,
    preferences: str | None,
) -> None:
    """Change a subscription. Only the options given are changed."""
    handler = UpdateSubscriptionHandler(subscription_repository(), zone_table())

    try:
        update = SubscriptionUpdate(
            box_size=UNSET if box_size is None else BoxSize(box_size),
            frequency=UNSET if frequency is None else Frequency(frequency),
            zone_id=UNSET if zone_id is None else zone_id,
            delivery_address=UNSET if address is None else address,
            preferences=UNSET if preferences is None else preferences,
        )
        dto = handler.handle(subscription_id, update)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display(dto)


@click.command("cancel")
@_id_option
def subscription_cancel(subscription_id: int) -> None:
    """Cancel a subscription for good."""
    try:
        CancelSubscriptionHandler(subscription_repository()).handle(subscription_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Subscription #{subscription_id} cancelled. You can resubscribe anytime!")


@click.command("reset-skips")
def subscription_reset_skips() -> None:
    """Start a new billing cycle for every subscription."""
    count = ResetSkipsHandler(subscription_repository()).handle()
    click.echo(f"Skip counts reset on {count} subscription(s).")


@click.command("reset-pauses")
def subscription_reset_pauses() -> None:
    """Start a new pause year for every subscription."""
    count = ResetPausesHandler(subscription_repository()).handle()
    click.echo(f"Pause counts reset on {count} subscription(s).")
