"""Subscription aggregate: a recurring box delivered by one farm.

Lifecycle::

    ACTIVE --pause--> PAUSED --resume--> ACTIVE
    ACTIVE --skip---> ACTIVE   (next delivery moves one cycle later)
    ACTIVE --unskip-> ACTIVE   (and back one cycle)
    ACTIVE|PAUSED --cancel--> CANCELLED   (terminal)

Only ACTIVE subscriptions produce orders; the scheduler that materialises
deliveries must check ``accepts_deliveries`` right before creating one.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import date, datetime, timezone
from enum import Enum

from farmbox.domain.exceptions import (
    InvalidTransitionError,
    PauseLimitExceeded,
    SkipLimitExceeded,
    ValidationError,
)
from farmbox.domain.model.value_objects import UNSET, Unset
from farmbox.domain.model.zone import ZoneTable
from farmbox.domain.service.delivery_schedule import Frequency, next_delivery_date

MAX_PAUSE_DAYS = 28


class SubscriptionStatus(Enum):
    ACTIVE = "ACTIVE"
    PAUSED = "PAUSED"
    CANCELLED = "CANCELLED"


class BoxSize(Enum):
    SMALL = "SMALL"
    MEDIUM = "MEDIUM"
    LARGE = "LARGE"
    FAMILY = "FAMILY"


@dataclass(frozen=True)
class SubscriptionUpdate:
    """Explicit partial update for a subscription.

    Fields left as ``UNSET`` are not touched. ``preferences`` may be set
    to ``None`` or ``""`` to clear it.
    """

    box_size: BoxSize | Unset = UNSET
    frequency: Frequency | Unset = UNSET
    zone_id: str | Unset = UNSET
    delivery_address: str | Unset = UNSET
    preferences: str | None | Unset = UNSET

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is UNSET for f in fields(self))

    @property
    def changes_schedule(self) -> bool:
        return self.frequency is not UNSET or self.zone_id is not UNSET


@dataclass
class Subscription:
    id: int | None
    customer_id: str
    farm_id: str
    box_size: BoxSize
    frequency: Frequency
    zone_id: str
    delivery_address: str
    status: SubscriptionStatus = SubscriptionStatus.ACTIVE
    next_delivery_date: date | None = None
    skip_count: int = 0
    pauses_used: int = 0
    paused_until: date | None = None
    preferences: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def start(
        customer_id: str,
        farm_id: str,
        box_size: BoxSize,
        frequency: Frequency,
        zone_id: str,
        delivery_address: str,
        delivery_day: int,
        today: date,
        preferences: str | None = None,
    ) -> Subscription:
        return Subscription(
            id=None,
            customer_id=customer_id,
            farm_id=farm_id,
            box_size=box_size,
            frequency=frequency,
            zone_id=zone_id,
            delivery_address=delivery_address,
            next_delivery_date=next_delivery_date(delivery_day, frequency, today),
            preferences=preferences,
        )

    # --- State transitions ----------------------------------------------------

    def pause(self, until: date, today: date, cap: int) -> None:
        """ACTIVE -> PAUSED until *until*. Orders already placed are left untouched.

        A pause lasts 1 to ``MAX_PAUSE_DAYS`` days and uses one of the
        *cap* pauses allowed per year.
        """
        if self.status is SubscriptionStatus.PAUSED:
            raise InvalidTransitionError("Subscription is already paused")
        if self.status is SubscriptionStatus.CANCELLED:
            raise InvalidTransitionError("Cannot pause a cancelled subscription")
        if self.pauses_used >= cap:
            raise PauseLimitExceeded(cap)

        days = (until - today).days
        if days > MAX_PAUSE_DAYS:
            raise ValidationError("Pause duration cannot exceed 4 weeks")
        if days < 1:
            raise ValidationError("End date must be after start date")

        self.status = SubscriptionStatus.PAUSED
        self.paused_until = until
        self.pauses_used += 1

    def resume(self, delivery_day: int, today: date) -> None:
        """PAUSED -> ACTIVE, rescheduling from *today* onwards."""
        if self.status is not SubscriptionStatus.PAUSED:
            raise InvalidTransitionError(
                f"Cannot resume a subscription in {self.status.value} status"
            )
        self.status = SubscriptionStatus.ACTIVE
        self.paused_until = None
        self.next_delivery_date = next_delivery_date(delivery_day, self.frequency, today)

    def skip(self, cap: int) -> None:
        """Push the next delivery back one cycle.

        Raises SkipLimitExceeded once ``skip_count`` has reached *cap*;
        the delivery date is left as it was.
        """
        if self.status is not SubscriptionStatus.ACTIVE:
            raise InvalidTransitionError(
                "Can only skip deliveries for active subscriptions"
            )
        if self.skip_count >= cap:
            raise SkipLimitExceeded(cap)
        if self.next_delivery_date is not None:
            self.next_delivery_date = self.next_delivery_date + self.frequency.cycle
        self.skip_count += 1

    def unskip(self, today: date) -> None:
        """Take back the latest skip: the delivery moves one cycle earlier."""
        if self.status is not SubscriptionStatus.ACTIVE:
            raise InvalidTransitionError(
                "Can only restore deliveries for active subscriptions"
            )
        if self.skip_count == 0 or self.next_delivery_date is None:
            raise ValidationError("No skipped delivery to restore")

        restored = self.next_delivery_date - self.frequency.cycle
        if restored <= today:
            raise ValidationError("The skipped delivery date has already passed")
        self.next_delivery_date = restored
        self.skip_count -= 1

    def cancel(self) -> None:
        if self.status is SubscriptionStatus.CANCELLED:
            raise InvalidTransitionError("Subscription is already cancelled")
        self.status = SubscriptionStatus.CANCELLED
        self.next_delivery_date = None
        self.paused_until = None

    def apply(self, update: SubscriptionUpdate, zone_table: ZoneTable, today: date) -> None:
        """Apply every field that *update* explicitly sets.

        A new frequency or zone reschedules an active subscription from
        *today* on the zone's delivery day.
        """
        if self.status is SubscriptionStatus.CANCELLED:
            raise InvalidTransitionError("Cannot update a cancelled subscription")
        if update.delivery_address is not UNSET and not update.delivery_address.strip():
            raise ValidationError("Delivery address cannot be empty")
        if update.zone_id is not UNSET and not update.zone_id.strip():
            raise ValidationError("Delivery zone cannot be empty")

        if update.box_size is not UNSET:
            self.box_size = update.box_size
        if update.frequency is not UNSET:
            self.frequency = update.frequency
        if update.zone_id is not UNSET:
            self.zone_id = update.zone_id.strip()
        if update.delivery_address is not UNSET:
            self.delivery_address = update.delivery_address.strip()
        if update.preferences is not UNSET:
            self.preferences = update.preferences or None

        if update.changes_schedule and self.status is SubscriptionStatus.ACTIVE:
            self.next_delivery_date = next_delivery_date(
                zone_table.delivery_day_for(self.zone_id), self.frequency, today
            )

    def reset_skip_count(self) -> None:
        """Start a new billing cycle."""
        self.skip_count = 0

    def reset_pause_count(self) -> None:
        """Start a new pause year."""
        self.pauses_used = 0

    # --- Queries --------------------------------------------------------------

    @property
    def accepts_deliveries(self) -> bool:
        return self.status is SubscriptionStatus.ACTIVE
