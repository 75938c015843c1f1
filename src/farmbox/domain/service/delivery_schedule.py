"""Delivery calendar helpers.

Each zone delivers on one weekday. Boxes go out weekly or every other
week on that day.
"""

from __future__ import annotations

from datetime import date, timedelta
from enum import Enum


class Frequency(Enum):
    WEEKLY = "WEEKLY"
    BIWEEKLY = "BIWEEKLY"

    @property
    def cycle(self) -> timedelta:
        return timedelta(weeks=1 if self is Frequency.WEEKLY else 2)


def next_delivery_date(delivery_day: int, frequency: Frequency, today: date) -> date:
    """First delivery weekday strictly after *today*.

    A biweekly box is never scheduled less than a week out.
    """
    days_until = delivery_day - today.weekday()
    if days_until <= 0:
        days_until += 7
    if frequency is Frequency.BIWEEKLY and days_until < 7:
        days_until += 7
    return today + timedelta(days=days_until)


CHECKOUT_LEAD_DAYS = 3


def next_checkout_delivery_date(delivery_day: int, today: date) -> date:
    """Delivery date offered at checkout.

    Farms need at least ``CHECKOUT_LEAD_DAYS`` to prepare, otherwise the
    order rolls over to the following week's delivery day.
    """
    days_until = delivery_day - today.weekday()
    if days_until <= 0:
        days_until += 7
    if days_until < CHECKOUT_LEAD_DAYS:
        days_until += 7
    return today + timedelta(days=days_until)
