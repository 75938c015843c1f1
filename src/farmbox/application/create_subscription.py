"""Application service: Create Subscription use case."""

from __future__ import annotations

from datetime import date

import structlog

from farmbox.application.dto import SubscriptionDTO
from farmbox.domain.exceptions import EntityNotFoundError, ValidationError
from farmbox.domain.model.subscription import BoxSize, Subscription
from farmbox.domain.model.zone import ZoneTable
from farmbox.domain.repository.product_repository import FarmRepository
from farmbox.domain.repository.subscription_repository import SubscriptionRepository
from farmbox.domain.service.delivery_schedule import Frequency

logger = structlog.get_logger(__name__)


class CreateSubscriptionHandler:

    def __init__(
        self,
        subscription_repo: SubscriptionRepository,
        farm_repo: FarmRepository,
        zone_table: ZoneTable,
    ) -> None:
        self._subscription_repo = subscription_repo
        self._farm_repo = farm_repo
        self._zone_table = zone_table

    def handle(
        self,
        customer_id: str,
        farm_id: str,
        box_size: str,
        frequency: str,
        zone_id: str,
        delivery_address: str,
        preferences: str | None = None,
        today: date | None = None,
    ) -> SubscriptionDTO:
        farm = self._farm_repo.get_by_id(farm_id)
        if farm is None or not farm.is_active:
            raise EntityNotFoundError(f"Farm '{farm_id}' not found or inactive")
        if not delivery_address or not delivery_address.strip():
            raise ValidationError("Delivery address is required")

        try:
            size = BoxSize(box_size)
            freq = Frequency(frequency)
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc

        for existing in self._subscription_repo.list_all(customer_id=customer_id):
            if existing.farm_id == farm_id and existing.accepts_deliveries:
                raise ValidationError(
                    "You already have an active subscription to this farm"
                )

        subscription = Subscription.start(
            customer_id=customer_id,
            farm_id=farm_id,
            box_size=size,
            frequency=freq,
            zone_id=zone_id,
            delivery_address=delivery_address.strip(),
            delivery_day=self._zone_table.delivery_day_for(zone_id),
            today=today or date.today(),
            preferences=preferences,
        )
        self._subscription_repo.save(subscription)
        logger.info(
            "subscription_created",
            subscription_id=subscription.id,
            farm_id=farm_id,
            next_delivery=str(subscription.next_delivery_date),
        )
        return SubscriptionDTO.from_subscription(subscription)
