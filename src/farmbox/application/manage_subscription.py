"""Application services: subscription lifecycle use cases.

Each handler loads the subscription, applies one lifecycle transition on
the aggregate and saves it. Transition rules live on ``Subscription``.
"""

from __future__ import annotations

from datetime import date, timedelta

import structlog

from farmbox.application.dto import SubscriptionDTO
from farmbox.domain.exceptions import (
    EntityNotFoundError,
    PauseLimitExceeded,
    SkipLimitExceeded,
    ValidationError,
)
from farmbox.domain.model.subscription import Subscription, SubscriptionUpdate
from farmbox.domain.model.zone import ZoneTable
from farmbox.domain.repository.subscription_repository import SubscriptionRepository

logger = structlog.get_logger(__name__)

MIN_PAUSE_WEEKS = 1
MAX_PAUSE_WEEKS = 4


class _SubscriptionHandler:

    def __init__(self, subscription_repo: SubscriptionRepository) -> None:
        self._subscription_repo = subscription_repo

    def _load(self, subscription_id: int) -> Subscription:
        subscription = self._subscription_repo.get_by_id(subscription_id)
        if subscription is None:
            raise EntityNotFoundError(f"Subscription #{subscription_id} not found")
        return subscription

    def _save(self, subscription: Subscription) -> SubscriptionDTO:
        self._subscription_repo.save(subscription)
        return SubscriptionDTO.from_subscription(subscription)


class ShowSubscriptionHandler(_SubscriptionHandler):

    def handle(self, subscription_id: int) -> SubscriptionDTO:
        return SubscriptionDTO.from_subscription(self._load(subscription_id))

    def list_all(self, customer_id: str | None = None) -> list[SubscriptionDTO]:
        return [
            SubscriptionDTO.from_subscription(sub)
            for sub in self._subscription_repo.list_all(customer_id=customer_id)
        ]


class PauseSubscriptionHandler(_SubscriptionHandler):
    """Pause for a number of weeks or until an explicit end date."""

    def __init__(self, subscription_repo: SubscriptionRepository, max_pauses: int) -> None:
        super().__init__(subscription_repo)
        self._max_pauses = max_pauses

    def handle(
        self,
        subscription_id: int,
        until: date | None = None,
        weeks: int | None = None,
        today: date | None = None,
    ) -> SubscriptionDTO:
        today = today or date.today()
        if weeks is not None:
            if not MIN_PAUSE_WEEKS <= weeks <= MAX_PAUSE_WEEKS:
                raise ValidationError(
                    f"Pause duration must be between {MIN_PAUSE_WEEKS} "
                    f"and {MAX_PAUSE_WEEKS} weeks"
                )
            until = today + timedelta(weeks=weeks)
        if until is None:
            raise ValidationError("Either weeks or an end date must be provided")

        subscription = self._load(subscription_id)
        try:
            subscription.pause(until, today, self._max_pauses)
        except PauseLimitExceeded:
            logger.info("pause_limit_reached", subscription_id=subscription_id, cap=self._max_pauses)
            raise
        logger.info(
            "subscription_paused",
            subscription_id=subscription_id,
            until=str(until),
            pauses_used=subscription.pauses_used,
        )
        return self._save(subscription)


class ResumeSubscriptionHandler(_SubscriptionHandler):

    def __init__(
        self,
        subscription_repo: SubscriptionRepository,
        zone_table: ZoneTable,
    ) -> None:
        super().__init__(subscription_repo)
        self._zone_table = zone_table

    def handle(self, subscription_id: int, today: date | None = None) -> SubscriptionDTO:
        subscription = self._load(subscription_id)
        subscription.resume(
            self._zone_table.delivery_day_for(subscription.zone_id),
            today or date.today(),
        )
        logger.info(
            "subscription_resumed",
            subscription_id=subscription_id,
            next_delivery=str(subscription.next_delivery_date),
        )
        return self._save(subscription)


class SkipDeliveryHandler(_SubscriptionHandler):

    def __init__(self, subscription_repo: SubscriptionRepository, max_skips: int) -> None:
        super().__init__(subscription_repo)
        self._max_skips = max_skips

    def handle(self, subscription_id: int) -> SubscriptionDTO:
        subscription = self._load(subscription_id)
        try:
            subscription.skip(self._max_skips)
        except SkipLimitExceeded:
            logger.info("skip_limit_reached", subscription_id=subscription_id, cap=self._max_skips)
            raise
        logger.info(
            "delivery_skipped",
            subscription_id=subscription_id,
            next_delivery=str(subscription.next_delivery_date),
            skip_count=subscription.skip_count,
        )
        return self._save(subscription)


class UnskipDeliveryHandler(_SubscriptionHandler):

    def handle(self, subscription_id: int, today: date | None = None) -> SubscriptionDTO:
        subscription = self._load(subscription_id)
        subscription.unskip(today or date.today())
        logger.info(
            "delivery_restored",
            subscription_id=subscription_id,
            next_delivery=str(subscription.next_delivery_date),
            skip_count=subscription.skip_count,
        )
        return self._save(subscription)


class UpdateSubscriptionHandler(_SubscriptionHandler):

    def __init__(
        self,
        subscription_repo: SubscriptionRepository,
        zone_table: ZoneTable,
    ) -> None:
        super().__init__(subscription_repo)
        self._zone_table = zone_table

    def handle(
        self,
        subscription_id: int,
        update: SubscriptionUpdate,
        today: date | None = None,
    ) -> SubscriptionDTO:
        if update.is_empty:
            raise ValidationError("Nothing to update")
        subscription = self._load(subscription_id)
        subscription.apply(update, self._zone_table, today or date.today())
        logger.info(
            "subscription_updated",
            subscription_id=subscription_id,
            next_delivery=str(subscription.next_delivery_date),
        )
        return self._save(subscription)


class CancelSubscriptionHandler(_SubscriptionHandler):

    def handle(self, subscription_id: int) -> SubscriptionDTO:
        subscription = self._load(subscription_id)
        subscription.cancel()
        logger.info("subscription_cancelled", subscription_id=subscription_id)
        return self._save(subscription)


class ResetSkipsHandler(_SubscriptionHandler):
    """Billing-cycle reset, run by an external scheduler."""

    def handle(self) -> int:
        reset = 0
        for subscription in self._subscription_repo.list_all():
            if subscription.skip_count:
                subscription.reset_skip_count()
                self._subscription_repo.save(subscription)
                reset += 1
        logger.info("skip_counts_reset", subscriptions=reset)
        return reset


class ResetPausesHandler(_SubscriptionHandler):
    """Yearly pause allowance reset, run by an external scheduler."""

    def handle(self) -> int:
        reset = 0
        for subscription in self._subscription_repo.list_all():
            if subscription.pauses_used:
                subscription.reset_pause_count()
                self._subscription_repo.save(subscription)
                reset += 1
        logger.info("pause_counts_reset", subscriptions=reset)
        return reset
