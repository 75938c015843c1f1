"""JSON-file-backed implementation of SubscriptionRepository."""

from __future__ import annotations

from datetime import date, datetime
from pathlib import Path

from farmbox.domain.model.subscription import BoxSize, Subscription, SubscriptionStatus
from farmbox.domain.repository.subscription_repository import SubscriptionRepository
from farmbox.domain.service.delivery_schedule import Frequency
from farmbox.infrastructure.persistence.json_file import JsonFile


class JsonSubscriptionRepository(SubscriptionRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    def get_by_id(self, subscription_id: int) -> Subscription | None:
        for raw in self._file.load():
            if raw["id"] == subscription_id:
                return self._to_domain(raw)
        return None

    def list_all(self, customer_id: str | None = None) -> list[Subscription]:
        return [
            self._to_domain(raw)
            for raw in self._file.load()
            if customer_id is None or raw["customer_id"] == customer_id
        ]

    def save(self, subscription: Subscription) -> None:
        records = self._file.load()
        if subscription.id is None:
            subscription.id = max((r["id"] for r in records), default=0) + 1

        replaced = False
        for i, raw in enumerate(records):
            if raw["id"] == subscription.id:
                records[i] = self._to_raw(subscription)
                replaced = True
                break
        if not replaced:
            records.append(self._to_raw(subscription))
        self._file.persist(records)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(sub: Subscription) -> dict:
        return {
            "id": sub.id,
            "customer_id": sub.customer_id,
            "farm_id": sub.farm_id,
            "box_size": sub.box_size.value,
            "frequency": sub.frequency.value,
            "zone_id": sub.zone_id,
            "delivery_address": sub.delivery_address,
            "status": sub.status.value,
            "next_delivery_date": (
                sub.next_delivery_date.isoformat() if sub.next_delivery_date else None
            ),
            "skip_count": sub.skip_count,
            "pauses_used": sub.pauses_used,
            "paused_until": sub.paused_until.isoformat() if sub.paused_until else None,
            "preferences": sub.preferences,
            "created_at": sub.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Subscription:
        return Subscription(
            id=raw["id"],
            customer_id=raw["customer_id"],
            farm_id=raw["farm_id"],
            box_size=BoxSize(raw["box_size"]),
            frequency=Frequency(raw["frequency"]),
            zone_id=raw["zone_id"],
            delivery_address=raw["delivery_address"],
            status=SubscriptionStatus(raw["status"]),
            next_delivery_date=_parse_date(raw.get("next_delivery_date")),
            skip_count=raw.get("skip_count", 0),
            pauses_used=raw.get("pauses_used", 0),
            paused_until=_parse_date(raw.get("paused_until")),
            preferences=raw.get("preferences"),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )


def _parse_date(value: str | None) -> date | None:
    return date.fromisoformat(value) if value else None
