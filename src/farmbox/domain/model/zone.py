"""Delivery zones and the process-wide zone table.

A zone decides the flat delivery fee a farm charges, the subtotal above
which delivery becomes free, and the weekday deliveries go out.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping

from farmbox.domain.exceptions import ValidationError
from farmbox.domain.model.value_objects import Money

WEDNESDAY = 2
THURSDAY = 3


@dataclass(frozen=True)
class Zone:
    """Immutable fee bucket assigned to a customer address."""

    id: str
    flat_fee: Money
    free_delivery_threshold: Money
    delivery_day: int = WEDNESDAY  # datetime.weekday(), Monday == 0
    name: str = ""

    def __post_init__(self) -> None:
        if not self.id or not self.id.strip():
            raise ValidationError("Zone id is required")
        if not 0 <= self.delivery_day <= 6:
            raise ValidationError(
                f"Zone {self.id} delivery day must be 0-6, got {self.delivery_day}"
            )

    def fee_for(self, subtotal: Money) -> Money:
        """Flat fee, or zero once *subtotal* reaches the free threshold."""
        if subtotal >= self.free_delivery_threshold:
            return Money.zero(subtotal.currency)
        return self.flat_fee


@dataclass(frozen=True)
class ZoneTable:
    """Read-only lookup of zones by id.

    Loaded once at start-up and shared; nothing mutates it afterwards.
    """

    _zones: Mapping[str, Zone] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_zones", MappingProxyType(dict(self._zones)))

    @classmethod
    def from_zones(cls, zones: Iterable[Zone]) -> ZoneTable:
        by_id: dict[str, Zone] = {}
        for zone in zones:
            if zone.id in by_id:
                raise ValidationError(f"Duplicate zone id '{zone.id}'")
            by_id[zone.id] = zone
        return cls(by_id)

    @classmethod
    def default(cls) -> ZoneTable:
        return cls.from_zones(DEFAULT_ZONES)

    def get(self, zone_id: str | None) -> Zone | None:
        if zone_id is None:
            return None
        return self._zones.get(zone_id)

    def delivery_day_for(self, zone_id: str | None) -> int:
        """Weekday the zone delivers on; Wednesday when the zone is unknown."""
        zone = self.get(zone_id)
        return zone.delivery_day if zone is not None else WEDNESDAY

    def __contains__(self, zone_id: object) -> bool:
        return zone_id in self._zones

    def __iter__(self):
        return iter(self._zones.values())

    def __len__(self) -> int:
        return len(self._zones)


DEFAULT_ZONES = (
    Zone("ZONE_A", Money.of("5"), Money.of("80"), WEDNESDAY, "Zone A (0-15km)"),
    Zone("ZONE_B", Money.of("8"), Money.of("120"), THURSDAY, "Zone B (15-30km)"),
    Zone("ZONE_C", Money.of("12"), Money.of("150"), THURSDAY, "Zone C (30-50km)"),
)
