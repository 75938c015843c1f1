"""Domain service: cart pricing.

Turns cart line items into per-farm priced groups. The same engine backs
the cart preview and the checkout path, so the customer never sees one
total and gets charged another.

Delivery is fulfilled independently by each farm, so the delivery fee is
assessed per farm group against that group's own subtotal.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence

import structlog

from farmbox.domain.exceptions import UnknownZoneError, ValidationError
from farmbox.domain.model.cart import LineItem
from farmbox.domain.model.order import DeliveryType
from farmbox.domain.model.value_objects import DEFAULT_CURRENCY, Money
from farmbox.domain.model.zone import Zone, ZoneTable

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class PricedGroup:
    """One farm's slice of the cart, priced. Never persisted."""

    farm_id: str
    farm_name: str
    items: tuple[LineItem, ...]
    subtotal: Money
    delivery_fee: Money
    total: Money
    amount_to_free_delivery: Money


@dataclass(frozen=True)
class PricingResult:
    zone_id: str | None
    grouped_by_farm: Mapping[str, PricedGroup]
    grand_subtotal: Money
    grand_delivery_fee: Money
    grand_total: Money
    amount_to_free_delivery: Money

    @property
    def groups(self) -> list[PricedGroup]:
        return list(self.grouped_by_farm.values())

    @property
    def is_empty(self) -> bool:
        return not self.grouped_by_farm


class PricingEngine:
    """Prices carts against a zone table.

    Unknown zones are charged no delivery fee unless ``strict_zones`` is
    set, in which case they raise UnknownZoneError.
    """

    def __init__(self, zone_table: ZoneTable, strict_zones: bool = False) -> None:
        self._zone_table = zone_table
        self._strict_zones = strict_zones

    def price(
        self,
        items: Sequence[LineItem],
        zone_id: str | None,
        delivery_type: DeliveryType = DeliveryType.DELIVERY,
    ) -> PricingResult:
        currency = items[0].unit_price.currency if items else DEFAULT_CURRENCY
        zero = Money.zero(currency)

        if not items:
            return PricingResult(zone_id, {}, zero, zero, zero, zero)

        for item in items:
            if item.quantity <= 0:
                raise ValidationError(
                    f"Quantity for '{item.product_name}' must be positive, "
                    f"got {item.quantity}"
                )

        zone = self._resolve_zone(zone_id, delivery_type)

        grouped: dict[str, list[LineItem]] = {}
        for item in items:
            grouped.setdefault(item.farm_id, []).append(item)

        priced: dict[str, PricedGroup] = {}
        grand_subtotal = grand_fee = zero
        for farm_id, farm_items in grouped.items():
            group = self._price_group(farm_id, farm_items, zone, zero)
            priced[farm_id] = group
            grand_subtotal = grand_subtotal + group.subtotal
            grand_fee = grand_fee + group.delivery_fee

        # Display-only progress value over the combined cart. Fees above are
        # assessed per farm and never derive from this.
        to_free = (
            grand_subtotal.shortfall_to(zone.free_delivery_threshold) if zone else zero
        )

        result = PricingResult(
            zone_id=zone_id,
            grouped_by_farm=priced,
            grand_subtotal=grand_subtotal,
            grand_delivery_fee=grand_fee,
            grand_total=grand_subtotal + grand_fee,
            amount_to_free_delivery=to_free,
        )
        logger.debug(
            "cart_priced",
            zone_id=zone_id,
            delivery_type=delivery_type.value,
            farms=len(priced),
            subtotal=str(result.grand_subtotal.amount),
            delivery_fee=str(result.grand_delivery_fee.amount),
        )
        return result

    # --- Internal helpers -----------------------------------------------------

    def _resolve_zone(self, zone_id: str | None, delivery_type: DeliveryType) -> Zone | None:
        if delivery_type is DeliveryType.PICKUP:
            return None
        zone = self._zone_table.get(zone_id)
        if zone is None:
            if self._strict_zones:
                raise UnknownZoneError(str(zone_id))
            logger.warning("unknown_delivery_zone", zone_id=zone_id)
        return zone

    @staticmethod
    def _price_group(
        farm_id: str,
        items: list[LineItem],
        zone: Zone | None,
        zero: Money,
    ) -> PricedGroup:
        subtotal = Money.sum((item.line_total for item in items), zero.currency)

        if zone is None:
            fee = to_free = zero
        else:
            fee = zone.fee_for(subtotal)
            to_free = subtotal.shortfall_to(zone.free_delivery_threshold)

        return PricedGroup(
            farm_id=farm_id,
            farm_name=items[0].farm_name,
            items=tuple(items),
            subtotal=subtotal,
            delivery_fee=fee,
            total=subtotal + fee,
            amount_to_free_delivery=to_free,
        )
