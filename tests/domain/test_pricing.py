"""Unit tests for the PricingEngine domain service."""

import pytest
from structlog.testing import capture_logs

from farmbox.domain.exceptions import UnknownZoneError, ValidationError
from farmbox.domain.model.cart import LineItem
from farmbox.domain.model.order import DeliveryType
from farmbox.domain.model.value_objects import Money
from farmbox.domain.model.zone import ZoneTable
from farmbox.domain.service.pricing_service import PricingEngine


def _item(product_id: str, farm_id: str, price: str, qty: int) -> LineItem:
    return LineItem(
        product_id=product_id,
        product_name=f"Product {product_id}",
        farm_id=farm_id,
        farm_name=f"Farm {farm_id}",
        unit_price=Money.of(price),
        quantity=qty,
    )


def _two_farm_cart() -> list[LineItem]:
    return [
        _item("p1", "F1", "30", 2),
        _item("p2", "F1", "20", 1),
        _item("p3", "F2", "50", 1),
    ]


# ── Fees per farm ────────────────────────────────────────────────────────────


class TestPerFarmFees:

    def test_zone_a_two_farms(self):
        result = PricingEngine(ZoneTable.default()).price(_two_farm_cart(), "ZONE_A")

        f1 = result.grouped_by_farm["F1"]
        f2 = result.grouped_by_farm["F2"]
        assert f1.subtotal == Money.of("80")
        assert f1.delivery_fee.is_zero
        assert f2.subtotal == Money.of("50")
        assert f2.delivery_fee == Money.of("5")
        assert result.grand_subtotal == Money.of("130")
        assert result.grand_delivery_fee == Money.of("5")
        assert result.grand_total == Money.of("135")

    def test_group_totals(self):
        result = PricingEngine(ZoneTable.default()).price(_two_farm_cart(), "ZONE_A")
        for group in result.groups:
            assert group.total == group.subtotal + group.delivery_fee

    def test_per_group_amount_to_free_delivery(self):
        result = PricingEngine(ZoneTable.default()).price(_two_farm_cart(), "ZONE_A")
        assert result.grouped_by_farm["F1"].amount_to_free_delivery.is_zero
        assert result.grouped_by_farm["F2"].amount_to_free_delivery == Money.of("30")

    def test_combined_amount_to_free_delivery_uses_grand_subtotal(self):
        items = [_item("p1", "F1", "20", 1), _item("p2", "F2", "30", 1)]
        result = PricingEngine(ZoneTable.default()).price(items, "ZONE_A")
        assert result.amount_to_free_delivery == Money.of("30")
        # each farm still pays its own fee
        assert result.grand_delivery_fee == Money.of("10")

    def test_zone_c_fee(self):
        items = [_item("p1", "F1", "100", 1)]
        result = PricingEngine(ZoneTable.default()).price(items, "ZONE_C")
        assert result.grand_delivery_fee == Money.of("12")
        assert result.grand_total == Money.of("112")

    def test_groups_keep_first_seen_farm_order(self):
        items = [_item("p1", "F2", "1", 1), _item("p2", "F1", "1", 1), _item("p3", "F2", "1", 1)]
        result = PricingEngine(ZoneTable.default()).price(items, "ZONE_A")
        assert [g.farm_id for g in result.groups] == ["F2", "F1"]
        assert [i.product_id for i in result.groups[0].items] == ["p1", "p3"]


# ── Zones and delivery types ─────────────────────────────────────────────────


class TestZoneResolution:

    def test_unknown_zone_is_free_by_default(self):
        with capture_logs() as logs:
            result = PricingEngine(ZoneTable.default()).price(_two_farm_cart(), "ZONE_X")

        assert all(g.delivery_fee.is_zero for g in result.groups)
        assert result.grand_total == Money.of("130")
        assert result.amount_to_free_delivery.is_zero
        assert any(
            e["event"] == "unknown_delivery_zone" and e["log_level"] == "warning" for e in logs
        )

    def test_unknown_zone_raises_when_strict(self):
        engine = PricingEngine(ZoneTable.default(), strict_zones=True)
        with pytest.raises(UnknownZoneError, match="ZONE_X"):
            engine.price(_two_farm_cart(), "ZONE_X")

    def test_pickup_has_no_delivery_fee(self):
        result = PricingEngine(ZoneTable.default(), strict_zones=True).price(
            _two_farm_cart(), None, DeliveryType.PICKUP
        )
        assert result.grand_delivery_fee.is_zero
        assert result.grand_total == Money.of("130")


# ── Edge cases and properties ────────────────────────────────────────────────


class TestPricingEdgeCases:

    def test_empty_items_gives_zero_result(self):
        result = PricingEngine(ZoneTable.default()).price([], "ZONE_A")
        assert result.is_empty
        assert result.groups == []
        assert result.grand_total.is_zero
        assert result.amount_to_free_delivery.is_zero

    def test_non_positive_quantity_rejected(self):
        items = [_item("p1", "F1", "10", 0)]
        with pytest.raises(ValidationError, match="must be positive"):
            PricingEngine(ZoneTable.default()).price(items, "ZONE_A")

    def test_grand_subtotal_independent_of_grouping(self):
        items = [
            _item("p1", "F1", "12.345", 3),
            _item("p2", "F2", "0.999", 7),
            _item("p3", "F3", "45", 2),
            _item("p4", "F1", "3.5", 1),
        ]
        expected = Money.zero()
        for item in items:
            expected = expected + item.unit_price * item.quantity

        result = PricingEngine(ZoneTable.default()).price(items, "ZONE_B")
        assert result.grand_subtotal == expected

    def test_group_at_threshold_pays_nothing(self):
        for zone in ZoneTable.default():
            items = [_item("p1", "F1", str(zone.free_delivery_threshold.amount), 1)]
            result = PricingEngine(ZoneTable.default()).price(items, zone.id)
            assert result.grand_delivery_fee.is_zero

    def test_pricing_is_deterministic(self):
        engine = PricingEngine(ZoneTable.default())
        assert engine.price(_two_farm_cart(), "ZONE_A") == engine.price(
            _two_farm_cart(), "ZONE_A"
        )
