"""Unit tests for delivery zones and the zone table."""

import pytest

from farmbox.domain.exceptions import ValidationError
from farmbox.domain.model.value_objects import Money
from farmbox.domain.model.zone import THURSDAY, WEDNESDAY, Zone, ZoneTable


class TestZone:

    def test_fee_below_threshold(self):
        zone = Zone("ZONE_A", Money.of("5"), Money.of("80"))
        assert zone.fee_for(Money.of("79.999")) == Money.of("5")

    def test_fee_waived_at_threshold(self):
        zone = Zone("ZONE_A", Money.of("5"), Money.of("80"))
        assert zone.fee_for(Money.of("80")).is_zero

    def test_empty_id_rejected(self):
        with pytest.raises(ValidationError, match="Zone id is required"):
            Zone("  ", Money.of("5"), Money.of("80"))

    def test_bad_delivery_day_rejected(self):
        with pytest.raises(ValidationError, match="delivery day must be 0-6"):
            Zone("ZONE_A", Money.of("5"), Money.of("80"), delivery_day=7)


class TestZoneTable:

    def test_default_zones(self):
        table = ZoneTable.default()
        assert len(table) == 3
        assert table.get("ZONE_B").flat_fee == Money.of("8")
        assert table.get("ZONE_C").free_delivery_threshold == Money.of("150")

    def test_unknown_and_missing_zone(self):
        table = ZoneTable.default()
        assert table.get("ZONE_X") is None
        assert table.get(None) is None
        assert "ZONE_X" not in table
        assert "ZONE_A" in table

    def test_delivery_day_for(self):
        table = ZoneTable.default()
        assert table.delivery_day_for("ZONE_A") == WEDNESDAY
        assert table.delivery_day_for("ZONE_B") == THURSDAY
        assert table.delivery_day_for("ZONE_X") == WEDNESDAY

    def test_duplicate_zone_ids_rejected(self):
        zone = Zone("ZONE_A", Money.of("5"), Money.of("80"))
        with pytest.raises(ValidationError, match="Duplicate zone id"):
            ZoneTable.from_zones([zone, zone])

    def test_table_is_read_only(self):
        table = ZoneTable.default()
        with pytest.raises(TypeError):
            table._zones["ZONE_Z"] = Zone("ZONE_Z", Money.of("1"), Money.of("2"))

    def test_iterates_zones(self):
        assert [z.id for z in ZoneTable.default()] == ["ZONE_A", "ZONE_B", "ZONE_C"]
