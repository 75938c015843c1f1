"""Zone table loader.

``zones.json`` is read once at start-up. Without the file the built-in
zone table is used.
"""

from __future__ import annotations

import json
from pathlib import Path

import structlog

from farmbox.domain.model.value_objects import Money
from farmbox.domain.model.zone import WEDNESDAY, Zone, ZoneTable

logger = structlog.get_logger(__name__)


def load_zone_table(file_path: Path) -> ZoneTable:
    if not file_path.exists():
        return ZoneTable.default()

    raw = json.loads(file_path.read_text(encoding="utf-8"))
    table = ZoneTable.from_zones(
        Zone(
            id=item["id"],
            flat_fee=Money.of(item["fee"]),
            free_delivery_threshold=Money.of(item["free_threshold"]),
            delivery_day=item.get("delivery_day", WEDNESDAY),
            name=item.get("name", ""),
        )
        for item in raw
    )
    logger.info("zone_table_loaded", path=str(file_path), zones=len(table))
    return table
