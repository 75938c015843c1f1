"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import lru_cache

from farmbox.domain.model.zone import ZoneTable
from farmbox.domain.service.order_composition_service import OrderComposer
from farmbox.domain.service.pricing_service import PricingEngine
from farmbox.infrastructure.config import Settings, load_settings
from farmbox.infrastructure.persistence.json_cart_storage import JsonCartStorage
from farmbox.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from farmbox.infrastructure.persistence.json_product_repository import (
    JsonFarmRepository,
    JsonProductRepository,
)
from farmbox.infrastructure.persistence.json_subscription_repository import (
    JsonSubscriptionRepository,
)
from farmbox.infrastructure.persistence.json_zone_table import load_zone_table


@lru_cache(maxsize=1)
def settings() -> Settings:
    return load_settings()


@lru_cache(maxsize=1)
def zone_table() -> ZoneTable:
    return load_zone_table(settings().data_dir / "zones.json")


def product_repository() -> JsonProductRepository:
    return JsonProductRepository(settings().data_dir / "products.json")


def farm_repository() -> JsonFarmRepository:
    return JsonFarmRepository(settings().data_dir / "farms.json")


def order_repository() -> JsonOrderRepository:
    return JsonOrderRepository(settings().data_dir / "orders.json")


def subscription_repository() -> JsonSubscriptionRepository:
    return JsonSubscriptionRepository(settings().data_dir / "subscriptions.json")


def cart_storage() -> JsonCartStorage:
    return JsonCartStorage(settings().data_dir / "carts.json")


def pricing_engine() -> PricingEngine:
    return PricingEngine(zone_table(), strict_zones=settings().strict_zones)


def order_composer() -> OrderComposer:
    return OrderComposer(product_repository(), farm_repository())
