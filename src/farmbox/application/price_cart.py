"""Application service: Price Cart use case (query).

Backs the cart and checkout previews. Uses the same PricingEngine as
checkout so the preview and the placed orders always agree.
"""

from __future__ import annotations

from farmbox.application.dto import CartSummaryDTO
from farmbox.domain.model.order import DeliveryType
from farmbox.domain.repository.cart_storage import CartStorage
from farmbox.domain.service.pricing_service import PricingEngine


class PriceCartHandler:

    def __init__(self, cart_storage: CartStorage, pricing: PricingEngine) -> None:
        self._cart_storage = cart_storage
        self._pricing = pricing

    def handle(
        self,
        cart_key: str,
        zone_id: str | None,
        delivery_type: DeliveryType = DeliveryType.DELIVERY,
    ) -> CartSummaryDTO:
        cart = self._cart_storage.load(cart_key)
        result = self._pricing.price(cart.items, zone_id, delivery_type)
        return CartSummaryDTO.from_pricing(result, cart.item_count)
