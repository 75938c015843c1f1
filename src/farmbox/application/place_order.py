"""Application service: Place Order (checkout) use case.

Orchestrates the whole checkout:

1. Load the cart and refresh each line with the product's current price.
2. Price the cart with the same engine the preview uses.
3. Compose one order per farm (the composer rejects unavailable items).
4. Persist each order, retrying with a fresh number on a collision.
5. Remove the checked-out farms' lines from the cart. The cart is stored
   even when a later farm fails, so placed farms are not ordered again.
"""

from __future__ import annotations

import structlog

from farmbox.application.dto import OrderDTO
from farmbox.domain.exceptions import DuplicateOrderNumberError, ValidationError
from farmbox.domain.model.order import DeliveryMeta, Order
from farmbox.domain.repository.cart_storage import CartStorage
from farmbox.domain.repository.order_repository import OrderRepository
from farmbox.domain.repository.product_repository import ProductRepository
from farmbox.domain.service.order_composition_service import OrderComposer
from farmbox.domain.service.order_numbers import (
    OrderNumberGenerator,
    generate_order_number,
)
from farmbox.domain.service.pricing_service import PricingEngine

logger = structlog.get_logger(__name__)

DEFAULT_ORDER_NUMBER_ATTEMPTS = 3


class PlaceOrderHandler:

    def __init__(
        self,
        cart_storage: CartStorage,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        pricing: PricingEngine,
        composer: OrderComposer,
        order_number_generator: OrderNumberGenerator = generate_order_number,
        max_attempts: int = DEFAULT_ORDER_NUMBER_ATTEMPTS,
    ) -> None:
        self._cart_storage = cart_storage
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._pricing = pricing
        self._composer = composer
        self._next_order_number = order_number_generator
        self._max_attempts = max_attempts

    def handle(
        self,
        cart_key: str,
        delivery: DeliveryMeta,
        customer_id: str | None = None,
    ) -> list[OrderDTO]:
        cart = self._cart_storage.load(cart_key)
        if not cart:
            raise ValidationError("Cart is empty")

        # Checkout charges catalog prices, not whatever the cart remembered
        for item in cart.items:
            product = self._product_repo.get_by_id(item.product_id)
            if product is not None and product.price != item.unit_price:
                logger.info(
                    "cart_item_repriced",
                    product_id=item.product_id,
                    old_price=str(item.unit_price.amount),
                    new_price=str(product.price.amount),
                )
                cart.reprice(item.product_id, product.price)

        priced = self._pricing.price(cart.items, delivery.zone_id, delivery.delivery_type)
        orders = self._composer.compose_orders(priced.groups, delivery, customer_id)

        # Placed farms must leave the stored cart even if a later farm fails
        try:
            for order in orders:
                self._save_with_fresh_number(order)
                cart.clear_farm_items(order.farm_id)
                logger.info(
                    "order_placed",
                    order_number=order.order_number,
                    farm_id=order.farm_id,
                    subtotal=str(order.subtotal.amount),
                    delivery_fee=str(order.delivery_fee.amount),
                    total=str(order.total.amount),
                )
        finally:
            self._cart_storage.save(cart_key, cart)
        return [OrderDTO.from_order(order) for order in orders]

    # --- Internal helpers -----------------------------------------------------

    def _save_with_fresh_number(self, order: Order) -> None:
        for attempt in range(1, self._max_attempts + 1):
            try:
                self._order_repo.save(order)
                return
            except DuplicateOrderNumberError:
                logger.warning(
                    "order_number_collision",
                    order_number=order.order_number,
                    attempt=attempt,
                )
                if attempt == self._max_attempts:
                    raise
                order.order_number = self._next_order_number()
