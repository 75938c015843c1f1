"""Domain service: Order Composition.

Turns the priced, farm-partitioned cart into one PENDING order per farm.
This is the point where prices become immutable: every order keeps its
own copy of unit prices and amounts, and nothing downstream recomputes
them from live product data.

Two phases: resolve and validate every item first, then build the
orders, so a checkout never ends up half-composed.
"""

from __future__ import annotations

from typing import Iterable

import structlog

from farmbox.domain.exceptions import UnavailableItemError
from farmbox.domain.model.order import DeliveryMeta, Order, OrderLineItem
from farmbox.domain.model.product import Farm
from farmbox.domain.model.value_objects import Quantity
from farmbox.domain.repository.product_repository import (
    FarmRepository,
    ProductRepository,
)
from farmbox.domain.service.order_numbers import (
    OrderNumberGenerator,
    generate_order_number,
)
from farmbox.domain.service.pricing_service import PricedGroup

logger = structlog.get_logger(__name__)


class OrderComposer:

    def __init__(
        self,
        product_repo: ProductRepository,
        farm_repo: FarmRepository,
        order_number_generator: OrderNumberGenerator = generate_order_number,
    ) -> None:
        self._product_repo = product_repo
        self._farm_repo = farm_repo
        self._next_order_number = order_number_generator

    def compose_orders(
        self,
        priced_groups: Iterable[PricedGroup],
        delivery: DeliveryMeta,
        customer_id: str | None = None,
    ) -> list[Order]:
        """Build one order per non-empty farm group.

        Raises UnavailableItemError for the first product that can no
        longer be ordered. Items are never dropped silently; the caller
        removes the item and prices the cart again.
        """
        groups = [group for group in priced_groups if group.items]

        # Phase 1: resolve every farm and product before building anything
        farms: dict[str, Farm] = {}
        for group in groups:
            farms[group.farm_id] = self._resolve_group(group)

        # Phase 2: build the orders
        orders: list[Order] = []
        for group in groups:
            order = Order.create(
                order_number=self._next_order_number(),
                farm_id=group.farm_id,
                farm_name=farms[group.farm_id].name,
                items=[
                    OrderLineItem(
                        product_id=item.product_id,
                        product_name=item.product_name,
                        quantity=Quantity(item.quantity),
                        unit_price=item.unit_price,  # <-- price snapshot
                        unit=item.unit,
                    )
                    for item in group.items
                ],
                subtotal=group.subtotal,
                delivery_fee=group.delivery_fee,
                total=group.total,
                delivery=delivery,
                customer_id=customer_id,
            )
            orders.append(order)
            logger.debug(
                "order_composed",
                order_number=order.order_number,
                farm_id=order.farm_id,
                total=str(order.total.amount),
            )
        return orders

    # --- Internal helpers -----------------------------------------------------

    def _resolve_group(self, group: PricedGroup) -> Farm:
        farm = self._farm_repo.get_by_id(group.farm_id)
        if farm is None or not farm.is_active:
            raise UnavailableItemError(
                group.items[0].product_id,
                f"farm '{group.farm_id}' is not found or inactive",
            )

        for item in group.items:
            product = self._product_repo.get_by_id(item.product_id)
            if product is None:
                raise UnavailableItemError(item.product_id, "product no longer exists")
            if product.farm_id != group.farm_id:
                raise UnavailableItemError(
                    item.product_id,
                    f"{product.name} does not belong to farm '{group.farm_id}'",
                )
            if not product.is_available:
                raise UnavailableItemError(
                    item.product_id, f"{product.name} is not available"
                )
        return farm
