"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from farmbox.domain.model.order import Order
from farmbox.domain.model.subscription import Subscription
from farmbox.domain.service.pricing_service import PricingResult


@dataclass(frozen=True)
class CartLineDTO:
    product_id: str
    product_name: str
    quantity: int
    unit: str
    unit_price: str  # formatted, e.g. "12.500 TND"
    line_total: str


@dataclass(frozen=True)
class FarmGroupDTO:
    farm_id: str
    farm_name: str
    items: list[CartLineDTO]
    subtotal: str
    delivery_fee: str
    total: str
    amount_to_free_delivery: str


@dataclass(frozen=True)
class CartSummaryDTO:
    """Output: the priced cart as shown on the cart/checkout pages."""

    zone_id: str | None
    groups: list[FarmGroupDTO]
    item_count: int
    subtotal: str
    delivery_fee: str
    total: str
    amount_to_free_delivery: str

    @staticmethod
    def from_pricing(result: PricingResult, item_count: int) -> CartSummaryDTO:
        return CartSummaryDTO(
            zone_id=result.zone_id,
            groups=[
                FarmGroupDTO(
                    farm_id=group.farm_id,
                    farm_name=group.farm_name,
                    items=[
                        CartLineDTO(
                            product_id=item.product_id,
                            product_name=item.product_name,
                            quantity=item.quantity,
                            unit=item.unit,
                            unit_price=str(item.unit_price),
                            line_total=str(item.line_total),
                        )
                        for item in group.items
                    ],
                    subtotal=str(group.subtotal),
                    delivery_fee=str(group.delivery_fee),
                    total=str(group.total),
                    amount_to_free_delivery=str(group.amount_to_free_delivery),
                )
                for group in result.groups
            ],
            item_count=item_count,
            subtotal=str(result.grand_subtotal),
            delivery_fee=str(result.grand_delivery_fee),
            total=str(result.grand_total),
            amount_to_free_delivery=str(result.amount_to_free_delivery),
        )


@dataclass(frozen=True)
class OrderLineItemDTO:
    """Output: a single line item as displayed to the user."""

    product_name: str
    quantity: int
    unit: str
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: int
    order_number: str
    farm_id: str
    farm_name: str
    status: str
    delivery_type: str
    zone_id: str | None
    delivery_date: str
    items: list[OrderLineItemDTO]
    subtotal: str
    delivery_fee: str
    total: str
    created_at: str

    @staticmethod
    def from_order(order: Order) -> OrderDTO:
        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            order_number=order.order_number,
            farm_id=order.farm_id,
            farm_name=order.farm_name,
            status=order.status.value,
            delivery_type=order.delivery.delivery_type.value,
            zone_id=order.delivery.zone_id,
            delivery_date=order.delivery.delivery_date.isoformat(),
            items=[
                OrderLineItemDTO(
                    product_name=item.product_name,
                    quantity=item.quantity.value,
                    unit=item.unit,
                    unit_price=str(item.unit_price),
                    line_total=str(item.line_total),
                )
                for item in order.items
            ],
            subtotal=str(order.subtotal),
            delivery_fee=str(order.delivery_fee),
            total=str(order.total),
            created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
        )


@dataclass(frozen=True)
class SubscriptionDTO:
    id: int
    farm_id: str
    box_size: str
    frequency: str
    zone_id: str
    status: str
    next_delivery_date: str | None
    skip_count: int
    pauses_used: int
    paused_until: str | None

    @staticmethod
    def from_subscription(sub: Subscription) -> SubscriptionDTO:
        return SubscriptionDTO(
            id=sub.id,  # type: ignore[arg-type]
            farm_id=sub.farm_id,
            box_size=sub.box_size.value,
            frequency=sub.frequency.value,
            zone_id=sub.zone_id,
            status=sub.status.value,
            next_delivery_date=(
                sub.next_delivery_date.isoformat() if sub.next_delivery_date else None
            ),
            skip_count=sub.skip_count,
            pauses_used=sub.pauses_used,
            paused_until=sub.paused_until.isoformat() if sub.paused_until else None,
        )
