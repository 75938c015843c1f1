"""Order aggregate: one farm's share of a checkout.

A single checkout that spans several farms produces one Order per farm.
Amounts are frozen when the order is created and never recomputed, even
if product prices or the zone table change afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum

from farmbox.domain.exceptions import InvalidTransitionError, ValidationError
from farmbox.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    PREPARING = "PREPARING"
    OUT_FOR_DELIVERY = "OUT_FOR_DELIVERY"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


class DeliveryType(Enum):
    DELIVERY = "DELIVERY"
    PICKUP = "PICKUP"


_ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.CONFIRMED, OrderStatus.CANCELLED}),
    OrderStatus.CONFIRMED: frozenset({OrderStatus.PREPARING, OrderStatus.CANCELLED}),
    OrderStatus.PREPARING: frozenset({OrderStatus.OUT_FOR_DELIVERY, OrderStatus.CANCELLED}),
    OrderStatus.OUT_FOR_DELIVERY: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


@dataclass(frozen=True)
class OrderLineItem:
    """Price snapshot of a product at order-creation time."""

    product_id: str
    product_name: str
    quantity: Quantity
    unit_price: Money  # locked at order-creation time
    unit: str = "kg"

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass(frozen=True)
class DeliveryMeta:
    """How and when a checkout is handed over to the customer."""

    delivery_type: DeliveryType
    delivery_date: date
    zone_id: str | None = None
    delivery_window: str | None = None
    delivery_address: str | None = None
    customer_notes: str | None = None

    def __post_init__(self) -> None:
        if self.delivery_type is DeliveryType.DELIVERY and (
            not self.delivery_address or not self.zone_id
        ):
            raise ValidationError(
                "Delivery address and zone are required for delivery orders"
            )


@dataclass
class Order:
    """Aggregate root for a farm order.

    Use ``Order.create()`` for new orders; it enforces the price invariants.
    The ``__init__`` stays simple so repositories can reconstitute stored
    orders without re-validating.
    """

    id: int | None
    order_number: str
    farm_id: str
    farm_name: str
    items: tuple[OrderLineItem, ...]
    subtotal: Money
    delivery_fee: Money
    total: Money
    delivery: DeliveryMeta
    customer_id: str | None = None
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    confirmed_at: datetime | None = None
    delivered_at: datetime | None = None
    is_paid: bool = False
    internal_notes: str | None = None

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        order_number: str,
        farm_id: str,
        farm_name: str,
        items: list[OrderLineItem],
        subtotal: Money,
        delivery_fee: Money,
        total: Money,
        delivery: DeliveryMeta,
        customer_id: str | None = None,
    ) -> Order:
        """Create a new PENDING order, enforcing all invariants."""
        if not order_number:
            raise ValidationError("Order number is required")
        if not items:
            raise ValidationError("Order must contain at least one item")

        line_sum = Money.sum((item.line_total for item in items), subtotal.currency)
        if line_sum != subtotal:
            raise ValidationError(
                f"Order subtotal {subtotal} does not match line items {line_sum}"
            )
        if subtotal + delivery_fee != total:
            raise ValidationError(
                f"Order total {total} must equal subtotal {subtotal} "
                f"plus delivery {delivery_fee}"
            )

        return Order(
            id=None,
            order_number=order_number,
            farm_id=farm_id,
            farm_name=farm_name,
            items=tuple(items),
            subtotal=subtotal,
            delivery_fee=delivery_fee,
            total=total,
            delivery=delivery,
            customer_id=customer_id,
        )

    # --- State transitions ----------------------------------------------------

    def transition_to(self, new_status: OrderStatus) -> None:
        """Move along the fulfilment workflow (farmer side)."""
        if new_status not in _ALLOWED_TRANSITIONS[self.status]:
            raise InvalidTransitionError(
                f"Cannot move order {self.order_number} from "
                f"{self.status.value} to {new_status.value}"
            )
        now = datetime.now(timezone.utc)
        if new_status is OrderStatus.CONFIRMED:
            self.confirmed_at = now
        elif new_status is OrderStatus.DELIVERED:
            self.delivered_at = now
            self.is_paid = True
        self.status = new_status

    def cancel_by_customer(self, reason: str | None = None) -> None:
        """Customers may only cancel while the farm has not confirmed."""
        if self.status != OrderStatus.PENDING:
            raise InvalidTransitionError("Only pending orders can be cancelled")
        self.status = OrderStatus.CANCELLED
        self.internal_notes = (
            f"Customer cancelled: {reason}" if reason else "Customer cancelled"
        )

    @property
    def item_count(self) -> int:
        return sum(item.quantity.value for item in self.items)
