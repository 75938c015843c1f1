"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from pathlib import Path

from farmbox.domain.exceptions import DuplicateOrderNumberError
from farmbox.domain.model.order import (
    DeliveryMeta,
    DeliveryType,
    Order,
    OrderLineItem,
    OrderStatus,
)
from farmbox.domain.model.value_objects import DEFAULT_CURRENCY, Money, Quantity
from farmbox.domain.repository.order_repository import OrderRepository
from farmbox.infrastructure.persistence.json_file import JsonFile


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- OrderRepository interface --------------------------------------------

    def next_id(self) -> int:
        orders = self._file.load()
        if not orders:
            return 1
        return max(o["id"] for o in orders) + 1

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._file.load():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def get_by_number(self, order_number: str) -> Order | None:
        for raw in self._file.load():
            if raw["order_number"] == order_number:
                return self._to_domain(raw)
        return None

    def list_all(
        self,
        customer_id: str | None = None,
        farm_id: str | None = None,
        status: OrderStatus | None = None,
    ) -> list[Order]:
        orders = [
            self._to_domain(raw)
            for raw in self._file.load()
            if (customer_id is None or raw.get("customer_id") == customer_id)
            and (farm_id is None or raw["farm_id"] == farm_id)
            and (status is None or raw["status"] == status.value)
        ]
        return sorted(orders, key=lambda o: o.created_at, reverse=True)

    def save(self, order: Order) -> None:
        orders = self._file.load()

        if order.id is None:
            # Order numbers are unique across the store
            if any(raw["order_number"] == order.order_number for raw in orders):
                raise DuplicateOrderNumberError(order.order_number)
            order.id = self.next_id()

        # Upsert: replace if exists, otherwise append
        replaced = False
        for i, raw in enumerate(orders):
            if raw["id"] == order.id:
                orders[i] = self._to_raw(order)
                replaced = True
                break
        if not replaced:
            orders.append(self._to_raw(order))

        self._file.persist(orders)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        delivery = order.delivery
        return {
            "id": order.id,
            "order_number": order.order_number,
            "farm_id": order.farm_id,
            "farm_name": order.farm_name,
            "customer_id": order.customer_id,
            "status": order.status.value,
            "currency": order.total.currency,
            "subtotal": str(order.subtotal.amount),
            "delivery_fee": str(order.delivery_fee.amount),
            "total": str(order.total.amount),
            "delivery": {
                "type": delivery.delivery_type.value,
                "date": delivery.delivery_date.isoformat(),
                "zone_id": delivery.zone_id,
                "window": delivery.delivery_window,
                "address": delivery.delivery_address,
                "notes": delivery.customer_notes,
            },
            "created_at": order.created_at.isoformat(),
            "confirmed_at": order.confirmed_at.isoformat() if order.confirmed_at else None,
            "delivered_at": order.delivered_at.isoformat() if order.delivered_at else None,
            "is_paid": order.is_paid,
            "internal_notes": order.internal_notes,
            "items": [
                {
                    "product_id": item.product_id,
                    "product_name": item.product_name,
                    "quantity": item.quantity.value,
                    "unit": item.unit,
                    "unit_price": str(item.unit_price.amount),
                }
                for item in order.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        currency = raw.get("currency", DEFAULT_CURRENCY)
        items = tuple(
            OrderLineItem(
                product_id=i["product_id"],
                product_name=i["product_name"],
                quantity=Quantity(i["quantity"]),
                unit_price=Money(Decimal(i["unit_price"]), currency),
                unit=i.get("unit", "kg"),
            )
            for i in raw["items"]
        )
        d = raw["delivery"]
        return Order(
            id=raw["id"],
            order_number=raw["order_number"],
            farm_id=raw["farm_id"],
            farm_name=raw["farm_name"],
            items=items,
            subtotal=Money(Decimal(raw["subtotal"]), currency),
            delivery_fee=Money(Decimal(raw["delivery_fee"]), currency),
            total=Money(Decimal(raw["total"]), currency),
            delivery=DeliveryMeta(
                delivery_type=DeliveryType(d["type"]),
                delivery_date=date.fromisoformat(d["date"]),
                zone_id=d.get("zone_id"),
                delivery_window=d.get("window"),
                delivery_address=d.get("address"),
                customer_notes=d.get("notes"),
            ),
            customer_id=raw.get("customer_id"),
            status=OrderStatus(raw["status"]),
            created_at=datetime.fromisoformat(raw["created_at"]),
            confirmed_at=_parse_dt(raw.get("confirmed_at")),
            delivered_at=_parse_dt(raw.get("delivered_at")),
            is_paid=raw.get("is_paid", False),
            internal_notes=raw.get("internal_notes"),
        )


def _parse_dt(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None
