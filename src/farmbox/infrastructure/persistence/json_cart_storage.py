"""JSON-file-backed CartStorage: one document holding every cart by key."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from farmbox.domain.model.cart import Cart, LineItem
from farmbox.domain.model.value_objects import DEFAULT_CURRENCY, Money
from farmbox.domain.repository.cart_storage import CartStorage
from farmbox.infrastructure.persistence.json_file import JsonFile


class JsonCartStorage(CartStorage):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path, empty={})

    def load(self, key: str) -> Cart:
        raw_items = self._file.load().get(key, [])
        return Cart(
            [
                LineItem(
                    product_id=raw["product_id"],
                    product_name=raw["product_name"],
                    farm_id=raw["farm_id"],
                    farm_name=raw["farm_name"],
                    unit_price=Money(
                        Decimal(raw["unit_price"]), raw.get("currency", DEFAULT_CURRENCY)
                    ),
                    quantity=raw["quantity"],
                    unit=raw.get("unit", "kg"),
                )
                for raw in raw_items
            ]
        )

    def save(self, key: str, cart: Cart) -> None:
        carts = self._file.load()
        if cart:
            carts[key] = [
                {
                    "product_id": item.product_id,
                    "product_name": item.product_name,
                    "farm_id": item.farm_id,
                    "farm_name": item.farm_name,
                    "unit_price": str(item.unit_price.amount),
                    "currency": item.unit_price.currency,
                    "quantity": item.quantity,
                    "unit": item.unit,
                }
                for item in cart.items
            ]
        else:
            carts.pop(key, None)
        self._file.persist(carts)
