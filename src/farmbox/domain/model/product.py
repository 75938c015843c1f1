"""Catalog aggregates: Farm and Product.

Products live independently of carts and orders. Farmers change prices,
toggle availability and rename items; none of that reaches orders that
were already placed because orders capture a price snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass, fields

from farmbox.domain.exceptions import ValidationError
from farmbox.domain.model.value_objects import UNSET, Money, Unset


@dataclass
class Farm:
    """A seller. Every product and every order belongs to exactly one farm."""

    id: str
    name: str
    slug: str = ""
    is_active: bool = True


@dataclass(frozen=True)
class ProductUpdate:
    """Explicit partial update for a product.

    Every field defaults to ``UNSET``. Only fields that were set are
    applied, so clearing ``description`` to ``""`` is a real change and
    not mistaken for "no change".
    """

    name: str | Unset = UNSET
    price: Money | Unset = UNSET
    unit: str | Unset = UNSET
    description: str | Unset = UNSET
    is_available: bool | Unset = UNSET
    stock_quantity: int | Unset = UNSET

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is UNSET for f in fields(self))


@dataclass
class Product:
    """A product in a farm's catalog."""

    id: str
    farm_id: str
    name: str
    price: Money
    unit: str = "kg"
    is_available: bool = True
    description: str = ""
    stock_quantity: int = 0

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        This does NOT affect any existing orders because orders
        capture a price snapshot at creation time.
        """
        if new_price.amount <= 0:
            raise ValidationError("Product price must be greater than zero")
        self.price = new_price

    def apply(self, update: ProductUpdate) -> None:
        """Apply every field that *update* explicitly sets."""
        if update.name is not UNSET:
            if not update.name or not update.name.strip():
                raise ValidationError("Product name cannot be empty")
            self.name = update.name.strip()
        if update.price is not UNSET:
            self.update_price(update.price)
        if update.unit is not UNSET:
            if not update.unit or not update.unit.strip():
                raise ValidationError("Product unit cannot be empty")
            self.unit = update.unit.strip()
        if update.description is not UNSET:
            self.description = update.description
        if update.is_available is not UNSET:
            self.is_available = update.is_available
        if update.stock_quantity is not UNSET:
            if update.stock_quantity < 0:
                raise ValidationError("Stock quantity cannot be negative")
            self.stock_quantity = update.stock_quantity
