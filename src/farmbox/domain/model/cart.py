"""Shopping cart: line items grouped later by farm at pricing time.

The Cart is an explicit object handed to whoever needs it. Loading and
saving go through a ``CartStorage`` port so the domain never knows where
carts are kept.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from farmbox.domain.exceptions import ValidationError
from farmbox.domain.model.value_objects import DEFAULT_CURRENCY, Money, Quantity


@dataclass(frozen=True)
class LineItem:
    """One product in the cart, with the price seen when it was added."""

    product_id: str
    product_name: str
    farm_id: str
    farm_name: str
    unit_price: Money
    quantity: int
    unit: str = "kg"

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity

    def with_quantity(self, quantity: int) -> LineItem:
        return replace(self, quantity=quantity)

    def with_price(self, unit_price: Money) -> LineItem:
        return replace(self, unit_price=unit_price)


class Cart:
    """Ordered collection of line items, at most one line per product.

    Invariant: every line has ``quantity > 0``. Setting a quantity of zero
    or less removes the line instead of storing it.
    """

    def __init__(self, items: list[LineItem] | None = None) -> None:
        self._items: list[LineItem] = []
        for item in items or []:
            self.add_item(item, item.quantity)

    @property
    def items(self) -> list[LineItem]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    # --- Mutations ------------------------------------------------------------

    def add_item(self, item: LineItem, quantity: int = 1) -> None:
        """Add *quantity* of a product, merging into an existing line.

        A merged line takes the incoming line's price, which is the
        catalog price at the time of this add.
        """
        Quantity(quantity)
        index = self._index_of(item.product_id)
        if index is None:
            self._items.append(item.with_quantity(quantity))
        else:
            existing = self._items[index]
            self._items[index] = replace(
                existing,
                quantity=existing.quantity + quantity,
                unit_price=item.unit_price,
            )

    def remove_item(self, product_id: str) -> None:
        self._items = [i for i in self._items if i.product_id != product_id]

    def update_quantity(self, product_id: str, quantity: int) -> None:
        if quantity <= 0:
            self.remove_item(product_id)
            return
        index = self._index_of(product_id)
        if index is None:
            raise ValidationError(f"Product '{product_id}' is not in the cart")
        self._items[index] = self._items[index].with_quantity(quantity)

    def reprice(self, product_id: str, unit_price: Money) -> None:
        index = self._index_of(product_id)
        if index is None:
            raise ValidationError(f"Product '{product_id}' is not in the cart")
        self._items[index] = self._items[index].with_price(unit_price)

    def clear(self) -> None:
        self._items = []

    def clear_farm_items(self, farm_id: str) -> None:
        self._items = [i for i in self._items if i.farm_id != farm_id]

    # --- Queries --------------------------------------------------------------

    @property
    def subtotal(self) -> Money:
        currency = self._items[0].unit_price.currency if self._items else DEFAULT_CURRENCY
        return Money.sum((item.line_total for item in self._items), currency)

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self._items)

    @property
    def farm_ids(self) -> list[str]:
        """Distinct farm ids in the order each farm first appeared."""
        return list(dict.fromkeys(item.farm_id for item in self._items))

    def items_by_farm(self, farm_id: str) -> list[LineItem]:
        return [item for item in self._items if item.farm_id == farm_id]

    def get(self, product_id: str) -> LineItem | None:
        index = self._index_of(product_id)
        return None if index is None else self._items[index]

    # --- Internal helpers -----------------------------------------------------

    def _index_of(self, product_id: str) -> int | None:
        for index, item in enumerate(self._items):
            if item.product_id == product_id:
                return index
        return None
