"""Application service: Update Cart use case (quantity, remove, clear)."""

from __future__ import annotations

from farmbox.domain.repository.cart_storage import CartStorage


class UpdateCartHandler:

    def __init__(self, cart_storage: CartStorage) -> None:
        self._cart_storage = cart_storage

    def handle(self, cart_key: str, product_id: str, quantity: int) -> None:
        """Set a line's quantity; zero or less removes the line."""
        cart = self._cart_storage.load(cart_key)
        cart.update_quantity(product_id, quantity)
        self._cart_storage.save(cart_key, cart)

    def remove(self, cart_key: str, product_id: str) -> None:
        cart = self._cart_storage.load(cart_key)
        cart.remove_item(product_id)
        self._cart_storage.save(cart_key, cart)

    def clear(self, cart_key: str, farm_id: str | None = None) -> None:
        """Empty the cart, or only one farm's lines."""
        cart = self._cart_storage.load(cart_key)
        if farm_id is None:
            cart.clear()
        else:
            cart.clear_farm_items(farm_id)
        self._cart_storage.save(cart_key, cart)
