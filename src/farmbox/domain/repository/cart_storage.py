"""Key/value port for persisting carts between requests."""

from __future__ import annotations

from abc import ABC, abstractmethod

from farmbox.domain.model.cart import Cart


class CartStorage(ABC):

    @abstractmethod
    def load(self, key: str) -> Cart:
        """Return the cart stored under *key*, or an empty cart."""

    @abstractmethod
    def save(self, key: str, cart: Cart) -> None:
        """Store *cart* under *key*, replacing what was there."""
