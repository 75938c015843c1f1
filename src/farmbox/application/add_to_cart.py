"""Application service: Add To Cart use case.

Resolves the product and its farm from the catalog so the cart line
carries the current price and the farm it will be ordered from.
"""

from __future__ import annotations

import structlog

from farmbox.domain.exceptions import EntityNotFoundError, ValidationError
from farmbox.domain.model.cart import LineItem
from farmbox.domain.repository.cart_storage import CartStorage
from farmbox.domain.repository.product_repository import (
    FarmRepository,
    ProductRepository,
)

logger = structlog.get_logger(__name__)


class AddToCartHandler:

    def __init__(
        self,
        cart_storage: CartStorage,
        product_repo: ProductRepository,
        farm_repo: FarmRepository,
    ) -> None:
        self._cart_storage = cart_storage
        self._product_repo = product_repo
        self._farm_repo = farm_repo

    def handle(self, cart_key: str, product_id: str, quantity: int = 1) -> None:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        if not product.is_available:
            raise ValidationError(f"Product {product.name} is not available")

        farm = self._farm_repo.get_by_id(product.farm_id)
        if farm is None or not farm.is_active:
            raise ValidationError(f"Farm for {product.name} is not found or inactive")

        cart = self._cart_storage.load(cart_key)
        cart.add_item(
            LineItem(
                product_id=product.id,
                product_name=product.name,
                farm_id=farm.id,
                farm_name=farm.name,
                unit_price=product.price,
                quantity=quantity,
                unit=product.unit,
            ),
            quantity,
        )
        self._cart_storage.save(cart_key, cart)
        logger.info("cart_item_added", cart=cart_key, product_id=product_id, quantity=quantity)
