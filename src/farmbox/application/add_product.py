"""Application service: Add Product use case (farmer side)."""

from __future__ import annotations

import structlog

from farmbox.domain.exceptions import EntityNotFoundError, ValidationError
from farmbox.domain.model.product import Product
from farmbox.domain.model.value_objects import Money
from farmbox.domain.repository.product_repository import (
    FarmRepository,
    ProductRepository,
)

logger = structlog.get_logger(__name__)


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository, farm_repo: FarmRepository) -> None:
        self._product_repo = product_repo
        self._farm_repo = farm_repo

    def handle(
        self,
        farm_id: str,
        name: str,
        price: str,
        unit: str = "kg",
        description: str = "",
        stock_quantity: int = 0,
    ) -> Product:
        """Add a new product to a farm's catalog."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")

        if self._farm_repo.get_by_id(farm_id) is None:
            raise EntityNotFoundError(f"Farm '{farm_id}' not found")

        for existing in self._product_repo.list_all(farm_id=farm_id):
            if existing.name.lower() == name.strip().lower():
                raise ValidationError(f"Product '{name}' already exists")

        # Auto-assign ID based on existing products
        all_products = self._product_repo.list_all()
        if all_products:
            next_id = str(max(int(p.id) for p in all_products) + 1)
        else:
            next_id = "1"

        money = Money.of(price)
        if money.is_zero:
            raise ValidationError("Product price must be greater than zero")
        if stock_quantity < 0:
            raise ValidationError("Stock quantity cannot be negative")

        product = Product(
            id=next_id,
            farm_id=farm_id,
            name=name.strip(),
            price=money,
            unit=unit,
            description=description,
            stock_quantity=stock_quantity,
        )
        self._product_repo.save(product)
        logger.info("product_added", product_id=product.id, farm_id=farm_id)
        return product
