"""Application service: Update Product use case (farmer side)."""

from __future__ import annotations

import structlog

from farmbox.domain.exceptions import EntityNotFoundError, ValidationError
from farmbox.domain.model.product import Product, ProductUpdate
from farmbox.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        product_id: str,
        update: ProductUpdate,
        farm_id: str | None = None,
    ) -> Product:
        """Apply an explicit partial update to a product.

        This does NOT affect any existing orders; they captured a
        price snapshot at creation time. When *farm_id* is given the
        product must belong to that farm.
        """
        if update.is_empty:
            raise ValidationError("Nothing to update")

        product = self._product_repo.get_by_id(product_id)
        if product is None or (farm_id is not None and product.farm_id != farm_id):
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        product.apply(update)
        self._product_repo.save(product)
        logger.info("product_updated", product_id=product_id)
        return product
