"""JSON-file-backed implementations of the catalog repositories."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from farmbox.domain.model.product import Farm, Product
from farmbox.domain.model.value_objects import DEFAULT_CURRENCY, Money
from farmbox.domain.repository.product_repository import (
    FarmRepository,
    ProductRepository,
)
from farmbox.infrastructure.persistence.json_file import JsonFile


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        return self._load().get(product_id)

    def list_all(self, farm_id: str | None = None) -> list[Product]:
        products = self._load().values()
        if farm_id is None:
            return list(products)
        return [p for p in products if p.farm_id == farm_id]

    def save(self, product: Product) -> None:
        products = self._load()
        products[product.id] = product
        self._persist(products)

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> dict[str, Product]:
        return {
            item["id"]: Product(
                id=item["id"],
                farm_id=item["farm_id"],
                name=item["name"],
                price=Money(Decimal(item["price"]), item.get("currency", DEFAULT_CURRENCY)),
                unit=item.get("unit", "kg"),
                is_available=item.get("is_available", True),
                description=item.get("description", ""),
                stock_quantity=item.get("stock_quantity", 0),
            )
            for item in self._file.load()
        }

    def _persist(self, products: dict[str, Product]) -> None:
        self._file.persist(
            [
                {
                    "id": p.id,
                    "farm_id": p.farm_id,
                    "name": p.name,
                    "price": str(p.price.amount),
                    "currency": p.price.currency,
                    "unit": p.unit,
                    "is_available": p.is_available,
                    "description": p.description,
                    "stock_quantity": p.stock_quantity,
                }
                for p in products.values()
            ]
        )


class JsonFarmRepository(FarmRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    def get_by_id(self, farm_id: str) -> Farm | None:
        return self._load().get(farm_id)

    def list_all(self) -> list[Farm]:
        return list(self._load().values())

    def save(self, farm: Farm) -> None:
        farms = self._load()
        farms[farm.id] = farm
        self._file.persist(
            [
                {"id": f.id, "name": f.name, "slug": f.slug, "is_active": f.is_active}
                for f in farms.values()
            ]
        )

    def _load(self) -> dict[str, Farm]:
        return {
            item["id"]: Farm(
                id=item["id"],
                name=item["name"],
                slug=item.get("slug", ""),
                is_active=item.get("is_active", True),
            )
            for item in self._file.load()
        }
