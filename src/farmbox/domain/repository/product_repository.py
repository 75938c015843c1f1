"""Abstract repositories for the catalog aggregates.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, in-memory) live in the
infrastructure layer and in the test fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from farmbox.domain.model.product import Farm, Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def list_all(self, farm_id: str | None = None) -> list[Product]:
        """Return every product, optionally only one farm's."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product."""


class FarmRepository(ABC):

    @abstractmethod
    def get_by_id(self, farm_id: str) -> Farm | None:
        """Return a farm by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Farm]:
        """Return every farm."""

    @abstractmethod
    def save(self, farm: Farm) -> None:
        """Persist a new or updated farm."""
