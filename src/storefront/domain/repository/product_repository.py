"""Abstract repository for the Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (SQLite, in-memory) live
elsewhere.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Mapping, Sequence

from storefront.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def find_all(self) -> list[Product]:
        """Return every product, ordered by name."""

    @abstractmethod
    def find_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def find_by_category(self, category: str) -> list[Product]:
        """Products of one category; ``all`` returns the whole catalog."""

    @abstractmethod
    def find_in_stock(self) -> list[Product]:
        """Products currently in stock."""

    @abstractmethod
    def search_by_text(self, query: str) -> list[Product]:
        """Case-insensitive substring match over name, brand and description."""

    @abstractmethod
    def find_with_attributes(
        self, filters: Mapping[str, Sequence[str]] | None = None
    ) -> list[Product]:
        """Products matching every ``attribute name -> allowed values`` filter."""

    @abstractmethod
    def find_configurable_products(self) -> list[Product]:
        """Products linked to at least one attribute."""

    @abstractmethod
    def find_simple_products(self) -> list[Product]:
        """Products without any attribute."""

    @abstractmethod
    def get_count_by_category(self) -> dict[str, int]:
        """Number of products per category name."""

    @abstractmethod
    def save(self, product: Product) -> bool:
        """Upsert by ID with gallery, prices and attribute links."""

    @abstractmethod
    def delete(self, product_id: str) -> bool:
        """Remove a product and everything attached to it."""
