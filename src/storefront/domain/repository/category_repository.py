"""Abstract repository for the Category aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.category import Category


class CategoryRepository(ABC):

    @abstractmethod
    def find_all(self) -> list[Category]:
        """Return every category, alphabetically."""

    @abstractmethod
    def find_by_id(self, category_id: int) -> Category | None:
        """Return a category by its ID, or None if not found."""

    @abstractmethod
    def find_by_name(self, name: str) -> Category | None:
        """Return a category by its unique name, or None if not found."""

    @abstractmethod
    def find_product_categories(self) -> list[Category]:
        """Return every category except the virtual ``all`` one."""

    @abstractmethod
    def exists(self, name: str) -> bool:
        """True if a category with this name is stored."""

    @abstractmethod
    def save(self, category: Category) -> bool:
        """Upsert by name. False if the category does not validate."""

    @abstractmethod
    def delete(self, category_id: int) -> bool:
        """Remove a category. False if nothing was deleted."""
