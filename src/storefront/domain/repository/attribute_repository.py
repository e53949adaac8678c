"""Abstract repository for the Attribute aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.attribute import Attribute


class AttributeRepository(ABC):

    @abstractmethod
    def find_by_id(self, attribute_id: str) -> Attribute | None:
        """Return an attribute with its items, or None."""

    @abstractmethod
    def find_by_product_id(self, product_id: str) -> list[Attribute]:
        """Attributes linked to a product, with their items."""

    @abstractmethod
    def save(self, attribute: Attribute) -> bool:
        """Upsert the attribute and its items by ID."""

    @abstractmethod
    def link_to_product(self, product_id: str, attribute_id: str) -> None:
        """Attach an attribute to a product (idempotent)."""
