"""Category aggregate.

A category is identified by its name. The reserved name ``all`` denotes
the virtual category that spans the whole catalog; every other name is an
ordinary product category.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

ALL_CATEGORY_NAME = "all"


class CategoryKind(Enum):
    ALL = "all"
    PRODUCT = "product"


@dataclass
class Category:
    """A catalog category.

    ``kind`` is the discriminant chosen by ``Category.create()``; the
    repository rebuilds it from the stored name on every load.
    """

    name: str
    kind: CategoryKind = CategoryKind.PRODUCT
    id: int | None = None
    created_at: str | None = None

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def create(name: str) -> Category:
        """Pick the category variant from its name.

        Any name other than ``all`` is accepted as a product category.
        """
        if name == ALL_CATEGORY_NAME:
            return Category(name=name, kind=CategoryKind.ALL)
        return Category(name=name, kind=CategoryKind.PRODUCT)

    # --- Variant behavior -----------------------------------------------------

    @property
    def type(self) -> str:
        return self.kind.value

    def validate(self) -> bool:
        if self.kind is CategoryKind.ALL:
            return self.name == ALL_CATEGORY_NAME
        return bool(self.name) and self.name != ALL_CATEGORY_NAME

    def display_name(self) -> str:
        if self.kind is CategoryKind.ALL:
            return "All Products"
        return self.name[:1].upper() + self.name[1:]

    def can_contain_products(self) -> bool:
        # Both variants hold products; the virtual one holds all of them.
        return True

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "displayName": self.display_name(),
            "canContainProducts": self.can_contain_products(),
            "createdAt": self.created_at,
        }
