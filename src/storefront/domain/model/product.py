"""Product aggregate.

Products are either *simple* (bought as-is) or *configurable* (the
shopper must choose a value for every attribute first). The kind is
decided once, from the presence of attributes, when the product is
created or loaded.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

from storefront.domain.model.attribute import Attribute
from storefront.domain.model.price import Price


class ProductKind(Enum):
    SIMPLE = "simple"
    CONFIGURABLE = "configurable"


_DISPLAY_TYPES = {
    ProductKind.SIMPLE: "Simple Product",
    ProductKind.CONFIGURABLE: "Configurable Product",
}


@dataclass
class Product:
    """A product in the catalog.

    This is an aggregate root: gallery URLs, prices and attributes are
    loaded and saved together with it. ``id`` is supplied from outside
    and never changes.
    """

    id: str
    name: str
    brand: str
    category: str
    in_stock: bool = True
    description: str | None = None
    kind: ProductKind = ProductKind.SIMPLE
    gallery: list[str] = field(default_factory=list)
    prices: list[Price] = field(default_factory=list)
    attributes: list[Attribute] = field(default_factory=list)
    created_at: str | None = None

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def create(data: Mapping[str, Any]) -> Product:
        """Build the right product variant from a catalog payload.

        ``attributes``, ``prices`` and ``gallery`` may hold raw mappings
        (as found in the seed document) or domain objects.
        """
        product_id = str(data["id"])
        attributes = [
            a if isinstance(a, Attribute) else Attribute.from_payload(a)
            for a in data.get("attributes") or []
        ]
        prices = [
            p if isinstance(p, Price) else Price.from_payload(product_id, p)
            for p in data.get("prices") or []
        ]
        return Product(
            id=product_id,
            name=data.get("name", ""),
            brand=data.get("brand", ""),
            category=data.get("category", ""),
            in_stock=bool(data.get("inStock", True)),
            description=data.get("description"),
            kind=kind_for(attributes),
            gallery=list(data.get("gallery") or []),
            prices=prices,
            attributes=attributes,
        )

    # --- Variant behavior -----------------------------------------------------

    @property
    def type(self) -> str:
        return self.kind.value

    def validate(self) -> bool:
        return bool(self.name) and bool(self.brand) and bool(self.category)

    def has_configurable_options(self) -> bool:
        return self.kind is ProductKind.CONFIGURABLE

    def available_options(self) -> dict[str, list[str]]:
        """Attribute name -> selectable labels. Empty for simple products."""
        if self.kind is ProductKind.SIMPLE:
            return {}
        options: dict[str, list[str]] = {}
        for attribute in self.attributes:
            values = [item.display_value or item.value for item in attribute.items]
            options[attribute.name] = [v for v in values if v]
        return options

    def process_for_display(self) -> dict:
        data = self.to_dict()
        data["displayType"] = _DISPLAY_TYPES[self.kind]
        if self.kind is ProductKind.SIMPLE:
            data["canPurchaseDirectly"] = True
            return data

        data["requiresConfiguration"] = True
        data["configurableAttributes"] = [
            {
                "id": attribute.id,
                "name": attribute.name,
                "type": attribute.type.value,
                "required": True,
                "options": [item.to_dict() for item in attribute.items],
            }
            for attribute in self.attributes
        ]
        data["defaultConfiguration"] = {
            attribute.name: attribute.items[0].value
            for attribute in self.attributes
            if attribute.items
        }
        return data

    def price_in(self, currency_label: str) -> Price | None:
        for price in self.prices:
            if price.label == currency_label:
                return price
        return None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "brand": self.brand,
            "description": self.description,
            "category": self.category,
            "inStock": self.in_stock,
            "type": self.type,
            "hasConfigurableOptions": self.has_configurable_options(),
            "gallery": list(self.gallery),
            "prices": [price.to_dict() for price in self.prices],
            "attributes": [attribute.to_dict() for attribute in self.attributes],
            "availableOptions": self.available_options(),
            "createdAt": self.created_at,
        }


def kind_for(attributes: list[Attribute]) -> ProductKind:
    return ProductKind.CONFIGURABLE if attributes else ProductKind.SIMPLE
