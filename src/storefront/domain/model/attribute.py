"""Attribute aggregate: configurable options such as size or color.

An attribute is either ``text`` (free-form values like "XL" or "512G")
or ``swatch`` (hex colors rendered as colored squares). The type is the
discriminant; unknown types are rejected at creation time.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

from storefront.domain.exceptions import InvalidArgumentError, InvalidFormatError

HEX_COLOR_PATTERN = re.compile(r"^#[0-9A-Fa-f]{6}$")


class AttributeKind(Enum):
    TEXT = "text"
    SWATCH = "swatch"


@dataclass
class AttributeItem:
    """A selectable value of an attribute (e.g. "Small" / "S")."""

    id: str
    attribute_id: str
    display_value: str
    value: str

    def validate(self) -> bool:
        return all((self.id, self.attribute_id, self.display_value, self.value))

    @staticmethod
    def from_payload(attribute_id: str, raw: Mapping[str, Any]) -> AttributeItem:
        """Accepts both ``displayValue`` and ``display_value`` keys."""
        display_value = raw.get("displayValue", raw.get("display_value", ""))
        return AttributeItem(
            id=str(raw.get("id", "")),
            attribute_id=attribute_id,
            display_value=str(display_value or ""),
            value=str(raw.get("value", "") or ""),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "attributeId": self.attribute_id,
            "displayValue": self.display_value,
            "value": self.value,
        }


@dataclass
class Attribute:
    """A product attribute with its items.

    Use ``Attribute.create()`` for new attributes: it refuses unknown
    types. Attributes are shared between products through the
    ``product_attributes`` relation.
    """

    id: str
    name: str
    type: AttributeKind
    items: list[AttributeItem] = field(default_factory=list)
    created_at: str | None = None

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def create(attribute_id: str, name: str, type_: str | AttributeKind) -> Attribute:
        if isinstance(type_, AttributeKind):
            return Attribute(id=attribute_id, name=name, type=type_)
        try:
            attribute_kind = AttributeKind(type_)
        except ValueError:
            raise InvalidArgumentError(f"Unknown attribute type: {type_}") from None
        return Attribute(id=attribute_id, name=name, type=attribute_kind)

    @staticmethod
    def from_payload(raw: Mapping[str, Any]) -> Attribute:
        """Build an attribute and its items from the seed document shape."""
        attribute = Attribute.create(
            str(raw.get("id", "")), str(raw.get("name", "")), raw.get("type", "")
        )
        attribute.items = [
            AttributeItem.from_payload(attribute.id, item)
            for item in raw.get("items") or []
        ]
        return attribute

    # --- Variant behavior -----------------------------------------------------

    @property
    def is_swatch(self) -> bool:
        return self.type is AttributeKind.SWATCH

    def validate(self) -> bool:
        return bool(self.id) and bool(self.name)

    def process_value(self, value: str) -> str:
        """Normalize a stored value.

        Swatch values become lowercase ``#rrggbb``; a missing ``#`` is
        added. Raises InvalidFormatError if the result is not a hex color.
        """
        value = value.strip()
        if not self.is_swatch:
            return value
        if value and not value.startswith("#"):
            value = "#" + value
        if not HEX_COLOR_PATTERN.match(value):
            raise InvalidFormatError(f"Invalid hex color format: {value}")
        return value.lower()

    def format_display_value(self, display_value: str) -> str:
        display_value = display_value.strip()
        if self.is_swatch:
            return display_value[:1].upper() + display_value[1:]
        return display_value

    def supports_value(self, value: str) -> bool:
        if not self.is_swatch:
            return bool(value.strip())
        try:
            self.process_value(value)
        except InvalidFormatError:
            return False
        return True

    def input_type(self) -> str:
        return "color" if self.is_swatch else "select"

    def render_for_ui(self) -> dict:
        """Describe how a storefront should render this attribute."""
        if self.is_swatch:
            return {
                "type": "swatch",
                "displayAs": "swatches",
                "allowMultiple": False,
                "validation": {"required": True, "type": "color"},
                "swatches": [
                    {
                        "value": item.value,
                        "displayValue": item.display_value
                        or self.format_display_value(item.value),
                        "hexColor": item.value,
                        "cssStyle": self.css_style(item.value),
                        "available": True,
                    }
                    for item in self.items
                ],
            }
        return {
            "type": "text",
            "displayAs": "buttons",
            "allowMultiple": False,
            "validation": {"required": True, "type": "string"},
            "options": [
                {
                    "value": item.value,
                    "displayValue": item.display_value or item.value,
                    "available": True,
                }
                for item in self.items
            ],
        }

    @staticmethod
    def css_style(color_value: str) -> str:
        return f"background-color: {color_value};"

    def is_size_attribute(self) -> bool:
        return self.name.lower() == "size"

    def is_capacity_attribute(self) -> bool:
        return self.name.lower() == "capacity"

    def selectable_values(self) -> list[str]:
        return [item.value for item in self.items]

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type.value,
            "items": [item.to_dict() for item in self.items],
            "inputType": self.input_type(),
            "createdAt": self.created_at,
        }
