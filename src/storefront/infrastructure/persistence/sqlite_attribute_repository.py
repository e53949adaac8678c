"""SQLite-backed implementation of AttributeRepository."""

from __future__ import annotations

import logging
import sqlite3
from typing import Iterable

from storefront.domain.exceptions import InvalidFormatError
from storefront.domain.model.attribute import Attribute, AttributeItem
from storefront.domain.repository.attribute_repository import AttributeRepository
from storefront.infrastructure.persistence.database import Database

logger = logging.getLogger(__name__)

_JOINED_COLUMNS = """
    a.id, a.name, a.type, a.created_at,
    ai.id AS item_id, ai.display_value, ai.value
"""


class SqliteAttributeRepository(AttributeRepository):

    def __init__(self, db: Database) -> None:
        self._db = db

    # --- AttributeRepository interface ----------------------------------------

    def find_by_id(self, attribute_id: str) -> Attribute | None:
        rows = self._db.fetch_all(
            f"SELECT {_JOINED_COLUMNS} FROM attributes a "
            "LEFT JOIN attribute_items ai ON ai.attribute_id = a.id "
            "WHERE a.id = ? ORDER BY ai.rowid",
            (attribute_id,),
        )
        attributes = self._group(rows)
        return attributes[0] if attributes else None

    def find_by_product_id(self, product_id: str) -> list[Attribute]:
        rows = self._db.fetch_all(
            f"SELECT {_JOINED_COLUMNS} FROM attributes a "
            "INNER JOIN product_attributes pa ON pa.attribute_id = a.id "
            "LEFT JOIN attribute_items ai ON ai.attribute_id = a.id "
            "WHERE pa.product_id = ? ORDER BY a.name, ai.rowid",
            (product_id,),
        )
        return self._group(rows)

    def save(self, attribute: Attribute) -> bool:
        if not attribute.validate():
            logger.warning("Attribute %r does not validate, not saved", attribute.id)
            return False

        with self._db.transaction():
            self._db.execute(
                "INSERT INTO attributes (id, name, type) VALUES (?, ?, ?) "
                "ON CONFLICT(id) DO UPDATE SET name = excluded.name, type = excluded.type",
                (attribute.id, attribute.name, attribute.type.value),
            )
            for item in attribute.items:
                self._save_item(attribute, item)
        return True

    def link_to_product(self, product_id: str, attribute_id: str) -> None:
        self._db.execute(
            "INSERT INTO product_attributes (product_id, attribute_id) VALUES (?, ?) "
            "ON CONFLICT(product_id, attribute_id) DO NOTHING",
            (product_id, attribute_id),
        )

    # --- Helpers --------------------------------------------------------------

    def _save_item(self, attribute: Attribute, item: AttributeItem) -> None:
        if not item.validate():
            logger.warning(
                "Attribute item %r of %r does not validate, skipped",
                item.id, item.attribute_id,
            )
            return
        try:
            item.value = attribute.process_value(item.value)
        except InvalidFormatError as exc:
            logger.warning("Attribute item %r of %r skipped: %s", item.id, item.attribute_id, exc)
            return
        self._db.execute(
            "INSERT INTO attribute_items (id, attribute_id, display_value, value) "
            "VALUES (?, ?, ?, ?) "
            "ON CONFLICT(attribute_id, id) DO UPDATE SET "
            "display_value = excluded.display_value, value = excluded.value",
            (item.id, item.attribute_id, item.display_value, item.value),
        )

    @staticmethod
    def _group(rows: Iterable[sqlite3.Row]) -> list[Attribute]:
        """Fold attribute+item join rows into attributes with item lists."""
        grouped: dict[str, Attribute] = {}
        for row in rows:
            attribute = grouped.get(row["id"])
            if attribute is None:
                attribute = Attribute.create(row["id"], row["name"], row["type"])
                attribute.created_at = row["created_at"]
                grouped[row["id"]] = attribute
            if row["item_id"] is not None:
                attribute.items.append(
                    AttributeItem(
                        id=row["item_id"],
                        attribute_id=row["id"],
                        display_value=row["display_value"],
                        value=row["value"],
                    )
                )
        return list(grouped.values())
