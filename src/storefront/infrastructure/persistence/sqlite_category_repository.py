"""SQLite-backed implementation of CategoryRepository."""

from __future__ import annotations

import logging
import sqlite3

from storefront.domain.model.category import ALL_CATEGORY_NAME, Category, CategoryKind
from storefront.domain.repository.category_repository import CategoryRepository
from storefront.infrastructure.persistence.database import Database

logger = logging.getLogger(__name__)


class SqliteCategoryRepository(CategoryRepository):

    def __init__(self, db: Database) -> None:
        self._db = db

    # --- CategoryRepository interface -----------------------------------------

    def find_all(self) -> list[Category]:
        rows = self._db.fetch_all("SELECT * FROM categories ORDER BY name ASC")
        return [self._to_domain(row) for row in rows]

    def find_by_id(self, category_id: int) -> Category | None:
        row = self._db.fetch_one("SELECT * FROM categories WHERE id = ?", (category_id,))
        return None if row is None else self._to_domain(row)

    def find_by_name(self, name: str) -> Category | None:
        row = self._db.fetch_one("SELECT * FROM categories WHERE name = ?", (name,))
        return None if row is None else self._to_domain(row)

    def find_product_categories(self) -> list[Category]:
        rows = self._db.fetch_all(
            "SELECT * FROM categories WHERE name != ? ORDER BY name ASC",
            (ALL_CATEGORY_NAME,),
        )
        categories = [self._to_domain(row) for row in rows]
        return [c for c in categories if c.kind is CategoryKind.PRODUCT]

    def exists(self, name: str) -> bool:
        count = self._db.scalar("SELECT COUNT(*) FROM categories WHERE name = ?", (name,))
        return count > 0

    def save(self, category: Category) -> bool:
        if not category.validate():
            logger.warning("Category %r does not validate, not saved", category.name)
            return False

        try:
            if category.id is None:
                self._db.execute(
                    "INSERT INTO categories (name) VALUES (?) "
                    "ON CONFLICT(name) DO NOTHING",
                    (category.name,),
                )
                row = self._db.fetch_one(
                    "SELECT id, created_at FROM categories WHERE name = ?",
                    (category.name,),
                )
                category.id = int(row["id"])
                category.created_at = row["created_at"]
            else:
                self._db.execute(
                    "UPDATE categories SET name = ? WHERE id = ?",
                    (category.name, category.id),
                )
        except sqlite3.IntegrityError as exc:
            logger.error("Could not save category %r: %s", category.name, exc)
            return False
        return True

    def delete(self, category_id: int) -> bool:
        cur = self._db.execute("DELETE FROM categories WHERE id = ?", (category_id,))
        return cur.rowcount > 0

    # --- Hydration ------------------------------------------------------------

    @staticmethod
    def _to_domain(row: sqlite3.Row) -> Category:
        category = Category.create(row["name"])
        category.id = int(row["id"])
        category.created_at = row["created_at"]
        return category
