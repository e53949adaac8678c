"""SQLite-backed implementation of ProductRepository.

A product is stored across several tables: the ``products`` row, its
gallery, its prices and its links to shared attributes. Loading a product
reads all of them; the simple/configurable kind follows from the linked
attributes that were just loaded.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Mapping, Sequence

from storefront.domain.model.category import ALL_CATEGORY_NAME
from storefront.domain.model.product import Product
from storefront.domain.repository.product_repository import ProductRepository
from storefront.infrastructure.persistence.database import Database, Params
from storefront.infrastructure.persistence.sqlite_attribute_repository import (
    SqliteAttributeRepository,
)
from storefront.infrastructure.persistence.sqlite_gallery_repository import (
    SqliteGalleryRepository,
)
from storefront.infrastructure.persistence.sqlite_price_repository import (
    SqlitePriceRepository,
)

logger = logging.getLogger(__name__)

_ATTRIBUTE_FILTER = (
    "EXISTS (SELECT 1 FROM product_attributes fpa "
    "JOIN attributes fa ON fa.id = fpa.attribute_id "
    "JOIN attribute_items fai ON fai.attribute_id = fa.id "
    "WHERE fpa.product_id = p.id AND fa.name = ?{values})"
)


class SqliteProductRepository(ProductRepository):

    def __init__(
        self,
        db: Database,
        attributes: SqliteAttributeRepository | None = None,
        gallery: SqliteGalleryRepository | None = None,
        prices: SqlitePriceRepository | None = None,
    ) -> None:
        self._db = db
        self._attributes = attributes or SqliteAttributeRepository(db)
        self._gallery = gallery or SqliteGalleryRepository(db)
        self._prices = prices or SqlitePriceRepository(db)

    # --- ProductRepository interface ------------------------------------------

    def find_all(self) -> list[Product]:
        return self._find("SELECT * FROM products p")

    def find_by_id(self, product_id: str) -> Product | None:
        row = self._db.fetch_one("SELECT * FROM products WHERE id = ?", (product_id,))
        return None if row is None else self._to_domain(row)

    def find_by_category(self, category: str) -> list[Product]:
        if category == ALL_CATEGORY_NAME:
            return self.find_all()
        return self._find("SELECT * FROM products p WHERE p.category = ?", (category,))

    def find_in_stock(self) -> list[Product]:
        return self._find("SELECT * FROM products p WHERE p.in_stock = 1")

    def search_by_text(self, query: str) -> list[Product]:
        # casefold() is registered by Database; it folds non-ASCII letters too.
        term = query.casefold()
        return self._find(
            "SELECT * FROM products p "
            "WHERE instr(casefold(p.name), ?) > 0 "
            "OR instr(casefold(p.brand), ?) > 0 "
            "OR instr(casefold(p.description), ?) > 0",
            (term, term, term),
        )

    def find_with_attributes(
        self, filters: Mapping[str, Sequence[str]] | None = None
    ) -> list[Product]:
        conditions: list[str] = []
        params: list[str] = []
        for name, values in (filters or {}).items():
            values = list(values)
            in_list = ""
            if values:
                in_list = f" AND fai.value IN ({', '.join('?' * len(values))})"
            conditions.append(_ATTRIBUTE_FILTER.format(values=in_list))
            params.extend([name, *values])

        sql = (
            "SELECT DISTINCT p.* FROM products p "
            "INNER JOIN product_attributes pa ON pa.product_id = p.id"
        )
        if conditions:
            sql += " WHERE " + " AND ".join(conditions)
        return self._find(sql, params)

    def find_configurable_products(self) -> list[Product]:
        products = self._find(
            "SELECT DISTINCT p.* FROM products p "
            "INNER JOIN product_attributes pa ON pa.product_id = p.id"
        )
        return [p for p in products if p.has_configurable_options()]

    def find_simple_products(self) -> list[Product]:
        products = self._find(
            "SELECT p.* FROM products p "
            "LEFT JOIN product_attributes pa ON pa.product_id = p.id "
            "WHERE pa.product_id IS NULL"
        )
        return [p for p in products if not p.has_configurable_options()]

    def get_count_by_category(self) -> dict[str, int]:
        rows = self._db.fetch_all(
            "SELECT category, COUNT(*) AS count FROM products GROUP BY category"
        )
        return {row["category"]: int(row["count"]) for row in rows}

    def save(self, product: Product) -> bool:
        if not product.validate():
            logger.warning("Product %r does not validate, not saved", product.id)
            return False

        try:
            with self._db.transaction():
                self._write(product)
        except sqlite3.Error as exc:
            logger.error("Could not save product %r: %s", product.id, exc)
            return False
        return True

    def _write(self, product: Product) -> None:
        self._db.execute(
            "INSERT INTO products (id, name, brand, description, category, in_stock) "
            "VALUES (?, ?, ?, ?, ?, ?) "
            "ON CONFLICT(id) DO UPDATE SET "
            "name = excluded.name, brand = excluded.brand, "
            "description = excluded.description, category = excluded.category, "
            "in_stock = excluded.in_stock",
            (
                product.id,
                product.name,
                product.brand,
                product.description,
                product.category,
                1 if product.in_stock else 0,
            ),
        )
        self._gallery.replace_for_product(product.id, product.gallery)

        for price in product.prices:
            price.product_id = product.id
        self._prices.replace_for_product(product.id, product.prices)

        self._db.execute(
            "DELETE FROM product_attributes WHERE product_id = ?", (product.id,)
        )
        for attribute in product.attributes:
            if self._attributes.save(attribute):
                self._attributes.link_to_product(product.id, attribute.id)

    def delete(self, product_id: str) -> bool:
        try:
            with self._db.transaction():
                self._gallery.delete_for_product(product_id)
                self._prices.delete_for_product(product_id)
                self._db.execute(
                    "DELETE FROM product_attributes WHERE product_id = ?", (product_id,)
                )
                cur = self._db.execute("DELETE FROM products WHERE id = ?", (product_id,))
        except sqlite3.Error as exc:
            logger.error("Could not delete product %r: %s", product_id, exc)
            return False
        return cur.rowcount > 0

    # --- Hydration ------------------------------------------------------------

    def _find(self, sql: str, params: Params = ()) -> list[Product]:
        rows = self._db.fetch_all(f"{sql} ORDER BY p.name COLLATE NOCASE ASC", params)
        return [self._to_domain(row) for row in rows]

    def _to_domain(self, row: sqlite3.Row) -> Product:
        product_id = row["id"]
        product = Product.create(
            {
                "id": product_id,
                "name": row["name"],
                "brand": row["brand"],
                "category": row["category"],
                "inStock": bool(row["in_stock"]),
                "description": row["description"],
                "gallery": [
                    image.image_url
                    for image in self._gallery.get_by_product_id(product_id)
                ],
                "prices": self._prices.get_by_product_id(product_id),
                "attributes": self._attributes.find_by_product_id(product_id),
            }
        )
        product.created_at = row["created_at"]
        return product
