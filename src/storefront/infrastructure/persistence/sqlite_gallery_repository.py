"""SQLite storage for product gallery images."""

from __future__ import annotations

import logging
from typing import Sequence

from storefront.domain.model.gallery import GalleryImage
from storefront.infrastructure.persistence.database import Database

logger = logging.getLogger(__name__)


class SqliteGalleryRepository:

    def __init__(self, db: Database) -> None:
        self._db = db

    def get_by_product_id(self, product_id: str) -> list[GalleryImage]:
        rows = self._db.fetch_all(
            "SELECT * FROM product_gallery WHERE product_id = ? "
            "ORDER BY sort_order ASC, id ASC",
            (product_id,),
        )
        return [
            GalleryImage(
                id=int(row["id"]),
                product_id=row["product_id"],
                image_url=row["image_url"],
                sort_order=int(row["sort_order"]),
            )
            for row in rows
        ]

    def save(self, image: GalleryImage) -> bool:
        if not image.validate():
            logger.warning("Gallery image %r does not validate, not saved", image.image_url)
            return False

        if image.id is None:
            cur = self._db.execute(
                "INSERT INTO product_gallery (product_id, image_url, sort_order) "
                "VALUES (?, ?, ?)",
                (image.product_id, image.image_url, image.sort_order),
            )
            image.id = cur.lastrowid
        else:
            self._db.execute(
                "UPDATE product_gallery SET image_url = ?, sort_order = ? WHERE id = ?",
                (image.image_url, image.sort_order, image.id),
            )
        return True

    def replace_for_product(self, product_id: str, urls: Sequence[str]) -> int:
        """Store *urls* as the product's gallery, in list order. Returns count saved."""
        self.delete_for_product(product_id)
        images = [
            GalleryImage(product_id=product_id, image_url=url, sort_order=position)
            for position, url in enumerate(urls)
        ]
        return sum(1 for image in images if self.save(image))

    def delete(self, image_id: int) -> bool:
        cur = self._db.execute("DELETE FROM product_gallery WHERE id = ?", (image_id,))
        return cur.rowcount > 0

    def delete_for_product(self, product_id: str) -> None:
        self._db.execute("DELETE FROM product_gallery WHERE product_id = ?", (product_id,))
