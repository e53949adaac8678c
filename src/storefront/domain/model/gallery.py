"""Product gallery images, ordered by ``sort_order``."""

from __future__ import annotations

from dataclasses import dataclass
from posixpath import basename, splitext
from urllib.parse import urlparse

ALLOWED_IMAGE_EXTENSIONS = frozenset({"jpg", "jpeg", "png", "gif", "webp"})


def _is_absolute_url(url: str) -> bool:
    parsed = urlparse(url)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


@dataclass
class GalleryImage:
    """One image of a product; ``sort_order`` 0 is the primary image."""

    product_id: str
    image_url: str
    sort_order: int = 0
    id: int | None = None

    def validate(self) -> bool:
        return (
            bool(self.product_id)
            and bool(self.image_url)
            and _is_absolute_url(self.image_url)
            and self.sort_order >= 0
        )

    def is_primary_image(self) -> bool:
        return self.sort_order == 0

    @property
    def filename(self) -> str:
        return basename(urlparse(self.image_url).path)

    @property
    def extension(self) -> str:
        return splitext(self.filename)[1].lstrip(".")

    def is_valid_image_url(self) -> bool:
        if not _is_absolute_url(self.image_url):
            return False
        return self.extension.lower() in ALLOWED_IMAGE_EXTENSIONS

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "productId": self.product_id,
            "imageUrl": self.image_url,
            "sortOrder": self.sort_order,
            "isPrimary": self.is_primary_image(),
            "extension": self.extension,
            "filename": self.filename,
        }
