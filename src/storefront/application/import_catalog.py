"""Application service: Import Catalog use case.

Loads the seed document (``{"data": {"categories": [...], "products":
[...]}}``) into the repositories. The whole import runs inside one
transaction: any unexpected failure rolls everything back. Entities that
merely fail validation are logged and counted, not fatal.
"""

from __future__ import annotations

import json
import logging
from contextlib import AbstractContextManager, nullcontext
from pathlib import Path
from typing import Any, Callable, Mapping

from storefront.application.dto import ImportReport
from storefront.domain.exceptions import (
    DomainException,
    InvalidArgumentError,
    ValidationError,
)
from storefront.domain.model.attribute import Attribute
from storefront.domain.model.category import Category
from storefront.domain.model.product import Product
from storefront.domain.repository.category_repository import CategoryRepository
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)

REQUIRED_SECTIONS = ("categories", "products")


class CatalogImporter:

    def __init__(
        self,
        category_repo: CategoryRepository,
        product_repo: ProductRepository,
        transaction: Callable[[], AbstractContextManager] = nullcontext,
        force: bool = False,
    ) -> None:
        self._category_repo = category_repo
        self._product_repo = product_repo
        self._transaction = transaction
        self._force = force

    # --- Loading --------------------------------------------------------------

    @staticmethod
    def load(path: Path) -> dict:
        """Read and structurally check a seed document."""
        try:
            document = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            raise ValidationError(f"Data file not found: {path}") from None
        except json.JSONDecodeError as exc:
            raise ValidationError(f"Invalid JSON data: {exc}") from exc
        CatalogImporter.check_structure(document)
        return document

    @staticmethod
    def check_structure(document: Any) -> None:
        data = document.get("data") if isinstance(document, Mapping) else None
        for section in REQUIRED_SECTIONS:
            if not isinstance(data, Mapping) or section not in data:
                raise ValidationError(f"Missing required data section: {section}")

    def is_import_needed(self) -> bool:
        return not self._category_repo.find_all() and not self._product_repo.find_all()

    # --- Import ---------------------------------------------------------------

    def handle(self, document: Mapping[str, Any]) -> ImportReport:
        self.check_structure(document)
        data = document["data"]
        report = ImportReport()

        try:
            with self._transaction():
                for raw in data["categories"]:
                    self._import_category(raw, report)
                logger.info("Processed %d categories", len(data["categories"]))

                logger.info("Found %d products to import", len(data["products"]))
                for raw in data["products"]:
                    self._import_product(raw, report)
                logger.info("Processed %d products", len(data["products"]))
        except Exception:
            logger.exception("Import failed, all changes rolled back")
            raise

        logger.info(
            "Import finished: %d imported, %d skipped, %d failed",
            report.imported, report.skipped, report.failed,
        )
        return report

    def _import_category(self, raw: Mapping[str, Any], report: ImportReport) -> None:
        name = raw.get("name", "")
        if not self._force and self._category_repo.exists(name):
            self._note(report, f"Category '{name}' already exists, skipping")
            report.skipped += 1
            return

        category = Category.create(name)
        if self._category_repo.save(category):
            report.imported += 1
            self._note(report, f"Category '{category.name}' ({category.type})")
        else:
            report.failed += 1
            self._fail(report, f"Failed to import category: {name!r}")

    def _import_product(self, raw: Mapping[str, Any], report: ImportReport) -> None:
        name = raw.get("name", "")
        if not self._force and self._product_repo.find_by_id(str(raw.get("id"))) is not None:
            self._note(report, f"Product '{name}' already exists, skipping")
            report.skipped += 1
            return

        attributes = self._build_attributes(raw.get("attributes") or [], report)
        try:
            product = Product.create({**raw, "attributes": attributes})
        except (KeyError, DomainException) as exc:
            report.failed += 1
            self._fail(report, f"Failed to import product {name!r}: {exc}")
            return

        if self._product_repo.save(product):
            report.imported += 1
            self._note(report, f"Product '{product.name}' ({product.type})")
        else:
            report.failed += 1
            self._fail(report, f"Failed to import product: {name!r}")

    def _build_attributes(self, raws: list, report: ImportReport) -> list[Attribute]:
        attributes: list[Attribute] = []
        for raw in raws:
            try:
                attributes.append(Attribute.from_payload(raw))
            except InvalidArgumentError:
                self._fail(report, f"Unknown attribute type: {raw.get('type')!r}")
        return attributes

    # --- Reporting ------------------------------------------------------------

    @staticmethod
    def _note(report: ImportReport, message: str) -> None:
        logger.info(message)
        report.messages.append(message)

    @staticmethod
    def _fail(report: ImportReport, message: str) -> None:
        logger.error(message)
        report.messages.append(f"ERROR: {message}")
