"""Composition root: builds the database and the SQLite repositories.

Web handlers and CLI commands get their repositories from here and
otherwise depend only on the repository interfaces.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from storefront.infrastructure.config import Settings
from storefront.infrastructure.graphql.schema import StorefrontContext
from storefront.infrastructure.persistence.database import Database
from storefront.infrastructure.persistence.sqlite_category_repository import (
    SqliteCategoryRepository,
)
from storefront.infrastructure.persistence.sqlite_order_repository import (
    SqliteOrderRepository,
)
from storefront.infrastructure.persistence.sqlite_product_repository import (
    SqliteProductRepository,
)


def database(settings: Settings | None = None) -> Database:
    """Open a connection with the schema in place."""
    db = Database((settings or Settings.from_env()).database)
    db.init_schema()
    return db


@contextmanager
def session(settings: Settings | None = None) -> Iterator[Database]:
    """A database for one unit of work, closed afterwards."""
    db = database(settings)
    try:
        yield db
    finally:
        db.close()


def category_repository(db: Database) -> SqliteCategoryRepository:
    return SqliteCategoryRepository(db)


def product_repository(db: Database) -> SqliteProductRepository:
    return SqliteProductRepository(db)


def order_repository(db: Database) -> SqliteOrderRepository:
    return SqliteOrderRepository(db)


def storefront_context(db: Database) -> StorefrontContext:
    """Fresh repositories for one request."""
    return StorefrontContext(
        categories=category_repository(db),
        products=product_repository(db),
        orders=order_repository(db),
    )
