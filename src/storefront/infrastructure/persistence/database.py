"""SQLite connection wrapper and catalog schema."""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Mapping, Sequence, Union

logger = logging.getLogger(__name__)

# Parameter type accepted by sqlite3 (positional sequence or named mapping)
Params = Union[Sequence[Any], Mapping[str, Any]]

SCHEMA = """
CREATE TABLE IF NOT EXISTS categories (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL UNIQUE,
    created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE IF NOT EXISTS products (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    brand TEXT NOT NULL,
    description TEXT,
    category TEXT NOT NULL,
    in_stock INTEGER NOT NULL DEFAULT 1,
    created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE IF NOT EXISTS attributes (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    type TEXT NOT NULL CHECK (type IN ('text', 'swatch')),
    created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE IF NOT EXISTS attribute_items (
    id TEXT NOT NULL,
    attribute_id TEXT NOT NULL REFERENCES attributes(id) ON DELETE CASCADE,
    display_value TEXT NOT NULL,
    value TEXT NOT NULL,
    PRIMARY KEY (attribute_id, id)
);

CREATE TABLE IF NOT EXISTS product_gallery (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    product_id TEXT NOT NULL REFERENCES products(id) ON DELETE CASCADE,
    image_url TEXT NOT NULL,
    sort_order INTEGER NOT NULL DEFAULT 0 CHECK (sort_order >= 0)
);

CREATE TABLE IF NOT EXISTS prices (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    product_id TEXT NOT NULL REFERENCES products(id) ON DELETE CASCADE,
    amount TEXT NOT NULL,
    currency_label TEXT NOT NULL,
    currency_symbol TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS product_attributes (
    product_id TEXT NOT NULL REFERENCES products(id) ON DELETE CASCADE,
    attribute_id TEXT NOT NULL REFERENCES attributes(id) ON DELETE CASCADE,
    PRIMARY KEY (product_id, attribute_id)
);

CREATE TABLE IF NOT EXISTS orders (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    status TEXT NOT NULL,
    total_amount TEXT NOT NULL,
    currency TEXT NOT NULL,
    customer_email TEXT,
    shipping_address TEXT,
    created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP,
    updated_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE IF NOT EXISTS order_items (
    order_id INTEGER NOT NULL REFERENCES orders(id) ON DELETE CASCADE,
    position INTEGER NOT NULL,
    product_id TEXT NOT NULL,
    PRIMARY KEY (order_id, position)
);

CREATE INDEX IF NOT EXISTS idx_products_category ON products(category);
CREATE INDEX IF NOT EXISTS idx_gallery_product ON product_gallery(product_id, sort_order);
CREATE INDEX IF NOT EXISTS idx_prices_product ON prices(product_id);
"""

TABLES = (
    "categories",
    "products",
    "attributes",
    "attribute_items",
    "product_gallery",
    "prices",
    "product_attributes",
    "orders",
    "order_items",
)


def _casefold(value: Any) -> str | None:
    """SQL ``casefold(x)``; SQLite's own LOWER and LIKE fold ASCII only."""
    return None if value is None else str(value).casefold()


class Database:
    """Thin wrapper around one sqlite3 connection.

    Statements issued outside ``transaction()`` are committed one by one.
    Inside ``transaction()`` everything is committed together, or rolled
    back on the first exception. Nested scopes become savepoints.
    """

    def __init__(self, db_path: str | Path = ":memory:") -> None:
        self.db_path = str(db_path)
        if self.db_path != ":memory:":
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        self.conn = sqlite3.connect(self.db_path, timeout=10, check_same_thread=False)
        self.conn.row_factory = sqlite3.Row
        self.conn.execute("PRAGMA foreign_keys=ON")
        self.conn.create_function("casefold", 1, _casefold, deterministic=True)
        self._depth = 0

    def init_schema(self) -> None:
        self.conn.executescript(SCHEMA)
        self.conn.commit()
        logger.debug("Schema ready in %s", self.db_path)

    def close(self) -> None:
        self.conn.close()

    # --- Statements -----------------------------------------------------------

    def execute(self, sql: str, params: Params = ()) -> sqlite3.Cursor:
        cur = self.conn.execute(sql, params)
        if self._depth == 0:
            self.conn.commit()
        return cur

    def fetch_all(self, sql: str, params: Params = ()) -> list[sqlite3.Row]:
        return self.conn.execute(sql, params).fetchall()

    def fetch_one(self, sql: str, params: Params = ()) -> sqlite3.Row | None:
        return self.conn.execute(sql, params).fetchone()

    def scalar(self, sql: str, params: Params = ()) -> Any:
        row = self.fetch_one(sql, params)
        return None if row is None else row[0]

    @contextmanager
    def transaction(self) -> Iterator[Database]:
        """All-or-nothing scope.

        A nested scope is a savepoint: its failure undoes only its own
        writes and leaves the enclosing scope open.
        """
        savepoint = f"sp_{self._depth}" if self._depth else None
        if savepoint:
            self.conn.execute(f"SAVEPOINT {savepoint}")
        elif not self.conn.in_transaction:
            self.conn.execute("BEGIN")
        self._depth += 1
        try:
            yield self
        except Exception:
            self._depth -= 1
            if savepoint:
                self.conn.execute(f"ROLLBACK TO {savepoint}")
                self.conn.execute(f"RELEASE {savepoint}")
            else:
                self.conn.rollback()
                logger.warning("Transaction rolled back")
            raise
        else:
            self._depth -= 1
            if savepoint:
                self.conn.execute(f"RELEASE {savepoint}")
            else:
                self.conn.commit()

    # --- Introspection --------------------------------------------------------

    def table_counts(self) -> dict[str, int]:
        return {
            table: int(self.scalar(f"SELECT COUNT(*) FROM {table}"))
            for table in TABLES
        }
