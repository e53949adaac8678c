"""SQLite storage for product prices."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Sequence

from storefront.domain.model.price import Price
from storefront.domain.model.value_objects import Money
from storefront.infrastructure.persistence.database import Database

logger = logging.getLogger(__name__)


class SqlitePriceRepository:

    def __init__(self, db: Database) -> None:
        self._db = db

    def get_by_product_id(self, product_id: str) -> list[Price]:
        rows = self._db.fetch_all(
            "SELECT * FROM prices WHERE product_id = ? ORDER BY id ASC", (product_id,)
        )
        return [
            Price(
                id=int(row["id"]),
                product_id=row["product_id"],
                amount=Money(Decimal(row["amount"]), row["currency_label"]),
                symbol=row["currency_symbol"],
            )
            for row in rows
        ]

    def save(self, price: Price) -> bool:
        if not price.validate():
            logger.warning("Price for %r does not validate, not saved", price.product_id)
            return False

        params = (str(price.amount.amount), price.label, price.symbol)
        if price.id is None:
            cur = self._db.execute(
                "INSERT INTO prices (product_id, amount, currency_label, currency_symbol) "
                "VALUES (?, ?, ?, ?)",
                (price.product_id, *params),
            )
            price.id = cur.lastrowid
        else:
            self._db.execute(
                "UPDATE prices SET amount = ?, currency_label = ?, currency_symbol = ? "
                "WHERE id = ?",
                (*params, price.id),
            )
        return True

    def replace_for_product(self, product_id: str, prices: Sequence[Price]) -> int:
        self.delete_for_product(product_id)
        saved = 0
        for price in prices:
            price.id = None
            if self.save(price):
                saved += 1
        return saved

    def delete_for_product(self, product_id: str) -> None:
        self._db.execute("DELETE FROM prices WHERE product_id = ?", (product_id,))
