"""SQLite-backed implementation of OrderRepository."""

from __future__ import annotations

import logging
import sqlite3
from decimal import Decimal

from storefront.domain.model.order import Order, OrderStatus
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.order_repository import OrderRepository
from storefront.infrastructure.persistence.database import Database

logger = logging.getLogger(__name__)


class SqliteOrderRepository(OrderRepository):

    def __init__(self, db: Database) -> None:
        self._db = db

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: int) -> Order | None:
        row = self._db.fetch_one("SELECT * FROM orders WHERE id = ?", (order_id,))
        return None if row is None else self._to_domain(row)

    def list_all(self) -> list[Order]:
        rows = self._db.fetch_all("SELECT * FROM orders ORDER BY id DESC")
        return [self._to_domain(row) for row in rows]

    def save(self, order: Order) -> bool:
        if order.id is None and not order.validate():
            logger.warning(
                "Order %s (%s) does not validate, not saved",
                order.id or "<new>", order.status.value,
            )
            return False

        params = (
            order.status.value,
            str(order.total_amount),
            order.currency,
            order.customer_email,
            order.shipping_address,
        )
        try:
            with self._db.transaction():
                if order.id is None:
                    cur = self._db.execute(
                        "INSERT INTO orders "
                        "(status, total_amount, currency, customer_email, shipping_address) "
                        "VALUES (?, ?, ?, ?, ?)",
                        params,
                    )
                    order_id = cur.lastrowid
                else:
                    order_id = order.id
                    self._db.execute(
                        "UPDATE orders SET status = ?, total_amount = ?, currency = ?, "
                        "customer_email = ?, shipping_address = ?, "
                        "updated_at = CURRENT_TIMESTAMP WHERE id = ?",
                        (*params, order_id),
                    )
                self._replace_items(order_id, order.items)
        except sqlite3.Error as exc:
            logger.error("Could not save order: %s", exc)
            return False

        order.id = order_id
        self._refresh_timestamps(order)
        return True

    # --- Helpers --------------------------------------------------------------

    def _replace_items(self, order_id: int, items: list[str]) -> None:
        self._db.execute("DELETE FROM order_items WHERE order_id = ?", (order_id,))
        for position, product_id in enumerate(items):
            self._db.execute(
                "INSERT INTO order_items (order_id, position, product_id) VALUES (?, ?, ?)",
                (order_id, position, product_id),
            )

    def _refresh_timestamps(self, order: Order) -> None:
        row = self._db.fetch_one(
            "SELECT created_at, updated_at FROM orders WHERE id = ?", (order.id,)
        )
        if row is not None:
            order.created_at = row["created_at"]
            order.updated_at = row["updated_at"]

    def _load_items(self, order_id: int) -> list[str]:
        rows = self._db.fetch_all(
            "SELECT product_id FROM order_items WHERE order_id = ? ORDER BY position",
            (order_id,),
        )
        return [row["product_id"] for row in rows]

    def _to_domain(self, row: sqlite3.Row) -> Order:
        return Order(
            id=int(row["id"]),
            status=OrderStatus(row["status"]),
            total=Money(Decimal(row["total_amount"]), row["currency"]),
            customer_email=row["customer_email"],
            shipping_address=row["shipping_address"],
            items=self._load_items(int(row["id"])),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
