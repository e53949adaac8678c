"""Application service: Place Order use case.

Always creates a *pending* order, whatever the caller might want, and
only accepts items that refer to products in the catalog.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Sequence

from storefront.domain.exceptions import (
    EntityNotFoundError,
    OrderPlacementError,
    ValidationError,
)
from storefront.domain.model.order import Order, OrderStatus
from storefront.domain.model.value_objects import DEFAULT_CURRENCY
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class PlaceOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo

    def handle(
        self,
        items: Sequence[str],
        total_amount: float | Decimal | str,
        customer_email: str | None = None,
    ) -> Order:
        """Place a new order.

        Steps:
        1. Check every item id against the catalog (fail if unknown).
        2. Build a pending order carrying the item ids.
        3. Persist order and items in one go; a rejected save becomes
           OrderPlacementError.
        """
        if not items:
            raise ValidationError("Order must contain at least one item")

        for product_id in items:
            if self._product_repo.find_by_id(product_id) is None:
                raise EntityNotFoundError(f"Product not found: '{product_id}'")

        order = Order.create(
            OrderStatus.PENDING, total_amount, DEFAULT_CURRENCY, customer_email
        )
        for product_id in items:
            order.add_item(product_id)

        if not self._order_repo.save(order):
            logger.warning("Order rejected on save (total=%s)", order.total)
            raise OrderPlacementError("Failed to place order")

        logger.info("Order #%s placed with %d item(s)", order.id, len(order.items))
        return order
