"""Application service: Process Order use case.

Completes a pending order that passes the pending rules; a failed save
leaves it pending. Completed and cancelled orders are already
final, so processing them is a successful no-op.
"""

from __future__ import annotations

import logging

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.order import OrderStatus
from storefront.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class ProcessOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: int) -> bool:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")

        if order.status is not OrderStatus.PENDING:
            return True

        if not order.process():
            logger.warning("Order #%s does not validate, not completed", order_id)
            return False

        if not self._order_repo.save(order):
            order.status = OrderStatus.PENDING
            logger.warning("Order #%s could not be completed", order_id)
            return False
        return True
