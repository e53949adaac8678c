"""Application service: Cancel Order use case.

Only pending orders can be cancelled; the cancellation is a re-save of
the same order with its new status.
"""

from __future__ import annotations

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.order import OrderStatus
from storefront.domain.repository.order_repository import OrderRepository


class CancelOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: int) -> bool:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")

        order.cancel()
        if not self._order_repo.save(order):
            order.status = OrderStatus.PENDING
            return False
        return True
