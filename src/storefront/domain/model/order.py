"""Order aggregate.

Orders are created *pending*. A pending order can still be changed; it
ends either *completed* (via ``process()``) or *cancelled*. Both end
states are terminal and immutable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from storefront.domain.exceptions import InvalidArgumentError, ValidationError
from storefront.domain.model.value_objects import DEFAULT_CURRENCY, Money


class OrderStatus(Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


_ACTIONS: dict[OrderStatus, tuple[str, ...]] = {
    OrderStatus.PENDING: ("modify", "cancel", "complete", "add_item", "remove_item"),
    OrderStatus.COMPLETED: ("generate_invoice", "view_details"),
    OrderStatus.CANCELLED: ("view_cancellation_details",),
}


def _now() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use the ``Order.create()`` factory for new orders. The ``__init__`` is
    intentionally simple so the repository can reconstitute persisted
    orders without re-validating. ``items`` is the flat list of ordered
    product ids.
    """

    id: int | None
    status: OrderStatus
    total: Money
    customer_email: str | None = None
    shipping_address: str | None = None
    items: list[str] = field(default_factory=list)
    created_at: str | None = None
    updated_at: str | None = None

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def create(
        status: str | OrderStatus,
        total_amount: float | Decimal | str,
        currency: str = DEFAULT_CURRENCY,
        customer_email: str | None = None,
    ) -> Order:
        """Create an order in the given status.

        Unknown statuses are rejected rather than silently mapped to
        pending.
        """
        if not isinstance(status, OrderStatus):
            try:
                status = OrderStatus(status)
            except ValueError:
                raise InvalidArgumentError(f"Unknown order status: {status}") from None
        return Order(
            id=None,
            status=status,
            total=Money.of(total_amount, currency),
            customer_email=customer_email,
        )

    # --- Variant behavior -----------------------------------------------------

    @property
    def currency(self) -> str:
        return self.total.currency

    @property
    def total_amount(self) -> Decimal:
        return self.total.amount

    def validate(self) -> bool:
        has_currency = bool(self.currency)
        if self.status is OrderStatus.CANCELLED:
            return has_currency
        if self.total.is_zero or not has_currency:
            return False
        if self.status is OrderStatus.COMPLETED:
            return bool(self.customer_email)
        return True

    def can_be_modified(self) -> bool:
        return self.status is OrderStatus.PENDING

    def can_be_cancelled(self) -> bool:
        return self.status is OrderStatus.PENDING

    def available_actions(self) -> list[str]:
        return list(_ACTIONS[self.status])

    # --- State transitions ----------------------------------------------------

    def process(self) -> bool:
        """Transition PENDING -> COMPLETED.

        The transition is checked against the pending rules; the status is
        left unchanged and False returned if they fail. End states are left
        as they are.
        """
        if self.status is not OrderStatus.PENDING:
            return True
        if not self.validate():
            return False
        self.status = OrderStatus.COMPLETED
        return True

    def cancel(self) -> None:
        """Transition PENDING -> CANCELLED."""
        if not self.can_be_cancelled():
            raise ValidationError(
                f"Cannot cancel order in {self.status.value} status"
            )
        self.status = OrderStatus.CANCELLED

    # --- Item handling --------------------------------------------------------

    def add_item(self, product_id: str) -> bool:
        if not self.can_be_modified():
            return False
        self.items.append(product_id)
        return True

    def remove_item(self, index: int) -> bool:
        if not self.can_be_modified() or not 0 <= index < len(self.items):
            return False
        del self.items[index]
        return True

    # --- Documents ------------------------------------------------------------

    def generate_invoice(self) -> dict:
        if self.status is not OrderStatus.COMPLETED:
            raise ValidationError("Invoices are only issued for completed orders")
        return {
            "order_id": self.id,
            "customer_email": self.customer_email,
            "total_amount": float(self.total_amount),
            "currency": self.currency,
            "items": list(self.items),
            "invoice_date": _now(),
            "status": "paid",
        }

    def cancellation_info(self) -> dict:
        if self.status is not OrderStatus.CANCELLED:
            raise ValidationError("Order has not been cancelled")
        return {
            "order_id": self.id,
            "original_amount": float(self.total_amount),
            "currency": self.currency,
            "cancelled_at": self.updated_at or self.created_at,
            "reason": "Customer cancellation",
        }
