"""Abstract repository for the Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order, newest first."""

    @abstractmethod
    def save(self, order: Order) -> bool:
        """Persist a new or updated order together with its items.

        Assigns ``order.id`` on first insert. A new order must validate
        (False otherwise); re-saving a stored order persists a status
        transition that ``process()`` or ``cancel()`` already checked.
        """
