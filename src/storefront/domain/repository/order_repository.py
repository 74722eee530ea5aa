"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.order import Order, OrderStatus


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def add(self, order: Order) -> None:
        """Insert a new order and assign its ID.

        Must be atomic with respect to other inserts and raise
        ConflictError if ``order.order_number`` is already stored.
        """

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist changes to an existing order.

        Raises ConflictError if the stored version differs from
        ``order.version`` (someone saved in between); on success the
        version is incremented.
        """

    @abstractmethod
    def last_order_number(self, prefix: str) -> str | None:
        """Return the lexicographically largest order number with *prefix*."""

    @abstractmethod
    def list_by_user(self, user_id: str) -> list[Order]:
        """Return a user's orders, newest first."""

    @abstractmethod
    def find(
        self,
        status: OrderStatus | None = None,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[Order]:
        """Return orders newest first, optionally filtered and sliced."""

    @abstractmethod
    def count(self, status: OrderStatus | None = None) -> int:
        """Return the number of orders, optionally for a single status."""
