"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from bookstore.domain.model.order import Order, OrderStatus, PaymentStatus


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def get_by_order_number(self, order_number: str) -> Order | None:
        """Return an order by its human-readable number, or None."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a new or updated order together with its lines.

        Raises DuplicateOrderNumberError when a *new* order reuses a
        number already stored.
        """

    @abstractmethod
    def list_by_status(self, status: OrderStatus) -> list[Order]:
        """Return orders currently in *status*."""

    @abstractmethod
    def list_by_payment_status(self, payment_status: PaymentStatus) -> list[Order]:
        """Return orders whose payment is in *payment_status*, newest first."""

    @abstractmethod
    def list_by_customer(self, customer_id: int) -> list[Order]:
        """Return a customer's orders, newest first."""

    @abstractmethod
    def list_by_date_range(self, start: datetime, end: datetime) -> list[Order]:
        """Return orders created within [start, end], newest first."""

    @abstractmethod
    def list_pending(self) -> list[Order]:
        """Return PENDING and CONFIRMED orders, oldest first."""

    @abstractmethod
    def list_recent(self, limit: int) -> list[Order]:
        """Return the *limit* most recently created orders."""

    @abstractmethod
    def search(self, keyword: str) -> list[Order]:
        """Return orders whose number or customer name contains *keyword*.

        Matching ignores case; results are newest first.
        """
