"""Unit of Work contract.

Every use case that changes state runs inside one unit of work: all
repository calls share a single transaction, and nothing is kept unless
``commit()`` is called before the block exits.

    with uow:
        ...
        uow.commit()
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from bookstore.domain.repository.book_repository import BookRepository
from bookstore.domain.repository.customer_repository import CustomerRepository
from bookstore.domain.repository.daily_offer_repository import DailyOfferRepository
from bookstore.domain.repository.order_repository import OrderRepository


class AbstractUnitOfWork(ABC):

    books: BookRepository
    customers: CustomerRepository
    orders: OrderRepository
    offers: DailyOfferRepository

    def __enter__(self) -> AbstractUnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        # Anything not explicitly committed is discarded.
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        """Make every change in this unit of work permanent."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard every uncommitted change."""
