"""SQLAlchemy unit of work: one session, one transaction per ``with`` block."""

from __future__ import annotations

from sqlalchemy.orm import Session, sessionmaker

from bookstore.domain.repository.unit_of_work import AbstractUnitOfWork
from bookstore.infrastructure.persistence.sql_book_repository import SqlBookRepository
from bookstore.infrastructure.persistence.sql_customer_repository import (
    SqlCustomerRepository,
)
from bookstore.infrastructure.persistence.sql_daily_offer_repository import (
    SqlDailyOfferRepository,
)
from bookstore.infrastructure.persistence.sql_order_repository import SqlOrderRepository


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """Not thread-safe: give each request (or thread) its own instance."""

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory
        self._session: Session | None = None

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        self._session = self._session_factory()
        self.books = SqlBookRepository(self._session)
        self.customers = SqlCustomerRepository(self._session)
        self.orders = SqlOrderRepository(self._session)
        self.offers = SqlDailyOfferRepository(self._session)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            super().__exit__(exc_type, exc, tb)
        finally:
            self._session.close()  # type: ignore[union-attr]
            self._session = None

    def commit(self) -> None:
        self._session.commit()  # type: ignore[union-attr]

    def rollback(self) -> None:
        self._session.rollback()  # type: ignore[union-attr]
