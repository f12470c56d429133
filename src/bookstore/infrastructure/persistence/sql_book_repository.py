"""SQLAlchemy-backed implementation of BookRepository."""

from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from bookstore.domain.exceptions import BookNotFoundError
from bookstore.domain.model.book import Book
from bookstore.domain.model.value_objects import Money
from bookstore.domain.repository.book_repository import BookRepository
from bookstore.infrastructure.persistence.tables import BookRow

_books = BookRow.__table__


class SqlBookRepository(BookRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- BookRepository interface ---------------------------------------------

    def get_by_id(self, book_id: int) -> Book | None:
        row = self._session.get(BookRow, book_id, populate_existing=True)
        return self._to_domain(row) if row is not None else None

    def get_by_isbn(self, isbn: str) -> Book | None:
        row = self._session.scalars(
            select(BookRow)
            .where(BookRow.isbn == isbn)
            .execution_options(populate_existing=True)
        ).one_or_none()
        return self._to_domain(row) if row is not None else None

    def list_all(self) -> list[Book]:
        rows = self._session.scalars(
            select(BookRow).order_by(BookRow.id).execution_options(populate_existing=True)
        )
        return [self._to_domain(row) for row in rows]

    def list_low_stock(self, threshold: int) -> list[Book]:
        rows = self._session.scalars(
            select(BookRow)
            .where(BookRow.stock_quantity <= threshold)
            .order_by(BookRow.stock_quantity, BookRow.id)
            .execution_options(populate_existing=True)
        )
        return [self._to_domain(row) for row in rows]

    def save(self, book: Book) -> None:
        if book.id is None:
            row = BookRow(stock_quantity=book.stock_quantity)
            self._apply(row, book)
            self._session.add(row)
            self._session.flush()
            book.id = row.id
            return

        row = self._session.get(BookRow, book.id, populate_existing=True)
        if row is None:
            raise BookNotFoundError(f"Book #{book.id} not found")
        self._apply(row, book)
        self._session.flush()

    # Stock counters change through single conditional statements so that
    # concurrent units of work cannot interleave a read and a write.

    def reserve_stock(self, book_id: int, quantity: int) -> bool:
        result = self._session.execute(
            update(_books)
            .where(_books.c.id == book_id, _books.c.stock_quantity >= quantity)
            .values(stock_quantity=_books.c.stock_quantity - quantity)
        )
        return result.rowcount == 1

    def restore_stock(self, book_id: int, quantity: int) -> bool:
        result = self._session.execute(
            update(_books)
            .where(_books.c.id == book_id)
            .values(stock_quantity=_books.c.stock_quantity + quantity)
        )
        return result.rowcount == 1

    def set_stock(self, book_id: int, quantity: int) -> bool:
        result = self._session.execute(
            update(_books)
            .where(_books.c.id == book_id)
            .values(stock_quantity=quantity)
        )
        return result.rowcount == 1

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _apply(row: BookRow, book: Book) -> None:
        row.isbn = book.isbn
        row.title = book.title
        row.author = book.author
        row.price = book.price.amount
        row.currency = book.price.currency

    @staticmethod
    def _to_domain(row: BookRow) -> Book:
        return Book(
            id=row.id,
            isbn=row.isbn,
            title=row.title,
            author=row.author,
            price=Money.of(row.price, row.currency),
            stock_quantity=row.stock_quantity,
        )
