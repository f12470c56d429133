"""Application service: Add Book use case."""

from __future__ import annotations

import structlog

from bookstore.application.dto import BookDTO, to_book_dto
from bookstore.domain.exceptions import ValidationError
from bookstore.domain.model.book import Book
from bookstore.domain.model.value_objects import Money
from bookstore.domain.repository.unit_of_work import AbstractUnitOfWork

logger = structlog.get_logger(__name__)


class AddBookHandler:

    def __init__(self, uow: AbstractUnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        isbn: str,
        title: str,
        author: str,
        price: str,
        stock_quantity: int = 0,
    ) -> BookDTO:
        """Add a new book to the catalog; ISBNs are unique."""
        book = Book.create(
            isbn=isbn,
            title=title,
            author=author,
            price=Money.of(price),
            stock_quantity=stock_quantity,
        )

        with self._uow as uow:
            if uow.books.get_by_isbn(book.isbn) is not None:
                raise ValidationError(f"A book with ISBN '{book.isbn}' already exists")
            uow.books.save(book)
            uow.commit()

        logger.info("Book added", book_id=book.id, isbn=book.isbn)
        return to_book_dto(book)
