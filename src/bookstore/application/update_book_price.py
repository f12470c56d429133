"""Application service: Update Book Price use case."""

from __future__ import annotations

from bookstore.application.dto import BookDTO, to_book_dto
from bookstore.domain.exceptions import BookNotFoundError
from bookstore.domain.model.value_objects import Money
from bookstore.domain.repository.unit_of_work import AbstractUnitOfWork


class UpdateBookPriceHandler:

    def __init__(self, uow: AbstractUnitOfWork) -> None:
        self._uow = uow

    def handle(self, book_id: int, new_price: str) -> BookDTO:
        """Update a book's price.

        This does NOT affect any existing orders — their lines captured a
        price snapshot at creation time.
        """
        with self._uow as uow:
            book = uow.books.get_by_id(book_id)
            if book is None:
                raise BookNotFoundError(f"Book #{book_id} not found")

            book.update_price(Money.of(new_price))
            uow.books.save(book)
            uow.commit()

        return to_book_dto(book)
