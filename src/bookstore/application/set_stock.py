"""Application service: Set Stock use case (manual stock count)."""

from __future__ import annotations

import structlog

from bookstore.application.dto import BookDTO, to_book_dto
from bookstore.domain.exceptions import BookNotFoundError
from bookstore.domain.repository.unit_of_work import AbstractUnitOfWork

logger = structlog.get_logger(__name__)


class SetStockHandler:

    def __init__(self, uow: AbstractUnitOfWork) -> None:
        self._uow = uow

    def handle(self, book_id: int, quantity: int) -> BookDTO:
        """Overwrite the stock level of a book."""
        with self._uow as uow:
            book = uow.books.get_by_id(book_id)
            if book is None:
                raise BookNotFoundError(f"Book #{book_id} not found")

            book.set_stock(quantity)
            if not uow.books.set_stock(book_id, quantity):
                raise BookNotFoundError(f"Book #{book_id} not found")
            uow.commit()

        logger.info("Stock set", book_id=book_id, quantity=quantity)
        return to_book_dto(book)
