"""Application service: Show Books use case (query)."""

from __future__ import annotations

from bookstore.application.dto import BookDTO, to_book_dto
from bookstore.domain.exceptions import ValidationError
from bookstore.domain.repository.unit_of_work import AbstractUnitOfWork

DEFAULT_LOW_STOCK_THRESHOLD = 10


class ShowBooksHandler:

    def __init__(self, uow: AbstractUnitOfWork) -> None:
        self._uow = uow

    def handle(self) -> list[BookDTO]:
        with self._uow as uow:
            return [to_book_dto(b) for b in uow.books.list_all()]

    def low_stock(self, threshold: int = DEFAULT_LOW_STOCK_THRESHOLD) -> list[BookDTO]:
        if threshold < 0:
            raise ValidationError("Threshold cannot be negative")
        with self._uow as uow:
            return [to_book_dto(b) for b in uow.books.list_low_stock(threshold)]
