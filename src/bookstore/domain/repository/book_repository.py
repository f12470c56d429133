"""Abstract repository for Book aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations live in the infrastructure
layer (and as in-memory fakes under ``tests/``).
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from bookstore.domain.model.book import Book


class BookRepository(ABC):

    @abstractmethod
    def get_by_id(self, book_id: int) -> Book | None:
        """Return a book by its ID, or None if not found."""

    @abstractmethod
    def get_by_isbn(self, isbn: str) -> Book | None:
        """Return a book by its ISBN, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Book]:
        """Return every book in the catalog."""

    @abstractmethod
    def list_low_stock(self, threshold: int) -> list[Book]:
        """Return books whose stock is at or below *threshold*."""

    @abstractmethod
    def save(self, book: Book) -> None:
        """Persist a new or updated book, assigning an ID to new ones.

        The stock level is written only for new books; afterwards it moves
        through the stock calls below.
        """

    @abstractmethod
    def reserve_stock(self, book_id: int, quantity: int) -> bool:
        """Atomically take *quantity* units out of stock.

        Must be a single check-and-decrement: returns False, changing
        nothing, when the book is missing or holds fewer than *quantity*.
        """

    @abstractmethod
    def restore_stock(self, book_id: int, quantity: int) -> bool:
        """Atomically put *quantity* units back; False if the book is gone."""

    @abstractmethod
    def set_stock(self, book_id: int, quantity: int) -> bool:
        """Overwrite the stock level in one statement; False if the book is gone."""
