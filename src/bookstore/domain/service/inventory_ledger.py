"""Domain service: Inventory Ledger.

Wraps the book store's stock counter.  Every change is a single atomic
statement on the repository (check-and-decrement, increment), never a
read-modify-write on a loaded Book, so two checkouts racing on the same
book cannot both pass a stock boundary they jointly violate.

The ledger does not commit: it runs inside the caller's unit of work, so
a failure on a later order line rolls back reservations made for earlier
ones.
"""

from __future__ import annotations

import structlog

from bookstore.domain.exceptions import (
    BookNotFoundError,
    InsufficientStockError,
    ValidationError,
)
from bookstore.domain.model.book import Book
from bookstore.domain.model.order import Order
from bookstore.domain.repository.book_repository import BookRepository

logger = structlog.get_logger(__name__)


class InventoryLedger:

    def __init__(self, book_repo: BookRepository) -> None:
        self._book_repo = book_repo

    def check_and_reserve(self, book_id: int, quantity: int) -> Book:
        """Take *quantity* units of a book out of stock.

        Returns the book as it was read before the reservation, for
        snapshotting price, title and author onto an order line.
        """
        if quantity <= 0:
            raise ValidationError("Reservation quantity must be positive")

        book = self._book_repo.get_by_id(book_id)
        if book is None:
            raise BookNotFoundError(f"Book #{book_id} not found")

        if not self._book_repo.reserve_stock(book_id, quantity):
            current = self._book_repo.get_by_id(book_id)
            available = current.stock_quantity if current is not None else 0
            raise InsufficientStockError(
                f"Insufficient stock for '{book.title}' "
                f"(need {quantity}, have {available})"
            )

        logger.debug("Stock reserved", book_id=book_id, quantity=quantity)
        return book

    def restore(self, book_id: int, quantity: int) -> bool:
        """Put *quantity* units back into stock.

        A book deleted since the order was placed is skipped with a
        warning so that it never blocks a cancellation.
        """
        if quantity <= 0:
            raise ValidationError("Restore quantity must be positive")

        if not self._book_repo.restore_stock(book_id, quantity):
            logger.warning(
                "Stock restore skipped, book no longer exists",
                book_id=book_id,
                quantity=quantity,
            )
            return False

        logger.debug("Stock restored", book_id=book_id, quantity=quantity)
        return True

    def restore_for_order(self, order: Order) -> None:
        """Return every line of *order* to stock."""
        for line in order.lines:
            self.restore(line.book_id, line.quantity.value)
        logger.info("Stock restored for order", order_number=order.order_number)
