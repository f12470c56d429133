"""Unit tests for the InventoryLedger domain service."""

import pytest

from bookstore.domain.exceptions import (
    BookNotFoundError,
    InsufficientStockError,
    ValidationError,
)
from bookstore.domain.model.book import Book
from bookstore.domain.model.order import Order, OrderLine
from bookstore.domain.model.value_objects import Money
from bookstore.domain.service.inventory_ledger import InventoryLedger
from tests.fakes import FakeBookRepository


def _setup(stock: int = 5) -> tuple[InventoryLedger, FakeBookRepository]:
    books = FakeBookRepository([
        Book(None, "978-1", "Dune", "Herbert", Money.of("10.00"), stock_quantity=stock),
        Book(None, "978-2", "Emma", "Austen", Money.of("8.00"), stock_quantity=stock),
    ])
    return InventoryLedger(books), books


class TestCheckAndReserve:

    def test_reserves_stock(self):
        ledger, books = _setup(stock=5)
        book = ledger.check_and_reserve(1, 3)
        assert book.title == "Dune"
        assert books.get_by_id(1).stock_quantity == 2

    def test_exact_stock_can_be_reserved(self):
        ledger, books = _setup(stock=5)
        ledger.check_and_reserve(1, 5)
        assert books.get_by_id(1).stock_quantity == 0

    def test_insufficient_stock_changes_nothing(self):
        ledger, books = _setup(stock=2)
        with pytest.raises(InsufficientStockError, match=r"'Dune' \(need 3, have 2\)"):
            ledger.check_and_reserve(1, 3)
        assert books.get_by_id(1).stock_quantity == 2

    def test_unknown_book(self):
        ledger, _ = _setup()
        with pytest.raises(BookNotFoundError, match="#99"):
            ledger.check_and_reserve(99, 1)

    @pytest.mark.parametrize("qty", [0, -2])
    def test_non_positive_quantity_rejected(self, qty):
        ledger, books = _setup(stock=5)
        with pytest.raises(ValidationError, match="must be positive"):
            ledger.check_and_reserve(1, qty)
        assert books.get_by_id(1).stock_quantity == 5


class TestRestore:

    def test_restore_adds_back(self):
        ledger, books = _setup(stock=2)
        assert ledger.restore(1, 3) is True
        assert books.get_by_id(1).stock_quantity == 5

    def test_missing_book_is_skipped(self):
        ledger, _ = _setup()
        assert ledger.restore(99, 3) is False

    def test_restore_for_order_returns_every_line(self):
        ledger, books = _setup(stock=0)
        order = Order.create("ORD-1", 1, [
            OrderLine.snapshot(Book(1, "978-1", "Dune", "Herbert", Money.of("10")), 2),
            OrderLine.snapshot(Book(2, "978-2", "Emma", "Austen", Money.of("8")), 4),
        ])

        ledger.restore_for_order(order)

        assert books.get_by_id(1).stock_quantity == 2
        assert books.get_by_id(2).stock_quantity == 4

    def test_restore_for_order_survives_deleted_book(self):
        ledger, books = _setup(stock=0)
        order = Order.create("ORD-1", 1, [
            OrderLine.snapshot(Book(1, "978-1", "Dune", "Herbert", Money.of("10")), 2),
            OrderLine.snapshot(Book(2, "978-2", "Emma", "Austen", Money.of("8")), 4),
        ])
        books.delete(1)

        ledger.restore_for_order(order)

        assert books.get_by_id(2).stock_quantity == 4
