"""Unit tests for the Book aggregate."""

import pytest

from bookstore.domain.exceptions import InsufficientStockError, ValidationError
from bookstore.domain.model.book import Book
from bookstore.domain.model.value_objects import Money


def _book(stock: int = 5) -> Book:
    return Book(1, "978-0-00", "Dune", "Frank Herbert", Money.of("10.00"), stock_quantity=stock)


class TestBookCreation:

    def test_create_strips_fields(self):
        book = Book.create("  978-0-00 ", " Dune ", " Frank Herbert ", Money.of("10"))
        assert book.id is None
        assert book.isbn == "978-0-00"
        assert book.title == "Dune"
        assert book.stock_quantity == 0

    @pytest.mark.parametrize("field", ["isbn", "title", "author"])
    def test_required_fields(self, field):
        args = {"isbn": "978-0-00", "title": "Dune", "author": "Herbert"}
        args[field] = "  "
        with pytest.raises(ValidationError, match="required"):
            Book.create(price=Money.of("10"), **args)

    def test_negative_stock_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            _book(stock=-1)


class TestStockMovements:

    def test_reduce_stock(self):
        book = _book(5)
        book.reduce_stock(3)
        assert book.stock_quantity == 2

    def test_reduce_to_exactly_zero(self):
        book = _book(5)
        book.reduce_stock(5)
        assert book.stock_quantity == 0

    def test_reduce_beyond_stock_rejected(self):
        book = _book(2)
        with pytest.raises(InsufficientStockError, match="need 3, have 2"):
            book.reduce_stock(3)
        assert book.stock_quantity == 2

    def test_restore_stock(self):
        book = _book(2)
        book.restore_stock(3)
        assert book.stock_quantity == 5

    def test_non_positive_movements_rejected(self):
        book = _book(2)
        with pytest.raises(ValidationError):
            book.reduce_stock(0)
        with pytest.raises(ValidationError):
            book.restore_stock(-1)

    def test_set_stock(self):
        book = _book(2)
        book.set_stock(0)
        assert book.stock_quantity == 0
        with pytest.raises(ValidationError):
            book.set_stock(-4)
