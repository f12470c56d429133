"""Integration tests for the book catalog use cases."""

import pytest

from bookstore.application.add_book import AddBookHandler
from bookstore.application.create_order import CreateOrderHandler
from bookstore.application.dto import OrderItemSpec
from bookstore.application.set_stock import SetStockHandler
from bookstore.application.show_books import ShowBooksHandler
from bookstore.application.update_book_price import UpdateBookPriceHandler
from bookstore.domain.exceptions import BookNotFoundError, ValidationError
from bookstore.domain.model.customer import Customer
from tests.fakes import FakeCustomerRepository, FakeUnitOfWork


def _setup() -> tuple[FakeUnitOfWork, AddBookHandler]:
    uow = FakeUnitOfWork(
        customers=FakeCustomerRepository([
            Customer.create("Ada", "Lovelace", "ada@example.com", "555-0100", "12 Analytical St"),
        ]),
    )
    return uow, AddBookHandler(uow)


class TestAddBook:

    def test_add(self):
        uow, handler = _setup()
        dto = handler.handle("978-1", "Dune", "Frank Herbert", "9.5", stock_quantity=4)
        assert dto.id == 1
        assert dto.price == "$9.50"
        assert uow.books.get_by_id(1).stock_quantity == 4

    def test_duplicate_isbn_rejected(self):
        _, handler = _setup()
        handler.handle("978-1", "Dune", "Frank Herbert", "9.50")
        with pytest.raises(ValidationError, match="already exists"):
            handler.handle("978-1", "Dune Messiah", "Frank Herbert", "11.00")

    def test_negative_price_rejected(self):
        _, handler = _setup()
        with pytest.raises(ValidationError, match="cannot be negative"):
            handler.handle("978-1", "Dune", "Frank Herbert", "-1")


class TestUpdateBookPrice:

    def test_existing_orders_keep_their_price(self):
        uow, handler = _setup()
        handler.handle("978-1", "Dune", "Frank Herbert", "10.00", stock_quantity=5)
        order = CreateOrderHandler(uow).handle(1, [OrderItemSpec(1, 2)])

        dto = UpdateBookPriceHandler(uow).handle(1, "12.00")

        assert dto.price == "$12.00"
        assert str(uow.orders.get_by_id(order.id).total_amount) == "$20.00"

    def test_unknown_book(self):
        uow, _ = _setup()
        with pytest.raises(BookNotFoundError):
            UpdateBookPriceHandler(uow).handle(3, "12.00")


class TestStockLevels:

    def test_set_stock(self):
        uow, handler = _setup()
        handler.handle("978-1", "Dune", "Frank Herbert", "10.00", stock_quantity=5)
        assert SetStockHandler(uow).handle(1, 12).stock_quantity == 12

    def test_negative_stock_rejected(self):
        uow, handler = _setup()
        handler.handle("978-1", "Dune", "Frank Herbert", "10.00", stock_quantity=5)
        with pytest.raises(ValidationError):
            SetStockHandler(uow).handle(1, -1)
        assert uow.books.get_by_id(1).stock_quantity == 5

    def test_set_stock_unknown_book(self):
        uow, _ = _setup()
        with pytest.raises(BookNotFoundError):
            SetStockHandler(uow).handle(9, 3)

    def test_price_update_leaves_stock_alone(self):
        uow, handler = _setup()
        handler.handle("978-1", "Dune", "Frank Herbert", "10.00", stock_quantity=5)
        uow.books.reserve_stock(1, 2)

        dto = UpdateBookPriceHandler(uow).handle(1, "12.00")

        assert dto.price == "$12.00"
        assert uow.books.get_by_id(1).stock_quantity == 3

    def test_low_stock_report(self):
        uow, handler = _setup()
        handler.handle("978-1", "Dune", "Frank Herbert", "10.00", stock_quantity=50)
        handler.handle("978-2", "Emma", "Jane Austen", "8.00", stock_quantity=3)
        handler.handle("978-3", "Ulysses", "James Joyce", "14.00", stock_quantity=10)

        low = ShowBooksHandler(uow).low_stock(10)

        assert [b.title for b in low] == ["Emma", "Ulysses"]
        assert len(ShowBooksHandler(uow).handle()) == 3

    def test_negative_threshold_rejected(self):
        uow, _ = _setup()
        with pytest.raises(ValidationError):
            ShowBooksHandler(uow).low_stock(-1)
