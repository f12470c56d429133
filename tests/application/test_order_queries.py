"""Integration tests for order queries and sales statistics."""

from datetime import datetime, timedelta, timezone

import pytest

from bookstore.application.cancel_order import CancelOrderHandler
from bookstore.application.create_order import CreateOrderHandler
from bookstore.application.dto import OrderItemSpec
from bookstore.application.list_orders import ListOrdersHandler
from bookstore.application.order_statistics import OrderStatisticsHandler
from bookstore.application.show_order import ShowOrderHandler
from bookstore.application.update_order_status import UpdateOrderStatusHandler
from bookstore.application.update_payment_status import UpdatePaymentStatusHandler
from bookstore.domain.exceptions import (
    CustomerNotFoundError,
    OrderNotFoundError,
    ValidationError,
)
from bookstore.domain.model.book import Book
from bookstore.domain.model.customer import Customer
from bookstore.domain.model.order import OrderStatus, PaymentStatus
from bookstore.domain.model.value_objects import Money
from tests.fakes import FakeBookRepository, FakeCustomerRepository, FakeUnitOfWork

DAY_ONE = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)


def _setup() -> tuple[FakeUnitOfWork, list[int]]:
    """Three orders placed an hour apart: $10, $20 and $25."""
    uow = FakeUnitOfWork(
        books=FakeBookRepository([
            Book(None, "978-1", "Dune", "Frank Herbert", Money.of("10.00"), stock_quantity=50),
            Book(None, "978-2", "Emma", "Jane Austen", Money.of("12.50"), stock_quantity=50),
        ]),
        customers=FakeCustomerRepository([
            Customer.create("Ada", "Lovelace", "ada@example.com", "555-0100", "12 Analytical St"),
            Customer.create("Alan", "Turing", "alan@example.com", "555-0101", "3 Bletchley Rd"),
        ]),
    )
    ids = []
    for hour, (customer_id, items) in enumerate([
        (1, [OrderItemSpec(1, 1)]),
        (2, [OrderItemSpec(1, 2)]),
        (1, [OrderItemSpec(2, 2)]),
    ]):
        placed = DAY_ONE + timedelta(hours=hour)
        dto = CreateOrderHandler(uow, clock=lambda placed=placed: placed).handle(
            customer_id, items
        )
        ids.append(dto.id)
    return uow, ids


class TestShowOrder:

    def test_by_id(self):
        uow, ids = _setup()
        dto = ShowOrderHandler(uow).handle(ids[1])
        assert dto.total == "$20.00"
        assert dto.created_at == "2024-03-01 10:00 UTC"

    def test_by_number(self):
        uow, ids = _setup()
        number = ShowOrderHandler(uow).handle(ids[0]).order_number
        assert ShowOrderHandler(uow).handle_by_number(number).id == ids[0]

    def test_unknown(self):
        uow, _ = _setup()
        with pytest.raises(OrderNotFoundError):
            ShowOrderHandler(uow).handle(999)
        with pytest.raises(OrderNotFoundError):
            ShowOrderHandler(uow).handle_by_number("ORD-NOPE")


class TestListOrders:

    def test_recent_is_newest_first(self):
        uow, ids = _setup()
        assert [o.id for o in ListOrdersHandler(uow).recent(2)] == [ids[2], ids[1]]

    def test_recent_limit_must_be_positive(self):
        uow, _ = _setup()
        with pytest.raises(ValidationError):
            ListOrdersHandler(uow).recent(0)

    def test_by_customer(self):
        uow, ids = _setup()
        assert [o.id for o in ListOrdersHandler(uow).by_customer(1)] == [ids[2], ids[0]]

    def test_by_unknown_customer(self):
        uow, _ = _setup()
        with pytest.raises(CustomerNotFoundError):
            ListOrdersHandler(uow).by_customer(99)

    def test_by_status(self):
        uow, ids = _setup()
        UpdateOrderStatusHandler(uow).handle(ids[1], OrderStatus.SHIPPED)
        shipped = ListOrdersHandler(uow).by_status(OrderStatus.SHIPPED)
        assert [o.id for o in shipped] == [ids[1]]

    def test_pending_is_oldest_first_and_includes_confirmed(self):
        uow, ids = _setup()
        UpdateOrderStatusHandler(uow).handle(ids[0], OrderStatus.CONFIRMED)
        UpdateOrderStatusHandler(uow).handle(ids[1], OrderStatus.SHIPPED)
        assert [o.id for o in ListOrdersHandler(uow).pending()] == [ids[0], ids[2]]

    def test_by_payment_status(self):
        uow, ids = _setup()
        UpdatePaymentStatusHandler(uow).handle(ids[0], PaymentStatus.PAID)
        UpdatePaymentStatusHandler(uow).handle(ids[2], PaymentStatus.PAID)

        paid = ListOrdersHandler(uow).by_payment_status(PaymentStatus.PAID)
        assert [o.id for o in paid] == [ids[2], ids[0]]
        unpaid = ListOrdersHandler(uow).by_payment_status(PaymentStatus.PENDING)
        assert [o.id for o in unpaid] == [ids[1]]

    def test_search_by_customer_name(self):
        uow, ids = _setup()
        assert [o.id for o in ListOrdersHandler(uow).search("love")] == [ids[2], ids[0]]
        assert [o.id for o in ListOrdersHandler(uow).search("ALAN TURING")] == [ids[1]]

    def test_search_by_order_number(self):
        uow, ids = _setup()
        number = ShowOrderHandler(uow).handle(ids[1]).order_number
        assert [o.id for o in ListOrdersHandler(uow).search(number.lower())] == [ids[1]]
        assert ListOrdersHandler(uow).search("ORD-1999") == []

    def test_blank_search_rejected(self):
        uow, _ = _setup()
        with pytest.raises(ValidationError, match="keyword is required"):
            ListOrdersHandler(uow).search("   ")

    def test_between(self):
        uow, ids = _setup()
        found = ListOrdersHandler(uow).between(
            DAY_ONE + timedelta(minutes=30), DAY_ONE + timedelta(hours=2)
        )
        assert [o.id for o in found] == [ids[2], ids[1]]


class TestOrderStatistics:

    def _whole_day(self, uow: FakeUnitOfWork):
        return OrderStatisticsHandler(uow).handle(DAY_ONE, DAY_ONE + timedelta(days=1))

    def test_totals(self):
        uow, _ = _setup()
        stats = self._whole_day(uow)
        assert stats.total_orders == 3
        assert stats.completed_orders == 0
        assert stats.total_revenue == "$55.00"
        assert stats.average_order_value == "$18.33"

    def test_cancelled_orders_excluded_from_revenue_but_counted(self):
        uow, ids = _setup()
        CancelOrderHandler(uow).handle(ids[2])
        UpdateOrderStatusHandler(uow).handle(ids[1], OrderStatus.DELIVERED)

        stats = self._whole_day(uow)
        assert stats.total_orders == 3
        assert stats.completed_orders == 1
        assert stats.total_revenue == "$30.00"
        assert stats.average_order_value == "$10.00"

    def test_empty_period(self):
        uow, _ = _setup()
        start = DAY_ONE + timedelta(days=10)
        stats = OrderStatisticsHandler(uow).handle(start, start + timedelta(days=1))
        assert stats.total_orders == 0
        assert stats.total_revenue == "$0.00"
        assert stats.average_order_value == "$0.00"

    def test_inverted_range_rejected(self):
        uow, _ = _setup()
        with pytest.raises(ValidationError):
            OrderStatisticsHandler(uow).handle(DAY_ONE, DAY_ONE - timedelta(days=1))
