"""Unit tests for the Order aggregate and its lifecycle rules."""

from datetime import datetime, timezone

import pytest

from bookstore.domain.exceptions import InvalidTransitionError, ValidationError
from bookstore.domain.model.book import Book
from bookstore.domain.model.order import (
    Order,
    OrderLine,
    OrderStatus,
    PaymentStatus,
)
from bookstore.domain.model.value_objects import Money, Quantity

NOON = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)
LATER = datetime(2024, 3, 2, 9, 30, tzinfo=timezone.utc)


def _make_line(book_id: int = 1, qty: int = 1, price: str = "15.00") -> OrderLine:
    """Helper to build a valid order line."""
    return OrderLine(
        book_id=book_id,
        book_title=f"Book {book_id}",
        book_author="Author",
        quantity=Quantity(qty),
        price=Money.of(price),
    )


def _make_order(status: OrderStatus = OrderStatus.PENDING, **kwargs) -> Order:
    order = Order.create("ORD-20240301120000-0001", customer_id=1, lines=[_make_line()], **kwargs)
    order.id = 1
    order.status = status
    return order


class TestOrderCreation:

    def test_happy_path(self):
        order = Order.create(
            "ORD-20240301120000-0001",
            customer_id=7,
            lines=[_make_line(qty=2, price="10.00")],
            created_at=NOON,
        )
        assert order.customer_id == 7
        assert order.status == OrderStatus.PENDING
        assert order.payment_status == PaymentStatus.PENDING
        assert order.created_at == NOON
        assert order.total_amount == Money.of("20.00")

    def test_id_is_none_for_new_orders(self):
        order = Order.create("ORD-1", 1, [_make_line()])
        assert order.id is None  # assigned by repository

    def test_total_is_sum_of_line_subtotals(self):
        order = Order.create("ORD-1", 1, [
            _make_line(1, qty=3, price="15.00"),
            _make_line(2, qty=5, price="25.00"),
        ])
        assert order.total_amount == Money.of("170.00")
        assert order.item_count == 8

    def test_empty_lines_rejected(self):
        with pytest.raises(ValidationError, match="at least one line"):
            Order.create("ORD-1", 1, [])

    def test_missing_number_rejected(self):
        with pytest.raises(ValidationError, match="Order number is required"):
            Order.create("", 1, [_make_line()])


class TestOrderLineSnapshot:

    def test_copies_price_title_and_author(self):
        book = Book(1, "978-0", "Dune", "Herbert", Money.of("9.99"), stock_quantity=3)
        line = OrderLine.snapshot(book, 2)

        book.update_price(Money.of("19.99"))
        book.title = "Dune (2nd ed.)"

        assert line.price == Money.of("9.99")
        assert line.book_title == "Dune"
        assert line.book_author == "Herbert"
        assert line.subtotal == Money.of("19.98")

    def test_unsaved_book_rejected(self):
        book = Book(None, "978-0", "Dune", "Herbert", Money.of("9.99"))
        with pytest.raises(ValidationError, match="not been saved"):
            OrderLine.snapshot(book, 1)


class TestStatusTransitions:

    def test_any_status_reachable_from_pending(self):
        for status in OrderStatus:
            order = _make_order()
            order.update_status(status, at=NOON)
            assert order.status == status

    def test_shipped_stamps_timestamp_once(self):
        order = _make_order()
        order.update_status(OrderStatus.SHIPPED, at=NOON)
        order.update_status(OrderStatus.PROCESSING, at=LATER)
        order.update_status(OrderStatus.SHIPPED, at=LATER)
        assert order.shipped_at == NOON

    def test_delivered_stamps_timestamp_once(self):
        order = _make_order()
        order.update_status(OrderStatus.DELIVERED, at=NOON)
        order.update_status(OrderStatus.DELIVERED, at=LATER)
        assert order.delivered_at == NOON
        assert order.shipped_at is None

    def test_cancelled_is_terminal(self):
        order = _make_order(OrderStatus.CANCELLED)
        with pytest.raises(InvalidTransitionError, match="cancelled"):
            order.update_status(OrderStatus.PENDING, at=NOON)

    def test_cancelled_to_cancelled_is_allowed(self):
        order = _make_order(OrderStatus.CANCELLED)
        order.update_status(OrderStatus.CANCELLED, at=NOON)
        assert order.status == OrderStatus.CANCELLED

    def test_needs_stock_restoration_only_when_entering_cancelled(self):
        assert _make_order(OrderStatus.SHIPPED).needs_stock_restoration(OrderStatus.CANCELLED)
        assert not _make_order(OrderStatus.CANCELLED).needs_stock_restoration(
            OrderStatus.CANCELLED
        )
        assert not _make_order().needs_stock_restoration(OrderStatus.SHIPPED)


class TestCancel:

    @pytest.mark.parametrize(
        "status",
        [OrderStatus.PENDING, OrderStatus.CONFIRMED, OrderStatus.PROCESSING, OrderStatus.SHIPPED],
    )
    def test_cancel_from_open_statuses(self, status):
        order = _make_order(status)
        order.cancel()
        assert order.status == OrderStatus.CANCELLED
        assert order.payment_status == PaymentStatus.REFUNDED

    def test_cannot_cancel_delivered(self):
        order = _make_order(OrderStatus.DELIVERED)
        with pytest.raises(InvalidTransitionError, match="already been delivered"):
            order.cancel()
        assert order.status == OrderStatus.DELIVERED

    def test_cannot_cancel_twice(self):
        order = _make_order(OrderStatus.CANCELLED)
        with pytest.raises(InvalidTransitionError, match="already cancelled"):
            order.cancel()

    def test_reason_appended_to_notes(self):
        order = _make_order(notes="Gift wrap")
        order.cancel("customer changed mind")
        assert order.notes == "Gift wrap\nCancellation: customer changed mind"

    def test_reason_on_empty_notes(self):
        order = _make_order()
        order.cancel("duplicate")
        assert order.notes == "Cancellation: duplicate"

    def test_blank_reason_ignored(self):
        order = _make_order()
        order.cancel("   ")
        assert order.notes is None


class TestPaymentStatus:

    def test_paid_confirms_pending_order(self):
        order = _make_order()
        order.update_payment_status(PaymentStatus.PAID)
        assert order.payment_status == PaymentStatus.PAID
        assert order.status == OrderStatus.CONFIRMED

    def test_paid_leaves_later_status_alone(self):
        order = _make_order(OrderStatus.SHIPPED)
        order.update_payment_status(PaymentStatus.PAID)
        assert order.status == OrderStatus.SHIPPED

    def test_failed_payment_keeps_order_pending(self):
        order = _make_order()
        order.update_payment_status(PaymentStatus.FAILED)
        assert order.payment_status == PaymentStatus.FAILED
        assert order.status == OrderStatus.PENDING
