"""Order aggregate — the core of the domain.

The Order is an aggregate root that owns its lines: they are created with
the order and never outlive it.  Once placed, only ``status``,
``payment_status``, ``notes`` and the milestone timestamps change.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from bookstore.domain.exceptions import InvalidTransitionError, ValidationError
from bookstore.domain.model.book import Book
from bookstore.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


class PaymentStatus(Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    REFUNDED = "REFUNDED"
    FAILED = "FAILED"


# Statuses still waiting to be worked on by the shop.
OPEN_STATUSES = (OrderStatus.PENDING, OrderStatus.CONFIRMED)


@dataclass(frozen=True)
class OrderLine:
    """One book on an order, frozen at the moment the order was placed.

    ``price``, ``book_title`` and ``book_author`` are copies taken from the
    book when the line is built and must never be re-read from the catalog.
    """

    book_id: int
    book_title: str
    book_author: str
    quantity: Quantity
    price: Money  # locked at order-creation time

    @property
    def subtotal(self) -> Money:
        return self.price * self.quantity.value

    @staticmethod
    def snapshot(book: Book, quantity: int) -> OrderLine:
        if book.id is None:
            raise ValidationError(f"Book '{book.title}' has not been saved yet")
        return OrderLine(
            book_id=book.id,
            book_title=book.title,
            book_author=book.author,
            quantity=Quantity(quantity),
            price=book.price,
        )


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use the ``Order.create()`` factory for new orders — it enforces all
    business rules.  The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without re-validating.
    """

    id: int | None
    order_number: str
    customer_id: int
    lines: list[OrderLine]
    shipping_address: str | None = None
    status: OrderStatus = OrderStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    notes: str | None = None
    shipped_at: datetime | None = None
    delivered_at: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        order_number: str,
        customer_id: int,
        lines: list[OrderLine],
        shipping_address: str | None = None,
        notes: str | None = None,
        created_at: datetime | None = None,
    ) -> Order:
        """Create a new order, enforcing all invariants."""
        if not order_number:
            raise ValidationError("Order number is required")
        if not lines:
            raise ValidationError("Order must contain at least one line")

        order = Order(
            id=None,
            order_number=order_number,
            customer_id=customer_id,
            lines=list(lines),
            shipping_address=shipping_address,
            notes=notes,
        )
        if created_at is not None:
            order.created_at = created_at
        return order

    # --- State transitions ----------------------------------------------------

    def needs_stock_restoration(self, new_status: OrderStatus) -> bool:
        """True when moving to *new_status* must hand the stock back."""
        return new_status == OrderStatus.CANCELLED and self.status != OrderStatus.CANCELLED

    def update_status(self, new_status: OrderStatus, at: datetime) -> None:
        """Move to *new_status*, stamping SHIPPED/DELIVERED milestones once.

        Stock restoration for a cancellation must happen *before* calling
        this (coordinated by the application handler via the ledger).
        """
        if self.status == OrderStatus.CANCELLED and new_status != OrderStatus.CANCELLED:
            raise InvalidTransitionError(
                f"Order {self.order_number} is cancelled and cannot move to "
                f"{new_status.value}"
            )

        self.status = new_status

        if new_status == OrderStatus.SHIPPED and self.shipped_at is None:
            self.shipped_at = at
        elif new_status == OrderStatus.DELIVERED and self.delivered_at is None:
            self.delivered_at = at

    def ensure_cancellable(self) -> None:
        if self.status == OrderStatus.DELIVERED:
            raise InvalidTransitionError(
                f"Cannot cancel order {self.order_number}: it has already been delivered"
            )
        if self.status == OrderStatus.CANCELLED:
            raise InvalidTransitionError(
                f"Order {self.order_number} is already cancelled"
            )

    def cancel(self, reason: str | None = None) -> None:
        """Transition any non-terminal status -> CANCELLED and refund.

        Stock restoration must happen *before* calling this.
        """
        self.ensure_cancellable()
        self.status = OrderStatus.CANCELLED
        self.payment_status = PaymentStatus.REFUNDED
        if reason and reason.strip():
            self.append_note(f"Cancellation: {reason.strip()}")

    def update_payment_status(self, payment_status: PaymentStatus) -> None:
        """Record a payment outcome; a payment on a PENDING order confirms it."""
        self.payment_status = payment_status
        if payment_status == PaymentStatus.PAID and self.status == OrderStatus.PENDING:
            self.status = OrderStatus.CONFIRMED

    def append_note(self, text: str) -> None:
        self.notes = f"{self.notes}\n{text}" if self.notes else text

    # --- Computed properties --------------------------------------------------

    @property
    def total_amount(self) -> Money:
        return Money.total(line.subtotal for line in self.lines)

    @property
    def item_count(self) -> int:
        return sum(line.quantity.value for line in self.lines)
