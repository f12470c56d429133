"""SQLAlchemy-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import String, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bookstore.domain.exceptions import DuplicateOrderNumberError, OrderNotFoundError
from bookstore.domain.model.order import (
    OPEN_STATUSES,
    Order,
    OrderLine,
    OrderStatus,
    PaymentStatus,
)
from bookstore.domain.model.value_objects import Money, Quantity
from bookstore.domain.repository.order_repository import OrderRepository
from bookstore.infrastructure.persistence.database import as_utc, to_naive_utc
from bookstore.infrastructure.persistence.tables import CustomerRow, OrderLineRow, OrderRow


class SqlOrderRepository(OrderRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: int) -> Order | None:
        row = self._session.get(OrderRow, order_id, populate_existing=True)
        return self._to_domain(row) if row is not None else None

    def get_by_order_number(self, order_number: str) -> Order | None:
        return self._first(select(OrderRow).where(OrderRow.order_number == order_number))

    def save(self, order: Order) -> None:
        if order.id is None:
            self._insert(order)
            return

        row = self._session.get(OrderRow, order.id, populate_existing=True)
        if row is None:
            raise OrderNotFoundError(f"Order #{order.id} not found")

        # Lines and customer are fixed at creation; only lifecycle fields move.
        row.status = order.status.value
        row.payment_status = order.payment_status.value
        row.shipping_address = order.shipping_address
        row.notes = order.notes
        row.shipped_at = to_naive_utc(order.shipped_at)
        row.delivered_at = to_naive_utc(order.delivered_at)
        self._session.flush()

    def list_by_status(self, status: OrderStatus) -> list[Order]:
        return self._all(
            select(OrderRow)
            .where(OrderRow.status == status.value)
            .order_by(OrderRow.created_at.desc(), OrderRow.id.desc())
        )

    def list_by_payment_status(self, payment_status: PaymentStatus) -> list[Order]:
        return self._all(
            select(OrderRow)
            .where(OrderRow.payment_status == payment_status.value)
            .order_by(OrderRow.created_at.desc(), OrderRow.id.desc())
        )

    def list_by_customer(self, customer_id: int) -> list[Order]:
        return self._all(
            select(OrderRow)
            .where(OrderRow.customer_id == customer_id)
            .order_by(OrderRow.created_at.desc(), OrderRow.id.desc())
        )

    def list_by_date_range(self, start: datetime, end: datetime) -> list[Order]:
        return self._all(
            select(OrderRow)
            .where(OrderRow.created_at.between(to_naive_utc(start), to_naive_utc(end)))
            .order_by(OrderRow.created_at.desc(), OrderRow.id.desc())
        )

    def list_pending(self) -> list[Order]:
        return self._all(
            select(OrderRow)
            .where(OrderRow.status.in_([s.value for s in OPEN_STATUSES]))
            .order_by(OrderRow.created_at, OrderRow.id)
        )

    def list_recent(self, limit: int) -> list[Order]:
        return self._all(
            select(OrderRow)
            .order_by(OrderRow.created_at.desc(), OrderRow.id.desc())
            .limit(limit)
        )

    def search(self, keyword: str) -> list[Order]:
        needle = keyword.lower()
        full_name = CustomerRow.first_name + " " + CustomerRow.last_name
        return self._all(
            select(OrderRow)
            .join(CustomerRow, CustomerRow.id == OrderRow.customer_id)
            .where(
                or_(
                    func.lower(OrderRow.order_number, type_=String).contains(needle, autoescape=True),
                    func.lower(full_name, type_=String).contains(needle, autoescape=True),
                )
            )
            .order_by(OrderRow.created_at.desc(), OrderRow.id.desc())
        )

    # --- Helpers --------------------------------------------------------------

    def _insert(self, order: Order) -> None:
        row = self._to_row(order)
        try:
            # A savepoint keeps the surrounding unit of work (and its stock
            # reservations) usable when the unique constraint fires.
            with self._session.begin_nested():
                self._session.add(row)
        except IntegrityError as exc:
            if "order_number" in str(exc.orig):
                raise DuplicateOrderNumberError(order.order_number) from exc
            raise
        order.id = row.id

    def _first(self, stmt) -> Order | None:
        row = self._session.scalars(
            stmt.execution_options(populate_existing=True)
        ).first()
        return self._to_domain(row) if row is not None else None

    def _all(self, stmt) -> list[Order]:
        rows = self._session.scalars(stmt.execution_options(populate_existing=True))
        return [self._to_domain(row) for row in rows]

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_row(order: Order) -> OrderRow:
        return OrderRow(
            order_number=order.order_number,
            customer_id=order.customer_id,
            status=order.status.value,
            payment_status=order.payment_status.value,
            shipping_address=order.shipping_address,
            notes=order.notes,
            created_at=to_naive_utc(order.created_at),
            shipped_at=to_naive_utc(order.shipped_at),
            delivered_at=to_naive_utc(order.delivered_at),
            lines=[
                OrderLineRow(
                    position=position,
                    book_id=line.book_id,
                    book_title=line.book_title,
                    book_author=line.book_author,
                    quantity=line.quantity.value,
                    price=line.price.amount,
                    currency=line.price.currency,
                )
                for position, line in enumerate(order.lines)
            ],
        )

    @staticmethod
    def _to_domain(row: OrderRow) -> Order:
        lines = [
            OrderLine(
                book_id=line.book_id,
                book_title=line.book_title,
                book_author=line.book_author,
                quantity=Quantity(line.quantity),
                price=Money.of(line.price, line.currency),
            )
            for line in row.lines
        ]
        return Order(
            id=row.id,
            order_number=row.order_number,
            customer_id=row.customer_id,
            lines=lines,
            shipping_address=row.shipping_address,
            status=OrderStatus(row.status),
            payment_status=PaymentStatus(row.payment_status),
            notes=row.notes,
            shipped_at=as_utc(row.shipped_at),
            delivered_at=as_utc(row.delivered_at),
            created_at=as_utc(row.created_at),
        )
