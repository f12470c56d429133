"""Application service: Create Order use case (the order builder).

Turns a list of (book, quantity) requests into a PENDING order.  Stock for
every line is reserved through the Inventory Ledger inside one unit of
work, so the order is all-or-nothing: if any line fails, reservations
already made for earlier lines are rolled back with it.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable

import structlog

from bookstore.application.dto import OrderDTO, OrderItemSpec, to_order_dto
from bookstore.domain.clock import utc_now
from bookstore.domain.exceptions import (
    CustomerNotFoundError,
    DuplicateOrderNumberError,
    ValidationError,
)
from bookstore.domain.model.customer import Customer
from bookstore.domain.model.order import Order, OrderLine
from bookstore.domain.model.value_objects import Quantity
from bookstore.domain.repository.unit_of_work import AbstractUnitOfWork
from bookstore.domain.service.inventory_ledger import InventoryLedger
from bookstore.domain.service.order_number import OrderNumberGenerator

logger = structlog.get_logger(__name__)

# Total attempts at persisting an order before a number collision is fatal.
MAX_ORDER_NUMBER_ATTEMPTS = 3


class CreateOrderHandler:

    def __init__(
        self,
        uow: AbstractUnitOfWork,
        numbers: OrderNumberGenerator | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._uow = uow
        self._clock = clock
        self._numbers = numbers or OrderNumberGenerator(clock=clock)

    def handle(
        self,
        customer_id: int,
        item_specs: list[OrderItemSpec],
        shipping_address: str | None = None,
        notes: str | None = None,
    ) -> OrderDTO:
        """Create a new order for an existing customer."""
        with self._uow as uow:
            customer = uow.customers.get_by_id(customer_id)
            if customer is None:
                raise CustomerNotFoundError(f"Customer #{customer_id} not found")

            order = self.place_order(uow, customer, item_specs, shipping_address, notes)
            uow.commit()

        return to_order_dto(order)

    def place_order(
        self,
        uow: AbstractUnitOfWork,
        customer: Customer,
        item_specs: list[OrderItemSpec],
        shipping_address: str | None = None,
        notes: str | None = None,
    ) -> Order:
        """Build and persist an order inside *uow* without committing.

        Steps:
        1. Draw an order number.
        2. Reserve stock line by line, in request order.
        3. Snapshot each book's price, title and author onto its line.
        4. Persist the order, redrawing the number on a collision.
        """
        if not item_specs:
            raise ValidationError("Order must contain at least one item")
        for spec in item_specs:
            Quantity(spec.quantity)

        logger.info(
            "Creating order",
            customer_id=customer.id,
            line_count=len(item_specs),
        )

        order_number = self._numbers.next_number()

        ledger = InventoryLedger(uow.books)
        lines: list[OrderLine] = []
        for spec in item_specs:
            book = ledger.check_and_reserve(spec.book_id, spec.quantity)
            lines.append(OrderLine.snapshot(book, spec.quantity))  # <-- price snapshot

        order = Order.create(
            order_number=order_number,
            customer_id=customer.id,  # type: ignore[arg-type]
            lines=lines,
            shipping_address=shipping_address or customer.address,
            notes=notes,
            created_at=self._clock(),
        )
        self._save_new(uow, order)

        logger.info(
            "Order created",
            order_id=order.id,
            order_number=order.order_number,
            total=str(order.total_amount),
        )
        return order

    def _save_new(self, uow: AbstractUnitOfWork, order: Order) -> None:
        for attempt in range(1, MAX_ORDER_NUMBER_ATTEMPTS + 1):
            try:
                uow.orders.save(order)
                return
            except DuplicateOrderNumberError:
                if attempt == MAX_ORDER_NUMBER_ATTEMPTS:
                    raise
                logger.warning(
                    "Order number collision, drawing a new one",
                    order_number=order.order_number,
                    attempt=attempt,
                )
                order.order_number = self._numbers.next_number()
