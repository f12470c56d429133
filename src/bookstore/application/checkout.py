"""Application service: Checkout use case.

A guest-friendly variant of order creation: the caller supplies customer
details instead of an ID.  The customer is looked up by e-mail (or
created) and the order is placed in the same unit of work, so a failed
order never leaves a half-registered customer behind.
"""

from __future__ import annotations

from bookstore.application.create_order import CreateOrderHandler
from bookstore.application.dto import (
    CustomerDetails,
    OrderDTO,
    OrderItemSpec,
    to_order_dto,
)
from bookstore.application.register_customer import find_or_create_customer
from bookstore.domain.repository.unit_of_work import AbstractUnitOfWork


class CheckoutHandler:

    def __init__(
        self,
        uow: AbstractUnitOfWork,
        order_builder: CreateOrderHandler | None = None,
    ) -> None:
        self._uow = uow
        self._order_builder = order_builder or CreateOrderHandler(uow)

    def handle(
        self,
        customer: CustomerDetails,
        item_specs: list[OrderItemSpec],
        shipping_address: str | None = None,
        notes: str | None = None,
    ) -> OrderDTO:
        with self._uow as uow:
            resolved = find_or_create_customer(uow.customers, customer)
            order = self._order_builder.place_order(
                uow, resolved, item_specs, shipping_address, notes
            )
            uow.commit()

        return to_order_dto(order)
