"""Application service: Show Order use case (query)."""

from __future__ import annotations

from bookstore.application.dto import OrderDTO, to_order_dto
from bookstore.domain.exceptions import OrderNotFoundError
from bookstore.domain.repository.unit_of_work import AbstractUnitOfWork


class ShowOrderHandler:

    def __init__(self, uow: AbstractUnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int) -> OrderDTO:
        with self._uow as uow:
            order = uow.orders.get_by_id(order_id)
            if order is None:
                raise OrderNotFoundError(f"Order #{order_id} not found")
            return to_order_dto(order)

    def handle_by_number(self, order_number: str) -> OrderDTO:
        with self._uow as uow:
            order = uow.orders.get_by_order_number(order_number)
            if order is None:
                raise OrderNotFoundError(f"Order {order_number} not found")
            return to_order_dto(order)
