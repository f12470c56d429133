"""Application service: order listings (queries)."""

from __future__ import annotations

from datetime import datetime

from bookstore.application.dto import OrderDTO, to_order_dto
from bookstore.domain.exceptions import CustomerNotFoundError, ValidationError
from bookstore.domain.model.order import OrderStatus, PaymentStatus
from bookstore.domain.repository.unit_of_work import AbstractUnitOfWork

DEFAULT_RECENT_LIMIT = 10


class ListOrdersHandler:

    def __init__(self, uow: AbstractUnitOfWork) -> None:
        self._uow = uow

    def by_status(self, status: OrderStatus) -> list[OrderDTO]:
        with self._uow as uow:
            return [to_order_dto(o) for o in uow.orders.list_by_status(status)]

    def by_payment_status(self, payment_status: PaymentStatus) -> list[OrderDTO]:
        with self._uow as uow:
            return [to_order_dto(o) for o in uow.orders.list_by_payment_status(payment_status)]

    def by_customer(self, customer_id: int) -> list[OrderDTO]:
        with self._uow as uow:
            if uow.customers.get_by_id(customer_id) is None:
                raise CustomerNotFoundError(f"Customer #{customer_id} not found")
            return [to_order_dto(o) for o in uow.orders.list_by_customer(customer_id)]

    def pending(self) -> list[OrderDTO]:
        """Orders still waiting to be processed (PENDING or CONFIRMED)."""
        with self._uow as uow:
            return [to_order_dto(o) for o in uow.orders.list_pending()]

    def recent(self, limit: int = DEFAULT_RECENT_LIMIT) -> list[OrderDTO]:
        if limit <= 0:
            raise ValidationError("Limit must be positive")
        with self._uow as uow:
            return [to_order_dto(o) for o in uow.orders.list_recent(limit)]

    def between(self, start: datetime, end: datetime) -> list[OrderDTO]:
        if end < start:
            raise ValidationError("End of the date range is before its start")
        with self._uow as uow:
            return [to_order_dto(o) for o in uow.orders.list_by_date_range(start, end)]

    def search(self, keyword: str) -> list[OrderDTO]:
        """Orders whose number or customer name contains *keyword*."""
        keyword = (keyword or "").strip()
        if not keyword:
            raise ValidationError("Search keyword is required")
        with self._uow as uow:
            return [to_order_dto(o) for o in uow.orders.search(keyword)]
