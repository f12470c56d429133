"""Application service: sales statistics over a period (query).

Revenue ignores cancelled orders; the average divides that revenue by
every order placed in the period, cancelled ones included.
"""

from __future__ import annotations

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

from bookstore.application.dto import OrderStatisticsDTO
from bookstore.domain.exceptions import ValidationError
from bookstore.domain.model.order import OrderStatus
from bookstore.domain.model.value_objects import CENTS, Money
from bookstore.domain.repository.unit_of_work import AbstractUnitOfWork


class OrderStatisticsHandler:

    def __init__(self, uow: AbstractUnitOfWork) -> None:
        self._uow = uow

    def handle(self, start: datetime, end: datetime) -> OrderStatisticsDTO:
        if end < start:
            raise ValidationError("End of the date range is before its start")

        with self._uow as uow:
            orders = uow.orders.list_by_date_range(start, end)

        revenue = Money.total(
            o.total_amount for o in orders if o.status != OrderStatus.CANCELLED
        )

        total_orders = len(orders)
        completed = sum(1 for o in orders if o.status == OrderStatus.DELIVERED)

        if total_orders:
            average = Money(
                (revenue.amount / Decimal(total_orders)).quantize(
                    CENTS, rounding=ROUND_HALF_UP
                )
            )
        else:
            average = Money.zero()

        return OrderStatisticsDTO(
            total_orders=total_orders,
            completed_orders=completed,
            total_revenue=str(revenue),
            average_order_value=str(average),
        )
