"""Application service: Update Order Status use case.

Drives the order lifecycle.  Moving into CANCELLED from any other status
hands the stock back first; repeating CANCELLED does not restore twice.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable

import structlog

from bookstore.application.dto import OrderDTO, to_order_dto
from bookstore.domain.clock import utc_now
from bookstore.domain.exceptions import OrderNotFoundError
from bookstore.domain.model.order import OrderStatus
from bookstore.domain.repository.unit_of_work import AbstractUnitOfWork
from bookstore.domain.service.inventory_ledger import InventoryLedger

logger = structlog.get_logger(__name__)


class UpdateOrderStatusHandler:

    def __init__(
        self,
        uow: AbstractUnitOfWork,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._uow = uow
        self._clock = clock

    def handle(self, order_id: int, new_status: OrderStatus) -> OrderDTO:
        with self._uow as uow:
            order = uow.orders.get_by_id(order_id)
            if order is None:
                raise OrderNotFoundError(f"Order #{order_id} not found")

            old_status = order.status
            if order.needs_stock_restoration(new_status):
                InventoryLedger(uow.books).restore_for_order(order)

            order.update_status(new_status, at=self._clock())

            uow.orders.save(order)
            uow.commit()

        logger.info(
            "Order status updated",
            order_number=order.order_number,
            old_status=old_status.value,
            new_status=new_status.value,
        )
        return to_order_dto(order)
