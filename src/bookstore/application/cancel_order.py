"""Application service: Cancel Order use case.

Returns every line's quantity to stock, then cancels and refunds the
order.  Delivered and already-cancelled orders are rejected before any
stock moves.
"""

from __future__ import annotations

import structlog

from bookstore.application.dto import OrderDTO, to_order_dto
from bookstore.domain.exceptions import OrderNotFoundError
from bookstore.domain.repository.unit_of_work import AbstractUnitOfWork
from bookstore.domain.service.inventory_ledger import InventoryLedger

logger = structlog.get_logger(__name__)


class CancelOrderHandler:

    def __init__(self, uow: AbstractUnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int, reason: str | None = None) -> OrderDTO:
        logger.info("Cancelling order", order_id=order_id)

        with self._uow as uow:
            order = uow.orders.get_by_id(order_id)
            if order is None:
                raise OrderNotFoundError(f"Order #{order_id} not found")

            order.ensure_cancellable()

            InventoryLedger(uow.books).restore_for_order(order)
            order.cancel(reason)

            uow.orders.save(order)
            uow.commit()

        logger.info("Order cancelled", order_number=order.order_number)
        return to_order_dto(order)
