"""Application service: Update Payment Status use case."""

from __future__ import annotations

import structlog

from bookstore.application.dto import OrderDTO, to_order_dto
from bookstore.domain.exceptions import OrderNotFoundError
from bookstore.domain.model.order import PaymentStatus
from bookstore.domain.repository.unit_of_work import AbstractUnitOfWork

logger = structlog.get_logger(__name__)


class UpdatePaymentStatusHandler:

    def __init__(self, uow: AbstractUnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int, payment_status: PaymentStatus) -> OrderDTO:
        """Record a payment outcome; PAID confirms a PENDING order."""
        with self._uow as uow:
            order = uow.orders.get_by_id(order_id)
            if order is None:
                raise OrderNotFoundError(f"Order #{order_id} not found")

            order.update_payment_status(payment_status)

            uow.orders.save(order)
            uow.commit()

        logger.info(
            "Payment status updated",
            order_number=order.order_number,
            payment_status=payment_status.value,
            status=order.status.value,
        )
        return to_order_dto(order)
