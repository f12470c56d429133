"""Application service: Record Offer Sale use case."""

from __future__ import annotations

from datetime import date
from typing import Callable

from bookstore.application.dto import DailyOfferDTO, to_offer_dto
from bookstore.domain.clock import today
from bookstore.domain.repository.unit_of_work import AbstractUnitOfWork
from bookstore.domain.service.offer_quota_tracker import OfferQuotaTracker


class RecordOfferSaleHandler:

    def __init__(
        self,
        uow: AbstractUnitOfWork,
        clock: Callable[[], date] = today,
    ) -> None:
        self._uow = uow
        self._today = clock

    def handle(self, offer_id: int, quantity: int) -> DailyOfferDTO:
        current_day = self._today()

        with self._uow as uow:
            offer = OfferQuotaTracker(uow.offers).record_sale(
                offer_id, quantity, current_day
            )
            uow.commit()

        return to_offer_dto(offer, current_day)
