"""Application service: Show Daily Offer use case (query)."""

from __future__ import annotations

from datetime import date
from typing import Callable

from bookstore.application.dto import DailyOfferDTO, to_offer_dto
from bookstore.domain.clock import today
from bookstore.domain.repository.unit_of_work import AbstractUnitOfWork
from bookstore.domain.service.offer_quota_tracker import OfferQuotaTracker


class ShowDailyOfferHandler:

    def __init__(
        self,
        uow: AbstractUnitOfWork,
        clock: Callable[[], date] = today,
    ) -> None:
        self._uow = uow
        self._today = clock

    def handle(self, offer_id: int) -> DailyOfferDTO:
        with self._uow as uow:
            offer = OfferQuotaTracker(uow.offers).get(offer_id)
            return to_offer_dto(offer, self._today())

    def is_valid(self, offer_id: int) -> bool:
        with self._uow as uow:
            offer = OfferQuotaTracker(uow.offers).get(offer_id)
            return OfferQuotaTracker.is_valid(offer, self._today())
