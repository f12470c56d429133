"""Application service: daily offer listings (queries)."""

from __future__ import annotations

from datetime import date
from typing import Callable

from bookstore.application.dto import DailyOfferDTO, to_offer_dto
from bookstore.domain.clock import today
from bookstore.domain.model.daily_offer import DailyOffer
from bookstore.domain.repository.unit_of_work import AbstractUnitOfWork


class ListDailyOffersHandler:

    def __init__(
        self,
        uow: AbstractUnitOfWork,
        clock: Callable[[], date] = today,
    ) -> None:
        self._uow = uow
        self._today = clock

    def all(self) -> list[DailyOfferDTO]:
        with self._uow as uow:
            return self._to_dtos(uow.offers.list_all())

    def active(self) -> list[DailyOfferDTO]:
        with self._uow as uow:
            return self._to_dtos(uow.offers.list_active())

    def current(self) -> list[DailyOfferDTO]:
        """Offers a customer can buy today."""
        with self._uow as uow:
            return self._to_dtos(uow.offers.list_current_valid(self._today()))

    def for_book(self, book_id: int) -> list[DailyOfferDTO]:
        with self._uow as uow:
            return self._to_dtos(uow.offers.list_by_book(book_id))

    def for_pack(self, pack_id: int) -> list[DailyOfferDTO]:
        with self._uow as uow:
            return self._to_dtos(uow.offers.list_by_pack(pack_id))

    def _to_dtos(self, offers: list[DailyOffer]) -> list[DailyOfferDTO]:
        current_day = self._today()
        return [to_offer_dto(o, current_day) for o in offers]
