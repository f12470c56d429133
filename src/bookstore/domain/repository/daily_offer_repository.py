"""Abstract repository for DailyOffer aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from bookstore.domain.model.daily_offer import DailyOffer


class DailyOfferRepository(ABC):

    @abstractmethod
    def get_by_id(self, offer_id: int) -> DailyOffer | None:
        """Return an offer by its ID, or None if not found."""

    @abstractmethod
    def save(self, offer: DailyOffer) -> None:
        """Persist a new or updated offer.

        ``sold_quantity`` is owned by ``increment_sold``; saving an existing
        offer must not overwrite it.
        """

    @abstractmethod
    def list_all(self) -> list[DailyOffer]:
        """Return every offer, active or not."""

    @abstractmethod
    def list_active(self) -> list[DailyOffer]:
        """Return offers flagged active, newest first."""

    @abstractmethod
    def list_current_valid(self, today: date) -> list[DailyOffer]:
        """Return active offers whose window covers *today* and that still
        have quota left."""

    @abstractmethod
    def list_by_book(self, book_id: int) -> list[DailyOffer]:
        """Return active offers promoting *book_id*."""

    @abstractmethod
    def list_by_pack(self, pack_id: int) -> list[DailyOffer]:
        """Return active offers promoting *pack_id*."""

    @abstractmethod
    def increment_sold(self, offer_id: int, quantity: int, today: date) -> bool:
        """Atomically add *quantity* to the sold counter.

        A single conditional update: succeeds only if the offer is active,
        *today* lies in its window and the limit (if any) still allows
        *quantity* more.  Returns False, changing nothing, otherwise.
        """
