"""Domain service: Daily Offer Quota Tracker.

Enforces an offer's validity window and its sale ceiling.  The checks run
against a freshly loaded offer to produce precise error messages, but the
increment itself is the repository's conditional update, which re-checks
the same rules in one statement so that concurrent sales can never push
``sold_quantity`` past ``limit_quantity``.
"""

from __future__ import annotations

from datetime import date

import structlog

from bookstore.domain.exceptions import (
    OfferNotFoundError,
    OfferNotValidError,
    QuotaExceededError,
    ValidationError,
)
from bookstore.domain.model.daily_offer import DailyOffer
from bookstore.domain.repository.daily_offer_repository import DailyOfferRepository

logger = structlog.get_logger(__name__)


class OfferQuotaTracker:

    def __init__(self, offer_repo: DailyOfferRepository) -> None:
        self._offer_repo = offer_repo

    @staticmethod
    def is_valid(offer: DailyOffer, today: date) -> bool:
        return offer.is_valid_on(today)

    def get(self, offer_id: int) -> DailyOffer:
        offer = self._offer_repo.get_by_id(offer_id)
        if offer is None:
            raise OfferNotFoundError(f"Daily offer #{offer_id} not found")
        return offer

    def record_sale(self, offer_id: int, quantity: int, today: date) -> DailyOffer:
        """Count *quantity* units sold under the offer and return it updated."""
        if quantity <= 0:
            raise ValidationError("Sale quantity must be positive")

        offer = self.get(offer_id)
        self._check(offer, quantity, today)

        if not self._offer_repo.increment_sold(offer_id, quantity, today):
            # Lost a race with a concurrent sale: report against fresh state.
            offer = self.get(offer_id)
            self._check(offer, quantity, today)
            raise QuotaExceededError(
                f"Offer '{offer.title}' could not record {quantity} more sale(s)"
            )

        updated = self.get(offer_id)
        logger.info(
            "Offer sale recorded",
            offer_id=offer_id,
            quantity=quantity,
            sold_quantity=updated.sold_quantity,
            limit_quantity=updated.limit_quantity,
        )
        return updated

    def _check(self, offer: DailyOffer, quantity: int, today: date) -> None:
        if not self.is_valid(offer, today):
            raise OfferNotValidError(f"Offer '{offer.title}' is no longer valid")
        if offer.would_exceed_limit(quantity):
            raise QuotaExceededError(
                f"Requested quantity {quantity} exceeds what is left on offer "
                f"'{offer.title}' ({offer.remaining_quantity} of "
                f"{offer.limit_quantity} remaining)"
            )
