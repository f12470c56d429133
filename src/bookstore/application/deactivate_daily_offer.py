"""Application service: Deactivate Daily Offer use case.

Offers are never deleted; switching them off keeps their sales history.
"""

from __future__ import annotations

import structlog

from bookstore.domain.exceptions import OfferNotFoundError
from bookstore.domain.repository.unit_of_work import AbstractUnitOfWork

logger = structlog.get_logger(__name__)


class DeactivateDailyOfferHandler:

    def __init__(self, uow: AbstractUnitOfWork) -> None:
        self._uow = uow

    def handle(self, offer_id: int) -> None:
        with self._uow as uow:
            offer = uow.offers.get_by_id(offer_id)
            if offer is None:
                raise OfferNotFoundError(f"Daily offer #{offer_id} not found")

            offer.deactivate()
            uow.offers.save(offer)
            uow.commit()

        logger.info("Daily offer deactivated", offer_id=offer_id)
