"""Application service: Update Daily Offer use case.

Replaces the editable fields and recomputes the discount.  The sold
counter is left alone.
"""

from __future__ import annotations

from datetime import date
from typing import Callable

import structlog

from bookstore.application.create_daily_offer import resolve_promoted_item
from bookstore.application.dto import DailyOfferDTO, OfferSpec, to_offer_dto
from bookstore.domain.clock import today
from bookstore.domain.exceptions import OfferNotFoundError
from bookstore.domain.model.value_objects import Money
from bookstore.domain.repository.unit_of_work import AbstractUnitOfWork

logger = structlog.get_logger(__name__)


class UpdateDailyOfferHandler:

    def __init__(
        self,
        uow: AbstractUnitOfWork,
        clock: Callable[[], date] = today,
    ) -> None:
        self._uow = uow
        self._today = clock

    def handle(self, offer_id: int, spec: OfferSpec) -> DailyOfferDTO:
        with self._uow as uow:
            offer = uow.offers.get_by_id(offer_id)
            if offer is None:
                raise OfferNotFoundError(f"Daily offer #{offer_id} not found")

            offer.revise(
                title=spec.title,
                description=spec.description,
                original_price=Money.of(spec.original_price),
                offer_price=Money.of(spec.offer_price),
                start_date=spec.start_date,
                end_date=spec.end_date,
                promoted_item=resolve_promoted_item(spec, uow.books),
                limit_quantity=spec.limit_quantity,
                image_url=spec.image_url,
                is_active=spec.is_active,
            )
            uow.offers.save(offer)
            uow.commit()

        logger.info("Daily offer updated", offer_id=offer_id)
        return to_offer_dto(offer, self._today())
