"""Application service: Create Daily Offer use case."""

from __future__ import annotations

from datetime import date
from typing import Callable

import structlog

from bookstore.application.dto import DailyOfferDTO, OfferSpec, to_offer_dto
from bookstore.domain.clock import today
from bookstore.domain.exceptions import BookNotFoundError, ValidationError
from bookstore.domain.model.daily_offer import (
    DailyOffer,
    PromotedBook,
    PromotedItem,
    PromotedPack,
)
from bookstore.domain.model.value_objects import Money
from bookstore.domain.repository.book_repository import BookRepository
from bookstore.domain.repository.unit_of_work import AbstractUnitOfWork

logger = structlog.get_logger(__name__)


def resolve_promoted_item(spec: OfferSpec, books: BookRepository) -> PromotedItem | None:
    """Turn the requested book/pack IDs into a single promoted item."""
    if spec.book_id is not None and spec.pack_id is not None:
        raise ValidationError("An offer can promote a book or a pack, not both")
    if spec.book_id is not None:
        if books.get_by_id(spec.book_id) is None:
            raise BookNotFoundError(f"Book #{spec.book_id} not found")
        return PromotedBook(spec.book_id)
    if spec.pack_id is not None:
        return PromotedPack(spec.pack_id)
    return None


class CreateDailyOfferHandler:

    def __init__(
        self,
        uow: AbstractUnitOfWork,
        clock: Callable[[], date] = today,
    ) -> None:
        self._uow = uow
        self._today = clock

    def handle(self, spec: OfferSpec) -> DailyOfferDTO:
        """Create an active offer with nothing sold and its discount computed."""
        logger.info("Creating daily offer", title=spec.title)

        with self._uow as uow:
            offer = DailyOffer.create(
                title=spec.title,
                description=spec.description,
                original_price=Money.of(spec.original_price),
                offer_price=Money.of(spec.offer_price),
                start_date=spec.start_date,
                end_date=spec.end_date,
                promoted_item=resolve_promoted_item(spec, uow.books),
                limit_quantity=spec.limit_quantity,
                image_url=spec.image_url,
            )
            if not spec.is_active:
                offer.deactivate()
            uow.offers.save(offer)
            uow.commit()

        logger.info(
            "Daily offer created",
            offer_id=offer.id,
            discount_percentage=offer.discount_percentage,
        )
        return to_offer_dto(offer, self._today())
