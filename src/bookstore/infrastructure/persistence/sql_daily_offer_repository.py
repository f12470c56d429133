"""SQLAlchemy-backed implementation of DailyOfferRepository."""

from __future__ import annotations

from datetime import date

from sqlalchemy import or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bookstore.domain.exceptions import OfferNotFoundError, ValidationError
from bookstore.domain.model.daily_offer import DailyOffer, PromotedBook, PromotedPack
from bookstore.domain.model.value_objects import Money
from bookstore.domain.repository.daily_offer_repository import DailyOfferRepository
from bookstore.infrastructure.persistence.tables import DailyOfferRow

_offers = DailyOfferRow.__table__


class SqlDailyOfferRepository(DailyOfferRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- DailyOfferRepository interface ---------------------------------------

    def get_by_id(self, offer_id: int) -> DailyOffer | None:
        row = self._session.get(DailyOfferRow, offer_id, populate_existing=True)
        return self._to_domain(row) if row is not None else None

    def save(self, offer: DailyOffer) -> None:
        if offer.id is None:
            row = DailyOfferRow(sold_quantity=offer.sold_quantity)
            self._session.add(row)
        else:
            row = self._session.get(DailyOfferRow, offer.id, populate_existing=True)
            if row is None:
                raise OfferNotFoundError(f"Daily offer #{offer.id} not found")

        self._apply(row, offer)
        try:
            self._session.flush()
        except IntegrityError as exc:
            # Sales recorded after the offer was loaded can push sold past a new limit.
            if "ck_daily_offers_within_limit" in str(exc.orig):
                raise ValidationError(
                    f"Limit quantity {offer.limit_quantity} is below the quantity already sold"
                ) from exc
            raise
        offer.id = row.id

    def list_all(self) -> list[DailyOffer]:
        return self._all(select(DailyOfferRow).order_by(DailyOfferRow.id.desc()))

    def list_active(self) -> list[DailyOffer]:
        return self._all(
            select(DailyOfferRow)
            .where(DailyOfferRow.is_active.is_(True))
            .order_by(DailyOfferRow.id.desc())
        )

    def list_current_valid(self, today: date) -> list[DailyOffer]:
        return self._all(
            select(DailyOfferRow)
            .where(*self._valid_on(today))
            .order_by(DailyOfferRow.id.desc())
        )

    def list_by_book(self, book_id: int) -> list[DailyOffer]:
        return self._all(
            select(DailyOfferRow)
            .where(DailyOfferRow.book_id == book_id, DailyOfferRow.is_active.is_(True))
            .order_by(DailyOfferRow.id.desc())
        )

    def list_by_pack(self, pack_id: int) -> list[DailyOffer]:
        return self._all(
            select(DailyOfferRow)
            .where(DailyOfferRow.pack_id == pack_id, DailyOfferRow.is_active.is_(True))
            .order_by(DailyOfferRow.id.desc())
        )

    def increment_sold(self, offer_id: int, quantity: int, today: date) -> bool:
        result = self._session.execute(
            update(_offers)
            .where(
                _offers.c.id == offer_id,
                _offers.c.is_active.is_(True),
                _offers.c.start_date <= today,
                _offers.c.end_date >= today,
                or_(
                    _offers.c.limit_quantity.is_(None),
                    _offers.c.sold_quantity + quantity <= _offers.c.limit_quantity,
                ),
            )
            .values(sold_quantity=_offers.c.sold_quantity + quantity)
        )
        return result.rowcount == 1

    # --- Helpers --------------------------------------------------------------

    @staticmethod
    def _valid_on(today: date) -> tuple:
        return (
            DailyOfferRow.is_active.is_(True),
            DailyOfferRow.start_date <= today,
            DailyOfferRow.end_date >= today,
            or_(
                DailyOfferRow.limit_quantity.is_(None),
                DailyOfferRow.sold_quantity < DailyOfferRow.limit_quantity,
            ),
        )

    def _all(self, stmt) -> list[DailyOffer]:
        rows = self._session.scalars(stmt.execution_options(populate_existing=True))
        return [self._to_domain(row) for row in rows]

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _apply(row: DailyOfferRow, offer: DailyOffer) -> None:
        # sold_quantity is only ever moved by increment_sold.
        row.title = offer.title
        row.description = offer.description
        row.original_price = offer.original_price.amount
        row.offer_price = offer.offer_price.amount
        row.currency = offer.original_price.currency
        row.discount_percentage = offer.discount_percentage
        row.image_url = offer.image_url
        row.start_date = offer.start_date
        row.end_date = offer.end_date
        row.is_active = offer.is_active
        row.limit_quantity = offer.limit_quantity

        item = offer.promoted_item
        row.book_id = item.book_id if isinstance(item, PromotedBook) else None
        row.pack_id = item.pack_id if isinstance(item, PromotedPack) else None

    @staticmethod
    def _to_domain(row: DailyOfferRow) -> DailyOffer:
        if row.book_id is not None:
            item = PromotedBook(row.book_id)
        elif row.pack_id is not None:
            item = PromotedPack(row.pack_id)
        else:
            item = None

        return DailyOffer(
            id=row.id,
            title=row.title,
            description=row.description,
            original_price=Money.of(row.original_price, row.currency),
            offer_price=Money.of(row.offer_price, row.currency),
            start_date=row.start_date,
            end_date=row.end_date,
            is_active=row.is_active,
            promoted_item=item,
            limit_quantity=row.limit_quantity,
            sold_quantity=row.sold_quantity,
            discount_percentage=row.discount_percentage,
            image_url=row.image_url,
        )
