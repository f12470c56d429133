"""DailyOffer aggregate — time-boxed promotions with an optional sale cap.

An offer promotes at most one item: a single book or a pack.  That choice
is a tagged variant (``PromotedBook`` / ``PromotedPack``), so an offer can
never point at both.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Union

from bookstore.domain.exceptions import ValidationError
from bookstore.domain.model.value_objects import Money


@dataclass(frozen=True)
class PromotedBook:
    book_id: int


@dataclass(frozen=True)
class PromotedPack:
    pack_id: int


PromotedItem = Union[PromotedBook, PromotedPack]


def calculate_discount_percentage(
    original_price: Money | None,
    offer_price: Money | None,
) -> int | None:
    """Whole-number discount, rounded half-up.

    Returns None when either price is missing or the original is zero.
    """
    if original_price is None or offer_price is None or original_price.is_zero:
        return None
    ratio = (original_price.amount - offer_price.amount) / original_price.amount
    return int((ratio * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


@dataclass
class DailyOffer:
    """Aggregate root for promotional offers.

    Invariants:
    - ``sold_quantity`` never decreases
    - ``sold_quantity <= limit_quantity`` whenever a limit is set
    """

    id: int | None
    title: str
    description: str
    original_price: Money
    offer_price: Money
    start_date: date
    end_date: date
    is_active: bool = True
    promoted_item: PromotedItem | None = None
    limit_quantity: int | None = None
    sold_quantity: int = 0
    discount_percentage: int | None = None
    image_url: str | None = None

    @staticmethod
    def create(
        title: str,
        description: str,
        original_price: Money,
        offer_price: Money,
        start_date: date,
        end_date: date,
        promoted_item: PromotedItem | None = None,
        limit_quantity: int | None = None,
        image_url: str | None = None,
    ) -> DailyOffer:
        offer = DailyOffer(
            id=None,
            title="",
            description="",
            original_price=original_price,
            offer_price=offer_price,
            start_date=start_date,
            end_date=end_date,
        )
        offer.revise(
            title=title,
            description=description,
            original_price=original_price,
            offer_price=offer_price,
            start_date=start_date,
            end_date=end_date,
            promoted_item=promoted_item,
            limit_quantity=limit_quantity,
            image_url=image_url,
            is_active=True,
        )
        return offer

    # --- Mutations ------------------------------------------------------------

    def revise(
        self,
        title: str,
        description: str,
        original_price: Money,
        offer_price: Money,
        start_date: date,
        end_date: date,
        promoted_item: PromotedItem | None,
        limit_quantity: int | None,
        image_url: str | None,
        is_active: bool,
    ) -> None:
        """Replace the editable fields and recompute the discount.

        ``sold_quantity`` is history and is left untouched.
        """
        if not title or len(title.strip()) < 2:
            raise ValidationError("Offer title must contain at least 2 characters")
        if not description or not description.strip():
            raise ValidationError("Offer description is required")
        if original_price.is_zero or offer_price.is_zero:
            raise ValidationError("Offer prices must be greater than zero")
        if offer_price > original_price:
            raise ValidationError(
                f"Offer price {offer_price} exceeds original price {original_price}"
            )
        if end_date < start_date:
            raise ValidationError(
                f"Offer ends ({end_date}) before it starts ({start_date})"
            )
        if limit_quantity is not None and limit_quantity < 0:
            raise ValidationError("Limit quantity cannot be negative")
        if limit_quantity is not None and limit_quantity < self.sold_quantity:
            raise ValidationError(
                f"Limit quantity {limit_quantity} is below the {self.sold_quantity} already sold"
            )

        self.title = title.strip()
        self.description = description.strip()
        self.original_price = original_price
        self.offer_price = offer_price
        self.start_date = start_date
        self.end_date = end_date
        self.promoted_item = promoted_item
        self.limit_quantity = limit_quantity
        self.image_url = image_url
        self.is_active = is_active
        self.discount_percentage = calculate_discount_percentage(
            original_price, offer_price
        )

    def deactivate(self) -> None:
        self.is_active = False

    # --- Queries --------------------------------------------------------------

    def is_valid_on(self, today: date) -> bool:
        return (
            self.is_active
            and self.start_date <= today <= self.end_date
            and (self.limit_quantity is None or self.sold_quantity < self.limit_quantity)
        )

    def would_exceed_limit(self, quantity: int) -> bool:
        return (
            self.limit_quantity is not None
            and self.sold_quantity + quantity > self.limit_quantity
        )

    @property
    def remaining_quantity(self) -> int | None:
        if self.limit_quantity is None:
            return None
        return self.limit_quantity - self.sold_quantity
