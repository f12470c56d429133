"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.  The ``to_*_dto``
helpers are the single place where aggregates are flattened.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from bookstore.domain.model.book import Book
from bookstore.domain.model.customer import Customer
from bookstore.domain.model.daily_offer import DailyOffer, PromotedBook, PromotedPack
from bookstore.domain.model.order import Order

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M UTC"


# --- Inputs -------------------------------------------------------------------


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: what the customer asked for (book ID + quantity)."""

    book_id: int
    quantity: int


@dataclass(frozen=True)
class CustomerDetails:
    """Input: customer data supplied at checkout or registration."""

    first_name: str
    last_name: str
    email: str
    phone_number: str
    address: str
    city: str | None = None
    postal_code: str | None = None
    country: str | None = None


@dataclass(frozen=True)
class OfferSpec:
    """Input: the editable fields of a daily offer.

    At most one of ``book_id`` / ``pack_id`` may be given.
    """

    title: str
    description: str
    original_price: str
    offer_price: str
    start_date: date
    end_date: date
    book_id: int | None = None
    pack_id: int | None = None
    limit_quantity: int | None = None
    image_url: str | None = None
    is_active: bool = True


# --- Outputs ------------------------------------------------------------------


@dataclass(frozen=True)
class OrderLineDTO:
    """Output: a single order line as displayed to the user."""

    book_id: int
    book_title: str
    book_author: str
    quantity: int
    price: str  # formatted, e.g. "$15.00"
    subtotal: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: int
    order_number: str
    customer_id: int
    status: str
    payment_status: str
    items: list[OrderLineDTO]
    total: str
    shipping_address: str | None
    notes: str | None
    created_at: str
    shipped_at: str | None
    delivered_at: str | None


@dataclass(frozen=True)
class BookDTO:
    id: int
    isbn: str
    title: str
    author: str
    price: str
    stock_quantity: int


@dataclass(frozen=True)
class CustomerDTO:
    id: int
    full_name: str
    email: str
    address: str


@dataclass(frozen=True)
class DailyOfferDTO:
    id: int
    title: str
    description: str
    original_price: str
    offer_price: str
    discount_percentage: int | None
    start_date: str
    end_date: str
    is_active: bool
    promoted: str | None  # e.g. "book #3", "pack #1"
    limit_quantity: int | None
    sold_quantity: int
    is_valid: bool


@dataclass(frozen=True)
class OrderStatisticsDTO:
    total_orders: int
    completed_orders: int
    total_revenue: str
    average_order_value: str


# --- Mapping ------------------------------------------------------------------


def _fmt(ts: datetime | None) -> str | None:
    return ts.strftime(TIMESTAMP_FORMAT) if ts is not None else None


def to_order_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        order_number=order.order_number,
        customer_id=order.customer_id,
        status=order.status.value,
        payment_status=order.payment_status.value,
        items=[
            OrderLineDTO(
                book_id=line.book_id,
                book_title=line.book_title,
                book_author=line.book_author,
                quantity=line.quantity.value,
                price=str(line.price),
                subtotal=str(line.subtotal),
            )
            for line in order.lines
        ],
        total=str(order.total_amount),
        shipping_address=order.shipping_address,
        notes=order.notes,
        created_at=order.created_at.strftime(TIMESTAMP_FORMAT),
        shipped_at=_fmt(order.shipped_at),
        delivered_at=_fmt(order.delivered_at),
    )


def to_book_dto(book: Book) -> BookDTO:
    return BookDTO(
        id=book.id,  # type: ignore[arg-type]
        isbn=book.isbn,
        title=book.title,
        author=book.author,
        price=str(book.price),
        stock_quantity=book.stock_quantity,
    )


def to_customer_dto(customer: Customer) -> CustomerDTO:
    return CustomerDTO(
        id=customer.id,  # type: ignore[arg-type]
        full_name=customer.full_name,
        email=customer.email,
        address=customer.address,
    )


def to_offer_dto(offer: DailyOffer, today: date) -> DailyOfferDTO:
    item = offer.promoted_item
    if isinstance(item, PromotedBook):
        promoted = f"book #{item.book_id}"
    elif isinstance(item, PromotedPack):
        promoted = f"pack #{item.pack_id}"
    else:
        promoted = None

    return DailyOfferDTO(
        id=offer.id,  # type: ignore[arg-type]
        title=offer.title,
        description=offer.description,
        original_price=str(offer.original_price),
        offer_price=str(offer.offer_price),
        discount_percentage=offer.discount_percentage,
        start_date=offer.start_date.isoformat(),
        end_date=offer.end_date.isoformat(),
        is_active=offer.is_active,
        promoted=promoted,
        limit_quantity=offer.limit_quantity,
        sold_quantity=offer.sold_quantity,
        is_valid=offer.is_valid_on(today),
    )
