"""SQLAlchemy table mappings.

These rows are persistence details only; repositories translate them to
and from the domain dataclasses.  Order lines belong to their order
(``all, delete-orphan`` plus ``ON DELETE CASCADE``).  Line ``book_id`` is
deliberately not a foreign key: a line must survive its book being removed
from the catalog.
"""

from __future__ import annotations

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class BookRow(Base):
    __tablename__ = "books"
    __table_args__ = (
        CheckConstraint("stock_quantity >= 0", name="ck_books_stock_non_negative"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    isbn = Column(String(20), nullable=False, unique=True)
    title = Column(String(200), nullable=False)
    author = Column(String(100), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    currency = Column(String(3), nullable=False, default="USD")
    stock_quantity = Column(Integer, nullable=False, default=0)


class CustomerRow(Base):
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    phone_number = Column(String(20), nullable=False)
    address = Column(String(200), nullable=False)
    city = Column(String(50))
    postal_code = Column(String(20))
    country = Column(String(50))


class OrderRow(Base):
    __tablename__ = "orders"
    __table_args__ = (
        UniqueConstraint("order_number", name="uq_orders_order_number"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_number = Column(String(32), nullable=False)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False)
    status = Column(String(20), nullable=False, index=True)
    payment_status = Column(String(20), nullable=False)
    shipping_address = Column(String(200))
    notes = Column(Text)
    created_at = Column(DateTime, nullable=False, index=True)
    shipped_at = Column(DateTime)
    delivered_at = Column(DateTime)

    lines = relationship(
        "OrderLineRow",
        cascade="all, delete-orphan",
        order_by="OrderLineRow.position",
        lazy="selectin",
    )


class OrderLineRow(Base):
    __tablename__ = "order_lines"
    __table_args__ = (
        CheckConstraint("quantity >= 1", name="ck_order_lines_quantity_positive"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(
        Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False
    )
    position = Column(Integer, nullable=False)
    book_id = Column(Integer, nullable=False)
    book_title = Column(String(200), nullable=False)
    book_author = Column(String(100), nullable=False)
    quantity = Column(Integer, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    currency = Column(String(3), nullable=False, default="USD")


class DailyOfferRow(Base):
    __tablename__ = "daily_offers"
    __table_args__ = (
        CheckConstraint(
            "book_id IS NULL OR pack_id IS NULL",
            name="ck_daily_offers_single_promoted_item",
        ),
        CheckConstraint(
            "limit_quantity IS NULL OR sold_quantity <= limit_quantity",
            name="ck_daily_offers_within_limit",
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(150), nullable=False)
    description = Column(Text, nullable=False)
    original_price = Column(Numeric(10, 2), nullable=False)
    offer_price = Column(Numeric(10, 2), nullable=False)
    currency = Column(String(3), nullable=False, default="USD")
    discount_percentage = Column(Integer)
    image_url = Column(String(500))
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    book_id = Column(Integer, ForeignKey("books.id"))
    pack_id = Column(Integer)
    limit_quantity = Column(Integer)
    sold_quantity = Column(Integer, nullable=False, default=0)
