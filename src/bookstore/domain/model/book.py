"""Book aggregate.

Books live independently of orders. Prices change and stock moves up and
down; existing orders are unaffected because their lines keep a snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass

from bookstore.domain.exceptions import InsufficientStockError, ValidationError
from bookstore.domain.model.value_objects import Money


@dataclass
class Book:
    """A book in the catalog.

    Invariant: ``stock_quantity`` is never negative.
    """

    id: int | None
    isbn: str
    title: str
    author: str
    price: Money
    stock_quantity: int = 0

    def __post_init__(self) -> None:
        if self.stock_quantity < 0:
            raise ValidationError("Stock quantity cannot be negative")

    @staticmethod
    def create(
        isbn: str,
        title: str,
        author: str,
        price: Money,
        stock_quantity: int = 0,
    ) -> Book:
        if not isbn or not isbn.strip():
            raise ValidationError("ISBN is required")
        if not title or not title.strip():
            raise ValidationError("Book title is required")
        if not author or not author.strip():
            raise ValidationError("Book author is required")
        return Book(
            id=None,
            isbn=isbn.strip(),
            title=title.strip(),
            author=author.strip(),
            price=price,
            stock_quantity=stock_quantity,
        )

    def update_price(self, new_price: Money) -> None:
        """Change the book price.

        This does NOT affect any existing orders because order lines
        capture a price snapshot at creation time.
        """
        self.price = new_price

    def reduce_stock(self, quantity: int) -> None:
        if quantity <= 0:
            raise ValidationError("Stock reduction must be positive")
        if quantity > self.stock_quantity:
            raise InsufficientStockError(
                f"Insufficient stock for '{self.title}' "
                f"(need {quantity}, have {self.stock_quantity})"
            )
        self.stock_quantity -= quantity

    def restore_stock(self, quantity: int) -> None:
        if quantity <= 0:
            raise ValidationError("Stock restoration must be positive")
        self.stock_quantity += quantity

    def set_stock(self, quantity: int) -> None:
        if quantity < 0:
            raise ValidationError("Stock quantity cannot be negative")
        self.stock_quantity = quantity
