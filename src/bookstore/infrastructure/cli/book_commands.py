"""CLI commands for the Book aggregate."""

from __future__ import annotations

import click

from bookstore.application.add_book import AddBookHandler
from bookstore.application.dto import BookDTO
from bookstore.application.set_stock import SetStockHandler
from bookstore.application.show_books import ShowBooksHandler
from bookstore.application.update_book_price import UpdateBookPriceHandler
from bookstore.domain.exceptions import DomainException
from bookstore.infrastructure import bootstrap


def _display_books(books: list[BookDTO]) -> None:
    if not books:
        click.echo("No books found.")
        return

    click.echo(f"{'ID':<6} {'ISBN':<15} {'Title':<30} {'Price':>10} {'Stock':>6}")
    click.echo("-" * 71)
    for b in books:
        click.echo(
            f"{b.id:<6} {b.isbn:<15} {b.title[:30]:<30} {b.price:>10} {b.stock_quantity:>6}"
        )


@click.command("add")
@click.option("--isbn", required=True, help="ISBN (unique).")
@click.option("--title", required=True)
@click.option("--author", required=True)
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--stock", default=0, type=int, show_default=True, help="Initial stock.")
def book_add(isbn: str, title: str, author: str, price: str, stock: int) -> None:
    """Add a new book to the catalog."""
    handler = AddBookHandler(bootstrap.unit_of_work())

    try:
        dto = handler.handle(isbn=isbn, title=title, author=author, price=price, stock_quantity=stock)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Book #{dto.id} '{dto.title}' added at {dto.price} ({dto.stock_quantity} in stock)")


@click.command("list")
def book_list() -> None:
    """List all books in the catalog."""
    _display_books(ShowBooksHandler(bootstrap.unit_of_work()).handle())


@click.command("low-stock")
@click.option("--threshold", default=None, type=int, help="Stock level to report at or below.")
def book_low_stock(threshold: int | None) -> None:
    """List books running out of stock."""
    if threshold is None:
        threshold = bootstrap.settings().low_stock_threshold
    handler = ShowBooksHandler(bootstrap.unit_of_work())

    try:
        books = handler.low_stock(threshold)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_books(books)


@click.command("update-price")
@click.option("--id", "book_id", required=True, type=int, help="Book ID.")
@click.option("--price", required=True, help="New price (e.g. 29.99).")
def book_update_price(book_id: int, price: str) -> None:
    """Update a book's price (existing orders keep theirs)."""
    handler = UpdateBookPriceHandler(bootstrap.unit_of_work())

    try:
        dto = handler.handle(book_id=book_id, new_price=price)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Book #{book_id} price updated to {dto.price}")


@click.command("set-stock")
@click.option("--id", "book_id", required=True, type=int, help="Book ID.")
@click.option("--quantity", required=True, type=int, help="Units in stock.")
def book_set_stock(book_id: int, quantity: int) -> None:
    """Set the stock level of a book."""
    handler = SetStockHandler(bootstrap.unit_of_work())

    try:
        handler.handle(book_id=book_id, quantity=quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Stock for book #{book_id} set to {quantity}")
