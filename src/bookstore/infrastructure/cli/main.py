import click

from bookstore.infrastructure import bootstrap
from bookstore.infrastructure.cli.book_commands import (
    book_add,
    book_list,
    book_low_stock,
    book_set_stock,
    book_update_price,
)
from bookstore.infrastructure.cli.customer_commands import customer_register
from bookstore.infrastructure.cli.offer_commands import (
    offer_create,
    offer_deactivate,
    offer_list,
    offer_sale,
    offer_show,
    offer_update,
)
from bookstore.infrastructure.cli.order_commands import (
    order_cancel,
    order_checkout,
    order_create,
    order_list,
    order_pay,
    order_show,
    order_stats,
    order_status,
)
from bookstore.infrastructure.logging import add_context, clear_context, configure_logging


@click.group()
@click.option("--log-level", default=None, help="Override the log level (e.g. DEBUG).")
def cli(log_level: str | None) -> None:
    """Bookstore — order processing"""
    config = bootstrap.settings()
    configure_logging(config.environment, log_level or config.log_level)
    clear_context()
    add_context(environment=config.environment)


def _bind_command(ctx: click.Context) -> None:
    add_context(command=f"{ctx.info_name} {ctx.invoked_subcommand}")


@cli.group()
@click.pass_context
def order(ctx: click.Context) -> None:
    """Place and manage orders."""
    _bind_command(ctx)


@cli.group()
@click.pass_context
def offer(ctx: click.Context) -> None:
    """Manage daily offers."""
    _bind_command(ctx)


@cli.group()
@click.pass_context
def book(ctx: click.Context) -> None:
    """Manage the book catalog."""
    _bind_command(ctx)


@cli.group()
@click.pass_context
def customer(ctx: click.Context) -> None:
    """Manage customers."""
    _bind_command(ctx)


# Register subcommands
order.add_command(order_cancel)
order.add_command(order_checkout)
order.add_command(order_create)
order.add_command(order_list)
order.add_command(order_pay)
order.add_command(order_show)
order.add_command(order_stats)
order.add_command(order_status)
offer.add_command(offer_create)
offer.add_command(offer_deactivate)
offer.add_command(offer_list)
offer.add_command(offer_sale)
offer.add_command(offer_show)
offer.add_command(offer_update)
book.add_command(book_add)
book.add_command(book_list)
book.add_command(book_low_stock)
book.add_command(book_set_stock)
book.add_command(book_update_price)
customer.add_command(customer_register)
