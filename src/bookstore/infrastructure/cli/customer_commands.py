"""CLI commands for customers."""

from __future__ import annotations

import click

from bookstore.application.dto import CustomerDetails
from bookstore.application.register_customer import RegisterCustomerHandler
from bookstore.domain.exceptions import DomainException
from bookstore.infrastructure import bootstrap


def customer_options(func):
    """Shared customer detail options for ``register`` and ``order checkout``."""
    options = [
        click.option("--first-name", required=True),
        click.option("--last-name", required=True),
        click.option("--email", required=True),
        click.option("--phone", "phone_number", required=True),
        click.option("--address", required=True),
        click.option("--city", default=None),
        click.option("--postal-code", default=None),
        click.option("--country", default=None),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def details_from(kwargs: dict) -> CustomerDetails:
    return CustomerDetails(
        first_name=kwargs.pop("first_name"),
        last_name=kwargs.pop("last_name"),
        email=kwargs.pop("email"),
        phone_number=kwargs.pop("phone_number"),
        address=kwargs.pop("address"),
        city=kwargs.pop("city"),
        postal_code=kwargs.pop("postal_code"),
        country=kwargs.pop("country"),
    )


@click.command("register")
@customer_options
def customer_register(**kwargs) -> None:
    """Register a new customer."""
    handler = RegisterCustomerHandler(bootstrap.unit_of_work())

    try:
        dto = handler.handle(details_from(kwargs))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Customer #{dto.id} {dto.full_name} <{dto.email}> registered")
