"""CLI commands for daily offers."""

from __future__ import annotations

from datetime import datetime

import click

from bookstore.application.create_daily_offer import CreateDailyOfferHandler
from bookstore.application.deactivate_daily_offer import DeactivateDailyOfferHandler
from bookstore.application.dto import DailyOfferDTO, OfferSpec
from bookstore.application.list_daily_offers import ListDailyOffersHandler
from bookstore.application.record_offer_sale import RecordOfferSaleHandler
from bookstore.application.show_daily_offer import ShowDailyOfferHandler
from bookstore.application.update_daily_offer import UpdateDailyOfferHandler
from bookstore.domain.exceptions import DomainException
from bookstore.infrastructure import bootstrap

_DATE = click.DateTime(formats=["%Y-%m-%d"])


def offer_options(func):
    """Editable offer fields, shared by ``create`` and ``update``."""
    options = [
        click.option("--title", required=True),
        click.option("--description", required=True),
        click.option("--original-price", required=True, help="Regular price (e.g. 30.00)."),
        click.option("--offer-price", required=True, help="Promotional price."),
        click.option("--start", "start_date", required=True, type=_DATE, help="First day (YYYY-MM-DD)."),
        click.option("--end", "end_date", required=True, type=_DATE, help="Last day (YYYY-MM-DD)."),
        click.option("--book-id", type=int, default=None, help="Promoted book."),
        click.option("--pack-id", type=int, default=None, help="Promoted pack."),
        click.option("--limit", "limit_quantity", type=int, default=None, help="Units available."),
        click.option("--image-url", default=None),
        click.option("--active/--inactive", "is_active", default=True, show_default=True),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _spec(
    title: str,
    description: str,
    original_price: str,
    offer_price: str,
    start_date: datetime,
    end_date: datetime,
    book_id: int | None,
    pack_id: int | None,
    limit_quantity: int | None,
    image_url: str | None,
    is_active: bool,
) -> OfferSpec:
    return OfferSpec(
        title=title,
        description=description,
        original_price=original_price,
        offer_price=offer_price,
        start_date=start_date.date(),
        end_date=end_date.date(),
        book_id=book_id,
        pack_id=pack_id,
        limit_quantity=limit_quantity,
        image_url=image_url,
        is_active=is_active,
    )


def _display_offer(dto: DailyOfferDTO) -> None:
    click.echo(f"Offer #{dto.id} '{dto.title}'  ({'valid' if dto.is_valid else 'not valid'} today)")
    click.echo(f"  {dto.description}")
    discount = f"-{dto.discount_percentage}%" if dto.discount_percentage is not None else "n/a"
    click.echo(f"  Price:    {dto.offer_price} instead of {dto.original_price} ({discount})")
    click.echo(f"  Runs:     {dto.start_date} to {dto.end_date}{'' if dto.is_active else ' [inactive]'}")
    if dto.promoted:
        click.echo(f"  Promotes: {dto.promoted}")
    limit = dto.limit_quantity if dto.limit_quantity is not None else "unlimited"
    click.echo(f"  Sold:     {dto.sold_quantity} / {limit}")


@click.command("create")
@offer_options
def offer_create(**kwargs) -> None:
    """Create a daily offer."""
    handler = CreateDailyOfferHandler(bootstrap.unit_of_work())

    try:
        dto = handler.handle(_spec(**kwargs))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_offer(dto)


@click.command("update")
@click.option("--id", "offer_id", required=True, type=int, help="Offer ID.")
@offer_options
def offer_update(offer_id: int, **kwargs) -> None:
    """Replace an offer's details (its sales count is kept)."""
    handler = UpdateDailyOfferHandler(bootstrap.unit_of_work())

    try:
        dto = handler.handle(offer_id, _spec(**kwargs))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_offer(dto)


@click.command("show")
@click.option("--id", "offer_id", required=True, type=int, help="Offer ID.")
def offer_show(offer_id: int) -> None:
    """Show an offer."""
    handler = ShowDailyOfferHandler(bootstrap.unit_of_work())

    try:
        dto = handler.handle(offer_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_offer(dto)


@click.command("list")
@click.option("--current", is_flag=True, default=False, help="Only offers valid today.")
@click.option("--all", "show_all", is_flag=True, default=False, help="Include inactive offers.")
@click.option("--book-id", type=int, default=None, help="Active offers for this book.")
@click.option("--pack-id", type=int, default=None, help="Active offers for this pack.")
def offer_list(current: bool, show_all: bool, book_id: int | None, pack_id: int | None) -> None:
    """List daily offers (active ones by default)."""
    handler = ListDailyOffersHandler(bootstrap.unit_of_work())

    if current:
        offers = handler.current()
    elif show_all:
        offers = handler.all()
    elif book_id is not None:
        offers = handler.for_book(book_id)
    elif pack_id is not None:
        offers = handler.for_pack(pack_id)
    else:
        offers = handler.active()

    if not offers:
        click.echo("No offers found.")
        return

    click.echo(f"{'ID':<6} {'Title':<30} {'Price':>10} {'Disc':>5} {'Sold':>10}  Valid")
    click.echo("-" * 72)
    for o in offers:
        limit = o.limit_quantity if o.limit_quantity is not None else "-"
        sold = f"{o.sold_quantity}/{limit}"
        disc = f"{o.discount_percentage}%" if o.discount_percentage is not None else "-"
        click.echo(
            f"{o.id:<6} {o.title[:30]:<30} {o.offer_price:>10} {disc:>5} {sold:>10}  "
            f"{'yes' if o.is_valid else 'no'}"
        )


@click.command("sale")
@click.option("--id", "offer_id", required=True, type=int, help="Offer ID.")
@click.option("--quantity", default=1, show_default=True, type=int)
def offer_sale(offer_id: int, quantity: int) -> None:
    """Record units sold under an offer."""
    handler = RecordOfferSaleHandler(bootstrap.unit_of_work())

    try:
        dto = handler.handle(offer_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    limit = dto.limit_quantity if dto.limit_quantity is not None else "unlimited"
    click.echo(f"Offer #{dto.id}: {dto.sold_quantity} / {limit} sold.")


@click.command("deactivate")
@click.option("--id", "offer_id", required=True, type=int, help="Offer ID.")
def offer_deactivate(offer_id: int) -> None:
    """Switch an offer off (kept for history)."""
    handler = DeactivateDailyOfferHandler(bootstrap.unit_of_work())

    try:
        handler.handle(offer_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Offer #{offer_id} deactivated.")
