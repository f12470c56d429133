"""CLI commands for the Order aggregate."""

from __future__ import annotations

from datetime import datetime, time, timezone

import click

from bookstore.application.cancel_order import CancelOrderHandler
from bookstore.application.checkout import CheckoutHandler
from bookstore.application.create_order import CreateOrderHandler
from bookstore.application.dto import OrderDTO, OrderItemSpec
from bookstore.application.list_orders import ListOrdersHandler
from bookstore.application.order_statistics import OrderStatisticsHandler
from bookstore.application.show_order import ShowOrderHandler
from bookstore.application.update_order_status import UpdateOrderStatusHandler
from bookstore.application.update_payment_status import UpdatePaymentStatusHandler
from bookstore.domain.exceptions import DomainException
from bookstore.domain.model.order import OrderStatus, PaymentStatus
from bookstore.infrastructure import bootstrap
from bookstore.infrastructure.cli.customer_commands import customer_options, details_from

_ORDER_STATUSES = click.Choice([s.value for s in OrderStatus], case_sensitive=False)
_PAYMENT_STATUSES = click.Choice([s.value for s in PaymentStatus], case_sensitive=False)


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse '12:3,7:1' (book ID:quantity) into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'BookId:Quantity'."
            )
        book_str, qty_str = pair.split(":", 1)
        try:
            specs.append(OrderItemSpec(book_id=int(book_str), quantity=int(qty_str)))
        except ValueError:
            raise click.BadParameter(
                f"Invalid item '{pair}'. Book ID and quantity must be integers."
            )
    return specs


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.order_number} #{dto.id}  (status={dto.status}, payment={dto.payment_status})")
    click.echo(f"Customer: #{dto.customer_id}")
    click.echo(f"Created:  {dto.created_at}")
    if dto.shipped_at:
        click.echo(f"Shipped:  {dto.shipped_at}")
    if dto.delivered_at:
        click.echo(f"Delivered: {dto.delivered_at}")
    if dto.shipping_address:
        click.echo(f"Ship to:  {dto.shipping_address}")
    click.echo()
    click.echo(f"  {'Book':<30} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*57}")
    for item in dto.items:
        click.echo(
            f"  {item.book_title[:30]:<30} {item.quantity:>5} {item.price:>10} {item.subtotal:>10}"
        )
    click.echo(f"  {'-'*57}")
    click.echo(f"  {'Order Total':<37} {dto.total:>20}")
    if dto.notes:
        click.echo()
        click.echo("Notes:")
        for note in dto.notes.splitlines():
            click.echo(f"  {note}")


def _display_summary(orders: list[OrderDTO]) -> None:
    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<6} {'Number':<25} {'Status':<12} {'Payment':<10} {'Total':>10}")
    click.echo("-" * 67)
    for o in orders:
        click.echo(
            f"{o.id:<6} {o.order_number:<25} {o.status:<12} {o.payment_status:<10} {o.total:>10}"
        )


@click.command("create")
@click.option("--customer-id", required=True, type=int, help="Existing customer ID.")
@click.option("--items", required=True, help="Items as 'BookId:Qty,BookId:Qty'.")
@click.option("--shipping-address", default=None, help="Defaults to the customer's address.")
@click.option("--notes", default=None)
def order_create(customer_id: int, items: str, shipping_address: str | None, notes: str | None) -> None:
    """Place an order for an existing customer."""
    specs = _parse_items(items)
    handler = CreateOrderHandler(bootstrap.unit_of_work())

    try:
        dto = handler.handle(
            customer_id=customer_id,
            item_specs=specs,
            shipping_address=shipping_address,
            notes=notes,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.order_number} created  (status={dto.status})")
    click.echo()
    _display_order(dto)


@click.command("checkout")
@customer_options
@click.option("--items", required=True, help="Items as 'BookId:Qty,BookId:Qty'.")
@click.option("--shipping-address", default=None, help="Defaults to the customer's address.")
@click.option("--notes", default=None)
def order_checkout(items: str, shipping_address: str | None, notes: str | None, **kwargs) -> None:
    """Place an order, registering the customer by e-mail if new."""
    specs = _parse_items(items)
    handler = CheckoutHandler(bootstrap.unit_of_work())

    try:
        dto = handler.handle(
            customer=details_from(kwargs),
            item_specs=specs,
            shipping_address=shipping_address,
            notes=notes,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.order_number} created  (status={dto.status})")
    click.echo()
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", type=int, default=None, help="Order ID to display.")
@click.option("--number", "order_number", default=None, help="Order number to display.")
def order_show(order_id: int | None, order_number: str | None) -> None:
    """Show details of an existing order."""
    if (order_id is None) == (order_number is None):
        raise click.UsageError("Give exactly one of --id or --number.")

    handler = ShowOrderHandler(bootstrap.unit_of_work())

    try:
        if order_id is not None:
            dto = handler.handle(order_id)
        else:
            dto = handler.handle_by_number(order_number)  # type: ignore[arg-type]
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option("--status", type=_ORDER_STATUSES, default=None, help="Only orders in this status.")
@click.option("--payment-status", type=_PAYMENT_STATUSES, default=None, help="Only orders with this payment status.")
@click.option("--customer-id", type=int, default=None, help="Only this customer's orders.")
@click.option("--pending", is_flag=True, default=False, help="Orders awaiting processing.")
@click.option("--search", "keyword", default=None, help="Match order number or customer name.")
@click.option("--limit", type=int, default=10, show_default=True, help="Most recent N orders.")
def order_list(
    status: str | None,
    payment_status: str | None,
    customer_id: int | None,
    pending: bool,
    keyword: str | None,
    limit: int,
) -> None:
    """List orders (most recent by default)."""
    handler = ListOrdersHandler(bootstrap.unit_of_work())

    try:
        if status is not None:
            orders = handler.by_status(OrderStatus(status.upper()))
        elif payment_status is not None:
            orders = handler.by_payment_status(PaymentStatus(payment_status.upper()))
        elif customer_id is not None:
            orders = handler.by_customer(customer_id)
        elif pending:
            orders = handler.pending()
        elif keyword is not None:
            orders = handler.search(keyword)
        else:
            orders = handler.recent(limit)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_summary(orders)


@click.command("status")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--to", "new_status", required=True, type=_ORDER_STATUSES, help="New status.")
def order_status(order_id: int, new_status: str) -> None:
    """Move an order to a new status."""
    handler = UpdateOrderStatusHandler(bootstrap.unit_of_work())

    try:
        dto = handler.handle(order_id, OrderStatus(new_status.upper()))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.order_number} is now {dto.status}.")


@click.command("pay")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--status", "payment_status", default="PAID", show_default=True, type=_PAYMENT_STATUSES)
def order_pay(order_id: int, payment_status: str) -> None:
    """Record a payment outcome for an order."""
    handler = UpdatePaymentStatusHandler(bootstrap.unit_of_work())

    try:
        dto = handler.handle(order_id, PaymentStatus(payment_status.upper()))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.order_number}: payment={dto.payment_status}, status={dto.status}.")


@click.command("cancel")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to cancel.")
@click.option("--reason", default=None, help="Recorded in the order notes.")
def order_cancel(order_id: int, reason: str | None) -> None:
    """Cancel an order (returns its books to stock, refunds payment)."""
    handler = CancelOrderHandler(bootstrap.unit_of_work())

    try:
        dto = handler.handle(order_id, reason)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.order_number} cancelled — stock restored.")


@click.command("stats")
@click.option("--from", "start", required=True, type=click.DateTime(formats=["%Y-%m-%d"]))
@click.option("--to", "end", required=True, type=click.DateTime(formats=["%Y-%m-%d"]))
def order_stats(start: datetime, end: datetime) -> None:
    """Sales statistics for orders placed between two dates (inclusive)."""
    handler = OrderStatisticsHandler(bootstrap.unit_of_work())

    try:
        stats = handler.handle(
            datetime.combine(start.date(), time.min, tzinfo=timezone.utc),
            datetime.combine(end.date(), time.max, tzinfo=timezone.utc),
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Orders:          {stats.total_orders}")
    click.echo(f"Delivered:       {stats.completed_orders}")
    click.echo(f"Revenue:         {stats.total_revenue}")
    click.echo(f"Average order:   {stats.average_order_value}")
