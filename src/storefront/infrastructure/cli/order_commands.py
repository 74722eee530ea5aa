"""CLI commands for a shopper's own orders."""

from __future__ import annotations

from decimal import Decimal

import click

from storefront.application.dto import OrderDTO
from storefront.application.list_orders import ListOrdersHandler
from storefront.application.show_order import ShowOrderHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.model.value_objects import Money, Requester
from storefront.infrastructure.bootstrap import cancel_order_handler, order_repository


def fmt_money(amount: Decimal, currency: str) -> str:
    return str(Money(amount, currency))


def display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.order_number} (#{dto.id})  status={dto.status}")
    click.echo(f"Customer: {dto.user_id}")
    click.echo(f"Created:  {dto.created_at:%Y-%m-%d %H:%M %Z}")
    click.echo(
        f"Ship to:  {dto.shipping_address.full_name}, {dto.shipping_address.address}, "
        f"{dto.shipping_address.city} {dto.shipping_address.postal_code}"
    )
    click.echo(
        f"Shipping: {dto.shipping_service.name} ({dto.shipping_service.estimated_days})"
        f"   Payment: {dto.payment_method}"
    )
    click.echo()
    click.echo(f"  {'Product':<24} {'Size':>5} {'Qty':>5} {'Price':>16} {'Total':>18}")
    click.echo(f"  {'-'*72}")
    for item in dto.items:
        click.echo(
            f"  {item.name:<24} {item.size or '-':>5} {item.quantity:>5} "
            f"{fmt_money(item.price, dto.currency):>16} {fmt_money(item.line_total, dto.currency):>18}"
        )
    click.echo(f"  {'-'*72}")
    click.echo(f"  {'Items':<52} {fmt_money(dto.items_price, dto.currency):>18}")
    click.echo(f"  {'Shipping':<52} {fmt_money(dto.shipping_price, dto.currency):>18}")
    click.echo(f"  {'Order Total':<52} {fmt_money(dto.total_price, dto.currency):>18}")

    click.echo()
    click.echo("History:")
    for change in dto.status_history:
        click.echo(f"  {change.timestamp:%Y-%m-%d %H:%M}  {change.status:<10} {change.note}")
    if dto.cancel_reason:
        click.echo(f"Cancel reason: {dto.cancel_reason}")


def display_order_row(dto: OrderDTO) -> None:
    click.echo(
        f"{dto.order_number:<16} {dto.status:<10} {len(dto.items):>5} "
        f"{fmt_money(dto.total_price, dto.currency):>18}  {dto.created_at:%Y-%m-%d %H:%M}"
    )


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
@click.option("--user", "user_id", required=True, help="Requesting user ID.")
@click.option("--admin", is_flag=True, default=False, help="Request as an administrator.")
def order_show(order_id: int, user_id: str, admin: bool) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repo=order_repository())

    try:
        dto = handler.handle(order_id, Requester(user_id, is_admin=admin))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    display_order(dto)


@click.command("mine")
@click.option("--user", "user_id", required=True, help="User whose orders to list.")
def order_mine(user_id: str) -> None:
    """List your orders, newest first."""
    handler = ListOrdersHandler(order_repo=order_repository())

    try:
        orders = handler.for_user(user_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'Order':<16} {'Status':<10} {'Lines':>5} {'Total':>18}  Created")
    click.echo("-" * 70)
    for dto in orders:
        display_order_row(dto)


@click.command("cancel")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to cancel.")
@click.option("--user", "user_id", required=True, help="Requesting user ID.")
@click.option("--reason", default=None, help="Why the order is cancelled.")
@click.option("--admin", is_flag=True, default=False, help="Request as an administrator.")
def order_cancel(order_id: int, user_id: str, reason: str | None, admin: bool) -> None:
    """Cancel a pending or confirmed order."""
    handler = cancel_order_handler()

    try:
        dto = handler.handle(order_id, Requester(user_id, is_admin=admin), reason)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.order_number} cancelled: {dto.cancel_reason}")
