"""CLI commands for the order back-office."""

from __future__ import annotations

import click

from storefront.domain.exceptions import DomainException
from storefront.domain.model.order import OrderStatus
from storefront.domain.model.value_objects import Requester
from storefront.infrastructure.bootstrap import order_administration
from storefront.infrastructure.cli.order_commands import (
    display_order,
    display_order_row,
    fmt_money,
)
from storefront.infrastructure.config import get_settings

admin_user_option = click.option(
    "--user", "user_id", default="admin", show_default=True, help="Administrator ID."
)
admin_flag = click.option(
    "--admin", is_flag=True, default=False, help="Confirm the caller is an administrator."
)


@click.command("orders")
@click.option("--status", "status_filter", default=None, help="Only orders with this status.")
@click.option("--page", default=1, type=int, show_default=True, help="Page number.")
@click.option("--limit", default=None, type=int, help="Orders per page.")
@admin_user_option
@admin_flag
def admin_orders(
    status_filter: str | None,
    page: int,
    limit: int | None,
    user_id: str,
    admin: bool,
) -> None:
    """List all orders, newest first."""
    try:
        result = order_administration().list_all(
            Requester(user_id, is_admin=admin),
            status=status_filter,
            page=page,
            page_size=limit or get_settings().default_page_size,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Page {result.current_page}/{max(result.total_pages, 1)} "
        f"({result.total_orders} orders)"
    )
    click.echo(f"{'Order':<16} {'Status':<10} {'Lines':>5} {'Total':>18}  Created")
    click.echo("-" * 70)
    for dto in result.orders:
        display_order_row(dto)


@click.command("status")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to update.")
@click.option(
    "--status",
    "new_status",
    required=True,
    type=click.Choice([s.value for s in OrderStatus], case_sensitive=False),
    help="New status.",
)
@click.option("--note", default=None, help="History note (defaults per status).")
@admin_user_option
@admin_flag
def admin_status(order_id: int, new_status: str, note: str | None, user_id: str, admin: bool) -> None:
    """Move an order along its status lifecycle."""
    try:
        dto = order_administration().update_status(
            Requester(user_id, is_admin=admin), order_id, new_status, note
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.order_number} is now {dto.status}.")
    click.echo()
    display_order(dto)


@click.command("stats")
@admin_user_option
@admin_flag
def admin_stats(user_id: str, admin: bool) -> None:
    """Show order counts per status and completed revenue."""
    try:
        stats = order_administration().stats(Requester(user_id, is_admin=admin))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Total orders: {stats.total_orders}")
    for status, count in stats.status_counts.items():
        click.echo(f"  {status:<10} {count:>6}")
    currency = stats.recent_orders[0].currency if stats.recent_orders else "IDR"
    click.echo(f"Revenue (completed): {fmt_money(stats.total_revenue, currency)}")

    if stats.recent_orders:
        click.echo()
        click.echo("Recent orders:")
        for dto in stats.recent_orders:
            display_order_row(dto)
