"""CLI commands for the shopper's cart and checkout.

The ``--user`` option doubles as the cart session key, so each user has
their own cart file under the data directory.
"""

from __future__ import annotations

import click

from storefront.application.cart_store import CartStore
from storefront.application.dto import ShippingAddressSpec, ShippingServiceSpec
from storefront.domain.exceptions import DomainException
from storefront.domain.model.shipping import (
    PAYMENT_METHODS,
    SHIPPING_SERVICE_NAMES,
    ShippingService,
)
from storefront.domain.model.value_objects import Requester
from storefront.infrastructure.bootstrap import (
    cart_storage,
    checkout_handler,
    product_repository,
)
from storefront.infrastructure.cli.order_commands import display_order

user_option = click.option("--user", "user_id", required=True, help="Shopper / cart session ID.")
product_option = click.option("--product", "product_id", required=True, help="Product ID.")
size_option = click.option("--size", default=None, help="Product size.")


def _open_cart(user_id: str) -> CartStore:
    return CartStore.open(cart_storage(), user_id)


def _display_cart(cart: CartStore) -> None:
    lines = cart.lines
    if not lines:
        click.echo("Cart is empty.")
        return

    click.echo(f"    {'Product':<24} {'Size':>5} {'Qty':>5} {'Price':>16} {'Total':>18}")
    click.echo(f"    {'-'*72}")
    for line in lines:
        mark = "[x]" if line.selected else "[ ]"
        click.echo(
            f"{mark} {line.name:<24} {line.size or '-':>5} {line.quantity:>5} "
            f"{str(line.price):>16} {str(line.line_total):>18}"
        )
    click.echo(f"    {'-'*72}")
    totals = cart.totals()
    click.echo(f"    {'All (' + str(totals.all.count) + ' units)':<52} {str(totals.all.total):>18}")
    click.echo(
        f"    {'Selected (' + str(totals.selected.count) + ' units)':<52} "
        f"{str(totals.selected.total):>18}"
    )


@click.command("add")
@user_option
@product_option
@click.option("--quantity", default=1, type=int, show_default=True, help="Units to add.")
@size_option
def cart_add(user_id: str, product_id: str, quantity: int, size: str | None) -> None:
    """Add a product to the cart (merges with the same size)."""
    try:
        product = product_repository().get_by_id(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    if product is None:
        raise click.ClickException(f"Product not found: {product_id}")

    cart = _open_cart(user_id)
    line = cart.add_line(product, quantity, size)
    click.echo(f"{line.name} (size {line.size or '-'}) x{line.quantity} in cart")


@click.command("remove")
@user_option
@product_option
@size_option
def cart_remove(user_id: str, product_id: str, size: str | None) -> None:
    """Remove a line from the cart."""
    cart = _open_cart(user_id)
    cart.remove_line(product_id, size)
    _display_cart(cart)


@click.command("update")
@user_option
@product_option
@size_option
@click.option("--quantity", required=True, type=int, help="New quantity (0 removes the line).")
def cart_update(user_id: str, product_id: str, size: str | None, quantity: int) -> None:
    """Set the quantity of a cart line."""
    cart = _open_cart(user_id)
    cart.update_quantity(product_id, size, quantity)
    _display_cart(cart)


@click.command("toggle")
@user_option
@product_option
@size_option
def cart_toggle(user_id: str, product_id: str, size: str | None) -> None:
    """Select or deselect one cart line for checkout."""
    cart = _open_cart(user_id)
    cart.toggle_select(product_id, size)
    _display_cart(cart)


@click.command("toggle-all")
@user_option
def cart_toggle_all(user_id: str) -> None:
    """Select every line, or deselect all if all are selected."""
    cart = _open_cart(user_id)
    cart.toggle_select_all()
    _display_cart(cart)


@click.command("show")
@user_option
def cart_show(user_id: str) -> None:
    """Show the cart with per-line selection and totals."""
    _display_cart(_open_cart(user_id))


@click.command("checkout")
@user_option
@click.option("--full-name", required=True, help="Recipient name.")
@click.option("--phone", required=True, help="Recipient phone.")
@click.option("--address", required=True, help="Street address.")
@click.option("--city", required=True, help="City.")
@click.option("--province", required=True, help="Province.")
@click.option("--postal-code", required=True, help="Postal code.")
@click.option(
    "--shipping",
    required=True,
    type=click.Choice(SHIPPING_SERVICE_NAMES, case_sensitive=False),
    help="Shipping service.",
)
@click.option(
    "--payment",
    required=True,
    type=click.Choice(PAYMENT_METHODS, case_sensitive=False),
    help="Payment method.",
)
def checkout(
    user_id: str,
    full_name: str,
    phone: str,
    address: str,
    city: str,
    province: str,
    postal_code: str,
    shipping: str,
    payment: str,
) -> None:
    """Place an order for the selected cart lines."""
    cart = _open_cart(user_id)
    service = ShippingService.lookup(shipping)

    try:
        dto = checkout_handler().handle(
            cart,
            Requester(user_id),
            ShippingAddressSpec(
                full_name=full_name,
                phone=phone,
                address=address,
                city=city,
                province=province,
                postal_code=postal_code,
            ),
            ShippingServiceSpec(
                name=service.name,
                cost=service.cost.amount,
                estimated_days=service.estimated_days,
            ),
            payment,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order placed! Order number: {dto.order_number}")
    click.echo()
    display_order(dto)
