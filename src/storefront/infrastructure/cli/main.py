import click

from storefront.infrastructure.bootstrap import configure_logging
from storefront.infrastructure.cli.admin_commands import (
    admin_orders,
    admin_stats,
    admin_status,
)
from storefront.infrastructure.cli.cart_commands import (
    cart_add,
    cart_remove,
    cart_show,
    cart_toggle,
    cart_toggle_all,
    cart_update,
    checkout,
)
from storefront.infrastructure.cli.order_commands import order_cancel, order_mine, order_show
from storefront.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_update,
)
from storefront.infrastructure.config import get_settings


@click.group()
def cli() -> None:
    """Storefront — cart, checkout and order back-office"""
    configure_logging()


@cli.group()
def product() -> None:
    """Manage the product catalog."""


@cli.group()
def cart() -> None:
    """Manage your cart."""


@cli.group()
def order() -> None:
    """View and cancel your orders."""


@cli.group()
def admin() -> None:
    """Order back-office (admin only)."""


@cli.command("serve")
@click.option("--host", default=None, help="Bind address (defaults to settings).")
@click.option("--port", default=None, type=int, help="Port (defaults to settings).")
def serve(host: str | None, port: int | None) -> None:
    """Run the HTTP API."""
    import uvicorn

    from storefront.infrastructure.api.app import create_app

    settings = get_settings()
    uvicorn.run(
        create_app(settings),
        host=host or settings.api_host,
        port=port or settings.api_port,
        log_level=settings.log_level.lower(),
    )


# Register subcommands
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_update)
cart.add_command(cart_add)
cart.add_command(cart_remove)
cart.add_command(cart_update)
cart.add_command(cart_toggle)
cart.add_command(cart_toggle_all)
cart.add_command(cart_show)
cli.add_command(checkout)
order.add_command(order_show)
order.add_command(order_mine)
order.add_command(order_cancel)
admin.add_command(admin_orders)
admin.add_command(admin_status)
admin.add_command(admin_stats)
