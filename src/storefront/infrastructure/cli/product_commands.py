"""CLI commands for seeding and browsing the product catalog."""

from __future__ import annotations

import click

from storefront.application.add_product import AddProductHandler
from storefront.application.update_product import UpdateProductPriceHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import product_repository


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--brand", required=True, help="Brand name.")
@click.option("--price", required=True, help="Price (e.g. 250000).")
@click.option("--sizes", default="", help="Comma-separated sizes, first is the default.")
@click.option("--image", default="", help="Image URL.")
@click.option("--description", default="", help="Short description.")
def product_add(
    name: str,
    brand: str,
    price: str,
    sizes: str,
    image: str,
    description: str,
) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(product_repo=product_repository())

    try:
        product = handler.handle(
            name=name,
            brand=brand,
            price=price,
            sizes=sizes.split(",") if sizes else [],
            image=image,
            description=description,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} '{product.name}' ({product.brand}) added at {product.price}")


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""
    try:
        products = product_repository().list_all()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<24} {'Brand':<14} {'Price':>16}  Sizes")
    click.echo("-" * 72)
    for p in products:
        click.echo(
            f"{p.id:<6} {p.name:<24} {p.brand:<14} {str(p.price):>16}  {', '.join(p.sizes) or '-'}"
        )


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--price", required=True, help="New price (e.g. 275000).")
def product_update(product_id: str, price: str) -> None:
    """Update a product's price (placed orders keep their price)."""
    handler = UpdateProductPriceHandler(product_repo=product_repository())

    try:
        product = handler.handle(product_id=product_id, new_price=price)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} price updated to {product.price}")
