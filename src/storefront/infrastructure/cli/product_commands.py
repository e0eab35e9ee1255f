"""CLI commands for the Product aggregate (admin side)."""

from __future__ import annotations

import click

from storefront.application.add_product import AddProductHandler
from storefront.application.delete_product import DeleteProductHandler
from storefront.application.update_product import UpdateProductHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import product_repository
from storefront.infrastructure.cli.options import fail, parse_variant_groups
from storefront.infrastructure.config import Settings


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--stock", default=0, type=click.IntRange(min=0), help="Units in stock.")
@click.option("--category", default="", help="Category.")
@click.option("--variants", multiple=True, help="Option group as 'axis=value|value'. Repeatable.")
@click.option("--image", default="", help="Image URL or path.")
@click.option("--description", default="", help="Description.")
@click.pass_obj
def product_add(
    settings: Settings,
    name: str,
    price: str,
    stock: int,
    category: str,
    variants: tuple[str, ...],
    image: str,
    description: str,
) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(product_repo=product_repository(settings))

    try:
        product = handler.handle(
            name=name,
            price=price,
            stock=stock,
            category=category,
            variants=parse_variant_groups(variants),
            image=image,
            description=description,
        )
    except DomainException as exc:
        raise fail(exc)

    click.echo(
        f"Product #{product.id} '{product.name}' added at {product.price} "
        f"({product.stock} in stock)"
    )


@click.command("list")
@click.pass_obj
def product_list(settings: Settings) -> None:
    """List all products in the catalog."""
    try:
        products = product_repository(settings).list_all()
    except DomainException as exc:
        raise fail(exc)

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Category':<12} {'Price':>10} {'Stock':>7}")
    click.echo("-" * 59)
    for p in products:
        click.echo(
            f"{p.id:<6} {p.name:<20} {p.category:<12} {str(p.price):>10} {p.stock:>7}"
        )
        for axis, options in p.variants.items():
            click.echo(f"{'':<6} {axis}: {', '.join(options)}")


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--stock", default=None, type=click.IntRange(min=0), help="New stock level.")
@click.option("--name", default=None, help="New name.")
@click.option("--category", default=None, help="New category.")
@click.option("--variants", multiple=True, help="Replace option groups ('axis=value|value').")
@click.option("--image", default=None, help="New image.")
@click.option("--description", default=None, help="New description.")
@click.pass_obj
def product_update(
    settings: Settings,
    product_id: str,
    price: str | None,
    stock: int | None,
    name: str | None,
    category: str | None,
    variants: tuple[str, ...],
    image: str | None,
    description: str | None,
) -> None:
    """Update a product's details, price or stock."""
    handler = UpdateProductHandler(product_repo=product_repository(settings))

    try:
        product = handler.handle(
            product_id,
            price=price,
            stock=stock,
            name=name,
            category=category,
            variants=parse_variant_groups(variants) if variants else None,
            image=image,
            description=description,
        )
    except DomainException as exc:
        raise fail(exc)

    click.echo(
        f"Product #{product.id} '{product.name}' updated: "
        f"{product.price}, {product.stock} in stock"
    )


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.pass_obj
def product_delete(settings: Settings, product_id: str) -> None:
    """Remove a product from the catalog."""
    handler = DeleteProductHandler(product_repo=product_repository(settings))

    try:
        handler.handle(product_id)
    except DomainException as exc:
        raise fail(exc)

    click.echo(f"Product #{product_id} deleted.")
