from __future__ import annotations

import dataclasses
from pathlib import Path

import click

from storefront.infrastructure.cli.cart_commands import (
    cart_add,
    cart_clear,
    cart_remove,
    cart_show,
    cart_update,
)
from storefront.infrastructure.cli.order_commands import checkout, order_show
from storefront.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_update,
)
from storefront.infrastructure.config import Settings
from storefront.infrastructure.logging import configure_logging


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding the JSON data files.",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log cart and checkout activity.")
@click.pass_context
def cli(ctx: click.Context, data_dir: Path | None, verbose: bool) -> None:
    """Storefront catalog, cart and checkout."""
    try:
        settings = Settings.from_env()
    except ValueError as exc:
        raise click.UsageError(str(exc))
    if data_dir is not None:
        settings = dataclasses.replace(settings, data_dir=data_dir)
    if verbose:
        settings = dataclasses.replace(settings, log_level="INFO")

    configure_logging(settings.log_level)
    ctx.obj = settings


@cli.group()
def product() -> None:
    """Manage the catalog (admin)."""


@cli.group()
def cart() -> None:
    """Manage a shopper's cart."""


@cli.group()
def order() -> None:
    """Look up placed orders."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_update)
cart.add_command(cart_add)
cart.add_command(cart_clear)
cart.add_command(cart_remove)
cart.add_command(cart_show)
cart.add_command(cart_update)
order.add_command(order_show)
cli.add_command(checkout)


if __name__ == "__main__":
    cli()
