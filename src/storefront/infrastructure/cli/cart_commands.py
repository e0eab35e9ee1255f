"""CLI commands for a shopper's cart.

Each invocation opens the session, which re-clamps the saved cart against
the current catalog before the command runs.
"""

from __future__ import annotations

import click

from storefront.application.dto import CartDTO
from storefront.domain.exceptions import DomainException
from storefront.domain.model.value_objects import VariantSelection
from storefront.infrastructure.bootstrap import shopper_session
from storefront.infrastructure.cli.options import fail, parse_selection
from storefront.infrastructure.config import Settings
from storefront.infrastructure.logging import bind_session

_session_option = click.option("--session", "session_id", required=True, help="Shopper session ID.")
_product_option = click.option("--product", "product_id", required=True, help="Product ID.")
_variant_option = click.option(
    "--variant", "variants", multiple=True, help="Chosen option as 'axis=value'. Repeatable."
)


def _display_cart(dto: CartDTO) -> None:
    if not dto.lines:
        click.echo("Cart is empty.")
        return

    click.echo(f"  {'Product':<20} {'Options':<18} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*66}")
    for line in dto.lines:
        name = line.product_name if line.available else f"{line.product_name}*"
        click.echo(
            f"  {name:<20} {line.variants:<18} {line.quantity:>5} "
            f"{line.unit_price:>10} {line.line_total:>10}"
        )
    click.echo(f"  {'-'*66}")
    click.echo(f"  {'Subtotal (' + str(dto.item_count) + ' items)':<45} {dto.subtotal:>21}")


@click.command("add")
@_session_option
@_product_option
@click.option("--quantity", default=1, type=int, help="Units to add.")
@_variant_option
@click.pass_obj
def cart_add(
    settings: Settings,
    session_id: str,
    product_id: str,
    quantity: int,
    variants: tuple[str, ...],
) -> None:
    """Add a product to the cart (capped at available stock)."""
    bind_session(session_id)
    try:
        with shopper_session(settings, session_id) as session:
            line = session.store.add_to_cart(product_id, quantity, parse_selection(variants))
    except DomainException as exc:
        raise fail(exc)

    if line is None:
        click.echo(f"Product #{product_id} is out of stock; nothing added.")
    else:
        click.echo(f"Cart now holds {line.quantity} x product #{product_id}.")


@click.command("update")
@_session_option
@_product_option
@click.option("--quantity", required=True, help="New quantity; 0 or less removes the line.")
@_variant_option
@click.pass_obj
def cart_update(
    settings: Settings,
    session_id: str,
    product_id: str,
    quantity: str,
    variants: tuple[str, ...],
) -> None:
    """Set the quantity of a cart line."""
    bind_session(session_id)
    key = (product_id, VariantSelection.of(parse_selection(variants)))
    try:
        with shopper_session(settings, session_id) as session:
            line = session.store.update_cart_quantity(key, quantity)
    except DomainException as exc:
        raise fail(exc)

    if line is None:
        click.echo(f"Product #{product_id} removed from cart.")
    else:
        click.echo(f"Cart now holds {line.quantity} x product #{product_id}.")


@click.command("remove")
@_session_option
@_product_option
@_variant_option
@click.pass_obj
def cart_remove(
    settings: Settings, session_id: str, product_id: str, variants: tuple[str, ...]
) -> None:
    """Remove a line from the cart."""
    bind_session(session_id)
    key = (product_id, VariantSelection.of(parse_selection(variants)))
    try:
        with shopper_session(settings, session_id) as session:
            session.store.remove_from_cart(key)
    except DomainException as exc:
        raise fail(exc)

    click.echo(f"Product #{product_id} removed from cart.")


@click.command("show")
@_session_option
@click.pass_obj
def cart_show(settings: Settings, session_id: str) -> None:
    """Show the cart at current catalog prices."""
    bind_session(session_id)
    try:
        with shopper_session(settings, session_id) as session:
            dto = session.summary()
    except DomainException as exc:
        raise fail(exc)

    _display_cart(dto)


@click.command("clear")
@_session_option
@click.pass_obj
def cart_clear(settings: Settings, session_id: str) -> None:
    """Empty the cart."""
    bind_session(session_id)
    try:
        with shopper_session(settings, session_id) as session:
            session.store.clear()
    except DomainException as exc:
        raise fail(exc)

    click.echo("Cart cleared.")
